"""Run filters"""

import logging
from typing import Iterable

from .base import RunFilter


class ObsoleteFilter(RunFilter):
    """Drops mappings that involve an obsolete entity"""

    def __init__(self, obsolete_ids: Iterable[int]):
        self.obsolete_ids = frozenset(obsolete_ids)
        self.logger = logging.getLogger(__name__)

    def filter(self, run) -> None:
        alignment = run.alignment
        doomed = [
            m
            for m in alignment
            if m.source_id in self.obsolete_ids or m.target_id in self.obsolete_ids
        ]
        for m in doomed:
            alignment.remove(m.source_id, m.target_id)
        self.logger.info(f"Removed {len(doomed)} mappings with obsolete entities")
