"""Greedy ranked 1-to-1 selection"""

import logging
from typing import Set

from .models import SelectionType
from ..alignment import Alignment
from ..errors import ConfigurationError


class RankedSelector:
    """Strict greedy selector

    Walks the mappings at or above the threshold in ranking order and
    accepts one iff neither its source nor its target was claimed by an
    earlier accepted mapping. The result is a local-greedy (not globally
    optimal) 1-to-1 matching.
    """

    def __init__(self, selection_type: SelectionType = SelectionType.STRICT):
        selection_type = SelectionType.parse(selection_type)
        if selection_type is not SelectionType.STRICT:
            raise ConfigurationError(
                f"RankedSelector only supports strict selection, got {selection_type.value}"
            )
        self.selection_type = selection_type
        self.logger = logging.getLogger(__name__)

    def select(self, alignment: Alignment, threshold: float) -> Alignment:
        selected = Alignment()
        claimed_sources: Set[int] = set()
        claimed_targets: Set[int] = set()
        for m in alignment:
            # Ranking order is descending, nothing below can pass either
            if m.similarity < threshold:
                break
            if m.source_id in claimed_sources or m.target_id in claimed_targets:
                continue
            claimed_sources.add(m.source_id)
            claimed_targets.add(m.target_id)
            selected.add(m)
        self.logger.debug(
            f"Ranked selection kept {len(selected)}/{len(alignment)} mappings "
            f"at threshold {threshold:.3f}"
        )
        return selected
