"""Collaborator interfaces for the matching pipeline

Defines the contracts the orchestrator consumes. Concrete similarity
signals live outside this package; ``matchers`` holds reference
implementations used by the CLI and tests.
"""

from abc import ABC, abstractmethod
import logging

from ..alignment import Alignment


class Matcher(ABC):
    """Producer of candidate correspondences for one similarity signal

    Responsibilities:
    - ``match``: compute candidates from scratch
    - ``extend_alignment``: propose candidates that extend an existing
      alignment (by default, candidates whose entities it leaves unmapped)
    """

    def __init__(self, name: str = None, **config):
        self.name = name or self.__class__.__name__
        self.config = config
        self.logger = logging.getLogger(f"{__name__}.{self.name}")

    @abstractmethod
    def match(self, threshold: float) -> Alignment:
        raise NotImplementedError

    def extend_alignment(self, alignment: Alignment, threshold: float) -> Alignment:
        mapped_sources = alignment.source_ids()
        mapped_targets = alignment.target_ids()
        return Alignment(
            m
            for m in self.match(threshold)
            if m.source_id not in mapped_sources and m.target_id not in mapped_targets
        )


class Rematcher(ABC):
    """Recomputes similarities for the pairs of an existing alignment"""

    @abstractmethod
    def rematch(self, alignment: Alignment) -> Alignment:
        raise NotImplementedError


class RunFilter(ABC):
    """Removes mappings from a run's committed alignment (repair, obsolete
    filtering). Works on the run in place."""

    @abstractmethod
    def filter(self, run) -> None:
        raise NotImplementedError


class Translator(ABC):
    """Translates vocabulary labels before matching"""

    @abstractmethod
    def translate(self) -> None:
        raise NotImplementedError
