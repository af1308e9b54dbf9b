"""Core alignment data model

Mapping is one weighted candidate correspondence between a source and a
target entity; Alignment is the keyed collection of Mappings for one run.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from ..utils import parse_enum


class MappingRelation(Enum):
    """Semantic relationship asserted by a mapping"""

    EQUIVALENCE = "="
    SUPERCLASS = ">"  # source subsumes target
    SUBCLASS = "<"  # target subsumes source
    UNKNOWN = "?"

    @classmethod
    def parse(cls, value) -> "MappingRelation":
        return parse_enum(cls, value, "mapping relation")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Mapping:
    """Candidate correspondence between two entity handles

    Identity for merging purposes is ``key``; the relationship does not
    take part in it.
    """

    source_id: int
    target_id: int
    similarity: float
    relationship: MappingRelation = MappingRelation.EQUIVALENCE

    def __post_init__(self):
        if not 0.0 <= self.similarity <= 1.0:
            raise ValueError(
                f"Mapping similarity must be within [0, 1], got {self.similarity}"
            )

    @property
    def key(self) -> Tuple[int, int]:
        return (self.source_id, self.target_id)

    def with_similarity(self, similarity: float) -> "Mapping":
        return Mapping(self.source_id, self.target_id, similarity, self.relationship)

    def __repr__(self):
        return (
            f"Mapping(src={self.source_id}, tgt={self.target_id}, "
            f"sim={self.similarity:.3f}, rel={self.relationship.value})"
        )


def ranking_key(mapping: Mapping) -> Tuple[float, int, int]:
    """Sort key: descending similarity, then ascending source and target ids"""
    return (-mapping.similarity, mapping.source_id, mapping.target_id)


class Alignment:
    """Collection of Mappings keyed by (source_id, target_id)

    Iteration is deterministic: descending similarity with ties broken by
    ascending source id and then target id. Greedy selection relies on it.
    """

    def __init__(self, mappings: Optional[Iterable[Mapping]] = None):
        self._mappings: Dict[Tuple[int, int], Mapping] = {}
        self._by_source: Dict[int, Set[int]] = {}
        self._by_target: Dict[int, Set[int]] = {}
        if mappings is not None:
            for m in mappings:
                self.add(m)

    # -- mutation -----------------------------------------------------

    def add(self, mapping: Mapping) -> bool:
        """Insert a mapping, or overwrite an existing one with the same key
        if the new similarity is higher.

        Returns:
            True if the alignment changed
        """
        current = self._mappings.get(mapping.key)
        if current is not None and current.similarity >= mapping.similarity:
            return False
        self._mappings[mapping.key] = mapping
        self._by_source.setdefault(mapping.source_id, set()).add(mapping.target_id)
        self._by_target.setdefault(mapping.target_id, set()).add(mapping.source_id)
        return True

    def add_all(self, other: Iterable[Mapping]) -> None:
        """Union; conflicting keys keep the higher-similarity mapping"""
        for m in other:
            self.add(m)

    def add_all_one_to_one(self, other: Iterable[Mapping]) -> None:
        """Union that leaves the alignment 1-to-1.

        Both sides are merged by key (higher similarity wins) and then walked
        in ranking order; a mapping is kept only if neither of its entities
        is claimed by a higher-ranked mapping.
        """
        merged = self.copy()
        merged.add_all(other)
        claimed_sources: Set[int] = set()
        claimed_targets: Set[int] = set()
        kept: List[Mapping] = []
        for m in merged:
            if m.source_id in claimed_sources or m.target_id in claimed_targets:
                continue
            claimed_sources.add(m.source_id)
            claimed_targets.add(m.target_id)
            kept.append(m)
        self._replace(kept)

    def remove(self, source_id: int, target_id: int) -> Optional[Mapping]:
        removed = self._mappings.pop((source_id, target_id), None)
        if removed is not None:
            self._by_source[source_id].discard(target_id)
            if not self._by_source[source_id]:
                del self._by_source[source_id]
            self._by_target[target_id].discard(source_id)
            if not self._by_target[target_id]:
                del self._by_target[target_id]
        return removed

    def retain(self, other: "Alignment") -> None:
        """Replace this alignment's content with ``other``'s"""
        self._replace(list(other))

    def _replace(self, mappings: Iterable[Mapping]) -> None:
        self._mappings.clear()
        self._by_source.clear()
        self._by_target.clear()
        for m in mappings:
            self.add(m)

    # -- queries ------------------------------------------------------

    def get(self, source_id: int, target_id: int) -> Optional[Mapping]:
        return self._mappings.get((source_id, target_id))

    def get_similarity(self, source_id: int, target_id: int) -> float:
        """Similarity of the pair, or 0.0 if it is not in the alignment"""
        m = self._mappings.get((source_id, target_id))
        return m.similarity if m is not None else 0.0

    def contains(self, source_id: int, target_id: int) -> bool:
        return (source_id, target_id) in self._mappings

    def source_ids(self) -> Set[int]:
        return set(self._by_source)

    def target_ids(self) -> Set[int]:
        return set(self._by_target)

    def max_source_similarity(self, source_id: int) -> float:
        targets = self._by_source.get(source_id, ())
        return max(
            (self._mappings[(source_id, t)].similarity for t in targets), default=0.0
        )

    def max_target_similarity(self, target_id: int) -> float:
        sources = self._by_target.get(target_id, ())
        return max(
            (self._mappings[(s, target_id)].similarity for s in sources), default=0.0
        )

    def is_one_to_one(self) -> bool:
        return all(len(v) == 1 for v in self._by_source.values()) and all(
            len(v) == 1 for v in self._by_target.values()
        )

    def size(self) -> int:
        return len(self._mappings)

    def copy(self) -> "Alignment":
        return Alignment(self._mappings.values())

    def __len__(self) -> int:
        return len(self._mappings)

    def __contains__(self, item) -> bool:
        if isinstance(item, Mapping):
            return item.key in self._mappings
        return item in self._mappings

    def __iter__(self) -> Iterator[Mapping]:
        return iter(sorted(self._mappings.values(), key=ranking_key))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Alignment):
            return NotImplemented
        return self._mappings == other._mappings

    def __repr__(self):
        return f"Alignment(size={len(self._mappings)})"
