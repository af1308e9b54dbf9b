"""Configurable threshold selector

Narrows a candidate alignment with a SelectionType policy, optionally using
a support alignment as corroborating evidence.
"""

import logging
from typing import Dict, Optional, Set, Tuple

from .models import SelectionType, SupportRule
from .ranked import RankedSelector
from ..alignment import Alignment, Mapping
from ..utils import check_unit_interval


class Selector:
    """Threshold + policy selector

    Args:
        threshold: Minimum effective score a mapping needs to be considered
        selection_type: Selection policy (SelectionType or its name)
        support: Optional alignment supplying evidence for the primary one
        support_rule: How support similarities turn into effective scores
        hybrid_cutoff: Score from which HYBRID keeps mappings unconditionally

    Raises:
        ConfigurationError: threshold or cutoff outside [0, 1], unknown policy
    """

    HYBRID_CUTOFF = 0.75

    def __init__(
        self,
        threshold: float,
        selection_type=SelectionType.STRICT,
        support: Optional[Alignment] = None,
        support_rule=SupportRule.VALIDATE,
        hybrid_cutoff: float = HYBRID_CUTOFF,
    ):
        self.threshold = check_unit_interval(threshold, "Selection threshold")
        self.selection_type = SelectionType.parse(selection_type)
        self.support = support
        self.support_rule = SupportRule.parse(support_rule)
        self.hybrid_cutoff = check_unit_interval(hybrid_cutoff, "Hybrid cutoff")
        self.logger = logging.getLogger(__name__)

    def filter(self, alignment: Alignment, in_place: bool = False) -> Alignment:
        """Select from ``alignment``

        With ``in_place`` the given alignment is replaced by the selection
        and returned; otherwise a new alignment is returned.
        """
        scored, originals = self._score(alignment)

        if self.selection_type is SelectionType.STRICT:
            chosen = RankedSelector().select(scored, self.threshold)
        elif self.selection_type is SelectionType.PERMISSIVE:
            chosen = self._permissive(scored)
        else:
            chosen = self._hybrid(scored)

        selected = Alignment(originals[m.key] for m in chosen)
        self.logger.info(
            f"{self.selection_type.value.capitalize()} selection at "
            f"{self.threshold:.2f}: {len(selected)}/{len(alignment)} mappings kept"
        )
        if in_place:
            alignment.retain(selected)
            return alignment
        return selected

    def _score(
        self, alignment: Alignment
    ) -> Tuple[Alignment, Dict[Tuple[int, int], Mapping]]:
        """Effective-score view of the candidates passing the threshold.

        Returns the scored alignment and the original mapping for each key.
        """
        scored = Alignment()
        originals: Dict[Tuple[int, int], Mapping] = {}
        for m in alignment:
            score = m.similarity
            if self.support is not None:
                evidence = self.support.get_similarity(m.source_id, m.target_id)
                if self.support_rule is SupportRule.VALIDATE:
                    score = evidence
                else:
                    score = max(score, evidence)
            if score < self.threshold:
                continue
            scored.add(m.with_similarity(score))
            originals[m.key] = m
        return scored, originals

    def _permissive(self, scored: Alignment) -> Alignment:
        selected = Alignment()
        for m in scored:
            if m.similarity >= scored.max_source_similarity(
                m.source_id
            ) or m.similarity >= scored.max_target_similarity(m.target_id):
                selected.add(m)
        return selected

    def _hybrid(self, scored: Alignment) -> Alignment:
        selected = Alignment()
        claimed_sources: Set[int] = set()
        claimed_targets: Set[int] = set()
        for m in scored:
            if m.similarity >= self.hybrid_cutoff:
                selected.add(m)
                claimed_sources.add(m.source_id)
                claimed_targets.add(m.target_id)
        for m in scored:
            if m.similarity >= self.hybrid_cutoff:
                continue
            if m.source_id in claimed_sources or m.target_id in claimed_targets:
                continue
            claimed_sources.add(m.source_id)
            claimed_targets.add(m.target_id)
            selected.add(m)
        return selected
