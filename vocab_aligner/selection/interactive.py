"""
Interactive selection with a budgeted oracle.

Low-confidence mappings from a strict ranked selection are shown to an
oracle only when a panel of independently produced support alignments
disagrees about them. The run stops early once the oracle has rejected more
than a fixed share of the candidate alignment.

Disagreement is measured by the sample variance of the pair's similarity
across the panel (its "signature vector"). A single-slot memo of the last
examined pair skips asking again when the previous question was rejected
and the new pair has exactly the same signature.
"""

import logging
import time
from typing import Callable, Optional, Sequence

import numpy as np

from .models import InteractionStats, SelectionType
from .oracle import Oracle
from .ranked import RankedSelector
from ..alignment import Alignment, EntityIndex
from ..errors import DegenerateInputError


def variance(values: Sequence[float]) -> float:
    """Sample variance (n - 1 denominator)

    Raises:
        DegenerateInputError: fewer than two values
    """
    v = np.asarray(values, dtype=float)
    if v.size < 2:
        raise DegenerateInputError(
            f"Sample variance needs at least 2 values, got {v.size}"
        )
    return float(np.var(v, ddof=1))


class InteractiveSelector:
    """Selector that consults an oracle on contested low-confidence mappings

    Not safe to share between concurrent runs: the counters and the
    signature memo are per-session state.

    Args:
        oracle: Authority consulted for contested mappings
        support_alignments: Panel of support alignments, in a fixed order
        entity_index: Resolves handles to the external ids sent to the oracle;
            handles are sent as strings when omitted
        high_confidence: Mappings at or above this are accepted without asking
        budget_ratio: Stop once rejections exceed this share of the input
        agreement_variance: Panel variance below which the panel agrees
    """

    HIGH_CONFIDENCE = 0.7
    BUDGET_RATIO = 0.35
    AGREEMENT_VARIANCE = 0.04

    def __init__(
        self,
        oracle: Oracle,
        support_alignments: Sequence[Alignment],
        entity_index: Optional[EntityIndex] = None,
        high_confidence: float = HIGH_CONFIDENCE,
        budget_ratio: float = BUDGET_RATIO,
        agreement_variance: float = AGREEMENT_VARIANCE,
    ):
        self.oracle = oracle
        self.support_alignments = list(support_alignments)
        self._external_id: Callable[[int], str] = (
            entity_index.uri if entity_index is not None else str
        )
        self.high_confidence = high_confidence
        self.budget_ratio = budget_ratio
        self.agreement_variance = agreement_variance

        self.previous_signature_vector = np.zeros(len(self.support_alignments))
        self.previous_feedback = 0
        self.previous_agreement = False
        self.true_count = 0
        self.false_count = 0
        self.budget_exhausted = False
        self.logger = logging.getLogger(__name__)

    def positive_interactions(self) -> int:
        return self.true_count

    def negative_interactions(self) -> int:
        return self.false_count

    def stats(self) -> InteractionStats:
        return InteractionStats(
            positive=self.true_count,
            negative=self.false_count,
            budget_exhausted=self.budget_exhausted,
        )

    def select(self, alignment: Alignment, threshold: float) -> Alignment:
        """Run one interactive selection session over ``alignment``

        Raises:
            OracleUnavailable: the oracle could not answer; the session is
                aborted and nothing is returned
            DegenerateInputError: the support panel has fewer than two members
        """
        start = time.time()
        self.logger.info("Performing Interactive Selection")

        maps = RankedSelector(SelectionType.STRICT).select(alignment, threshold)
        selected = Alignment()
        self.true_count = 0
        self.false_count = 0
        self.budget_exhausted = False
        budget = len(alignment) * self.budget_ratio

        for m in maps:
            if m.similarity >= self.high_confidence:
                selected.add(m)
            elif self.disagreement(m.source_id, m.target_id):
                if self.oracle.check(
                    self._external_id(m.source_id),
                    self._external_id(m.target_id),
                    m.relationship,
                ):
                    selected.add(m)
                    self.true_count += 1
                    self.previous_feedback = 1
                else:
                    self.false_count += 1
                    self.previous_feedback = -1
            if self.false_count > budget:
                self.budget_exhausted = True
                self.logger.info(
                    f"Oracle rejection budget exhausted after {self.false_count} "
                    f"negative answers; stopping"
                )
                break

        elapsed = int(time.time() - start)
        self.logger.info(f"Finished in {elapsed} seconds")
        self.logger.info(
            f"Total Oracle Input: {self.true_count + self.false_count}; "
            f"Positive Oracle Input: {self.true_count}"
        )
        return selected

    def signature_vector(self, source_id: int, target_id: int) -> np.ndarray:
        return np.array(
            [a.get_similarity(source_id, target_id) for a in self.support_alignments],
            dtype=float,
        )

    def disagreement(self, source_id: int, target_id: int) -> bool:
        """Whether the support panel disagrees enough about the pair to ask"""
        signature = self.signature_vector(source_id, target_id)

        if variance(signature) < self.agreement_variance:
            self.previous_agreement = False
            self.previous_feedback = 0
            self.previous_signature_vector = signature
            return False
        if (
            self.previous_agreement
            and self.previous_feedback == -1
            and np.array_equal(signature, self.previous_signature_vector)
        ):
            # Same evidence as the pair just rejected
            return False
        self.previous_agreement = True
        self.previous_signature_vector = signature
        return True
