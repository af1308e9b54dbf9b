"""Linear weighted combination of alignments"""

from ..alignment import Alignment
from ..utils import check_unit_interval


def combine(primary: Alignment, secondary: Alignment, weight: float) -> Alignment:
    """Blend two alignments.

    Pairs present in both get ``weight * primary + (1 - weight) * secondary``
    and keep the primary's relationship. Pairs present in only one input pass
    through unchanged.

    Raises:
        ConfigurationError: weight outside [0, 1]
    """
    weight = check_unit_interval(weight, "Combination weight")
    combined = Alignment()
    for m in primary:
        other = secondary.get(m.source_id, m.target_id)
        if other is None:
            combined.add(m)
        else:
            blended = weight * m.similarity + (1.0 - weight) * other.similarity
            combined.add(m.with_similarity(min(1.0, max(0.0, blended))))
    for m in secondary:
        if not primary.contains(m.source_id, m.target_id):
            combined.add(m)
    return combined
