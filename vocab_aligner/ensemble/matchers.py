"""Reference matcher implementations

``PrecomputedMatcher`` replays an alignment produced elsewhere (a file, a
previous run, a test fixture). ``LabelMatcher`` is a small lexical matcher
scoring entity labels by TF-IDF character n-gram cosine similarity.
"""

from typing import Dict, Optional

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.metrics.pairwise import cosine_similarity

from .base import Matcher, Rematcher
from ..alignment import Alignment, Mapping


class PrecomputedMatcher(Matcher, Rematcher):
    """Matcher backed by a fixed alignment

    ``match`` returns the stored mappings at or above the threshold;
    ``rematch`` returns the stored similarity for each pair of the given
    alignment that the stored alignment knows about.
    """

    def __init__(self, alignment: Alignment, name: Optional[str] = None):
        super().__init__(name)
        self._alignment = alignment.copy()

    def match(self, threshold: float) -> Alignment:
        result = Alignment(m for m in self._alignment if m.similarity >= threshold)
        self.logger.debug(f"{self.name}: {len(result)} mappings >= {threshold:.2f}")
        return result

    def rematch(self, alignment: Alignment) -> Alignment:
        result = Alignment()
        for m in alignment:
            stored = self._alignment.get(m.source_id, m.target_id)
            if stored is not None:
                result.add(m.with_similarity(stored.similarity))
        return result


class LabelMatcher(Matcher):
    """Lexical matcher over entity labels

    Labels are vectorized with character n-gram TF-IDF (fitted on both
    vocabularies) and compared with cosine similarity.

    Args:
        source_labels: source entity handle -> label
        target_labels: target entity handle -> label
        ngram_range: character n-gram sizes
    """

    def __init__(
        self,
        source_labels: Dict[int, str],
        target_labels: Dict[int, str],
        ngram_range=(2, 4),
        **config,
    ):
        super().__init__(config.pop("name", None), **config)
        self.source_labels = dict(source_labels)
        self.target_labels = dict(target_labels)
        self.ngram_range = tuple(ngram_range)
        self._similarity: Optional[np.ndarray] = None

    def _similarity_matrix(self) -> np.ndarray:
        """Compute (and cache) the source x target similarity matrix"""
        if self._similarity is not None:
            return self._similarity
        if not self.source_labels or not self.target_labels:
            self._similarity = np.zeros((len(self.source_labels), len(self.target_labels)))
            return self._similarity

        vectorizer = TfidfVectorizer(
            analyzer="char_wb", ngram_range=self.ngram_range, lowercase=True
        )
        vectorizer.fit(
            list(self.source_labels.values()) + list(self.target_labels.values())
        )
        src = vectorizer.transform(list(self.source_labels.values()))
        tgt = vectorizer.transform(list(self.target_labels.values()))
        self._similarity = np.clip(cosine_similarity(src, tgt), 0.0, 1.0)
        return self._similarity

    def match(self, threshold: float) -> Alignment:
        matrix = self._similarity_matrix()
        source_ids = list(self.source_labels)
        target_ids = list(self.target_labels)
        alignment = Alignment()
        for i, j in np.argwhere(matrix >= threshold):
            alignment.add(
                Mapping(source_ids[i], target_ids[j], float(matrix[i, j]))
            )
        self.logger.info(
            f"Label matching: {len(alignment)} mappings >= {threshold:.2f} "
            f"({len(source_ids)} x {len(target_ids)} labels)"
        )
        return alignment
