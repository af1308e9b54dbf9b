"""Ensemble matching module

Collaborator interfaces, alignment combination and the pipeline
orchestrator.
"""

from .base import Matcher, Rematcher, RunFilter, Translator
from .combine import combine
from .filters import ObsoleteFilter
from .matchers import LabelMatcher, PrecomputedMatcher
from .pipeline import MatchPipeline, MatchRun, MatcherSuite

__all__ = [
    "Matcher",
    "Rematcher",
    "RunFilter",
    "Translator",
    "combine",
    "ObsoleteFilter",
    "LabelMatcher",
    "PrecomputedMatcher",
    "MatchPipeline",
    "MatchRun",
    "MatcherSuite",
]
