"""
Vocab Aligner: selection and interactive refinement of vocabulary alignments.
"""

import logging

from .api import AlignmentRefiner
from .config import RunConfig
from .errors import (
    AlignerError,
    AlignmentFormatError,
    ConfigurationError,
    DegenerateInputError,
    OracleUnavailable,
)
from .settings import (
    MatchStep,
    LanguageSetting,
    WordMatchStrategy,
    StringSimMeasure,
    NeighborSimilarityStrategy,
)

# Alignment module
from . import alignment
from .alignment import Alignment, Mapping, MappingRelation, EntityIndex

# Selection module
from . import selection
from .selection import (
    SelectionType,
    SupportRule,
    RankedSelector,
    Selector,
    InteractiveSelector,
    Oracle,
    ReferenceOracle,
    TimeoutOracle,
)

# Ensemble module
from . import ensemble
from .ensemble import MatchPipeline, MatchRun, MatcherSuite, combine

__version__ = "0.1.0"
__all__ = [
    "AlignmentRefiner",
    "RunConfig",
    "AlignerError",
    "AlignmentFormatError",
    "ConfigurationError",
    "DegenerateInputError",
    "OracleUnavailable",
    "MatchStep",
    "LanguageSetting",
    "WordMatchStrategy",
    "StringSimMeasure",
    "NeighborSimilarityStrategy",
    "Alignment",
    "Mapping",
    "MappingRelation",
    "EntityIndex",
    "SelectionType",
    "SupportRule",
    "RankedSelector",
    "Selector",
    "InteractiveSelector",
    "Oracle",
    "ReferenceOracle",
    "TimeoutOracle",
    "MatchPipeline",
    "MatchRun",
    "MatcherSuite",
    "combine",
    "alignment",
    "selection",
    "ensemble",
]

# Configure default logging format to be minimal
_handler = logging.StreamHandler()
_handler.setFormatter(logging.Formatter("%(message)s"))
_logger = logging.getLogger("vocab_aligner")
_logger.addHandler(_handler)
_logger.setLevel(logging.INFO)
