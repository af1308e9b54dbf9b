"""Enumerated run settings for the matching pipeline.

Each enum exposes ``parse`` which accepts a member, its name (any case)
or its value, and raises ConfigurationError otherwise.
"""

from enum import Enum

from .utils import parse_enum


class MatchStep(Enum):
    """Pipeline steps, declared in execution order"""

    TRANSLATE = "translate"
    BK = "bk"
    WORD = "word"
    STRING = "string"
    STRUCT = "struct"
    PROPERTY = "property"
    SELECT = "select"
    REPAIR = "repair"

    @classmethod
    def parse(cls, value) -> "MatchStep":
        return parse_enum(cls, value, "match step")


class LanguageSetting(Enum):
    """Whether word matching runs once or once per language"""

    SINGLE = "single"
    MULTI = "multi"

    @classmethod
    def for_languages(cls, languages) -> "LanguageSetting":
        return cls.MULTI if len(languages) > 1 else cls.SINGLE


class WordMatchStrategy(Enum):
    BY_CLASS = "by_class"
    BY_NAME = "by_name"
    AVERAGE = "average"
    MAXIMUM = "maximum"
    MINIMUM = "minimum"

    @classmethod
    def parse(cls, value) -> "WordMatchStrategy":
        return parse_enum(cls, value, "word match strategy")


class StringSimMeasure(Enum):
    ISUB = "isub"
    EDIT = "edit"
    JW = "jw"
    QGRAM = "qgram"

    @classmethod
    def parse(cls, value) -> "StringSimMeasure":
        return parse_enum(cls, value, "string similarity measure")


class NeighborSimilarityStrategy(Enum):
    """How neighbor similarities are aggregated by structural matchers"""

    ANCESTORS = "ancestors"
    DESCENDANTS = "descendants"
    AVERAGE = "average"
    MAXIMUM = "maximum"
    MINIMUM = "minimum"

    @classmethod
    def parse(cls, value) -> "NeighborSimilarityStrategy":
        return parse_enum(cls, value, "neighbor similarity strategy")
