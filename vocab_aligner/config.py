"""Run configuration

A RunConfig is built once per matching run and handed to the pipeline; there
is no process-wide configuration.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple
import json

from .errors import ConfigurationError
from .selection.models import SelectionType, SupportRule
from .settings import (
    LanguageSetting,
    MatchStep,
    NeighborSimilarityStrategy,
    StringSimMeasure,
    WordMatchStrategy,
)
from .utils import check_unit_interval


@dataclass(frozen=True)
class RunConfig:
    """Immutable configuration of one matching run.

    Enum-valued fields accept members or their names; they are normalized
    in ``__post_init__``. Invalid values raise ConfigurationError.
    """

    steps: Tuple[MatchStep, ...] = (
        MatchStep.WORD,
        MatchStep.STRING,
        MatchStep.STRUCT,
        MatchStep.SELECT,
    )
    threshold: float = 0.6
    selection_type: SelectionType = SelectionType.STRICT
    support_rule: SupportRule = SupportRule.VALIDATE
    languages: Tuple[str, ...] = ("en",)
    word_strategy: WordMatchStrategy = WordMatchStrategy.AVERAGE
    string_measure: StringSimMeasure = StringSimMeasure.ISUB
    neighbor_strategy: NeighborSimilarityStrategy = (
        NeighborSimilarityStrategy.DESCENDANTS
    )
    primary_string_matcher: bool = False
    structural_selection: bool = False
    remove_obsolete: bool = False
    direct_neighbors: bool = False
    interactive: bool = False
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        steps = self.steps
        if isinstance(steps, (str, MatchStep)):
            steps = (steps,)
        parsed = []
        for step in steps:
            step = MatchStep.parse(step)
            if step not in parsed:
                parsed.append(step)
        languages = self.languages
        if isinstance(languages, str):
            languages = (languages,)

        set_ = object.__setattr__
        set_(self, "steps", tuple(parsed))
        set_(self, "threshold", check_unit_interval(self.threshold, "Threshold"))
        set_(self, "selection_type", SelectionType.parse(self.selection_type))
        set_(self, "support_rule", SupportRule.parse(self.support_rule))
        set_(self, "languages", tuple(languages))
        set_(self, "word_strategy", WordMatchStrategy.parse(self.word_strategy))
        set_(self, "string_measure", StringSimMeasure.parse(self.string_measure))
        set_(
            self,
            "neighbor_strategy",
            NeighborSimilarityStrategy.parse(self.neighbor_strategy),
        )

        if MatchStep.WORD in self.steps and not self.languages:
            raise ConfigurationError("Word matching requires at least one language")

    @property
    def language_setting(self) -> LanguageSetting:
        return LanguageSetting.for_languages(self.languages)

    def enabled(self, step: MatchStep) -> bool:
        return step in self.steps

    @classmethod
    def from_dict(
        cls, overrides: Optional[Dict[str, Any]] = None, **kwargs
    ) -> "RunConfig":
        """Build a config from defaults merged with ``overrides``.

        Unknown keys are kept in ``extra`` so collaborators can read them.
        """
        merged = {**(overrides or {}), **kwargs}
        known = {f.name for f in fields(cls)} - {"extra"}
        values = {k: v for k, v in merged.items() if k in known}
        extra = {k: v for k, v in merged.items() if k not in known}
        return cls(**values, extra=extra)

    @classmethod
    def from_json(cls, path: str, **overrides) -> "RunConfig":
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid config file '{path}': {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file '{path}' must hold a JSON object")
        return cls.from_dict(data, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            "steps": [s.value for s in self.steps],
            "threshold": self.threshold,
            "selection_type": self.selection_type.value,
            "support_rule": self.support_rule.value,
            "languages": list(self.languages),
            "word_strategy": self.word_strategy.value,
            "string_measure": self.string_measure.value,
            "neighbor_strategy": self.neighbor_strategy.value,
            "primary_string_matcher": self.primary_string_matcher,
            "structural_selection": self.structural_selection,
            "remove_obsolete": self.remove_obsolete,
            "direct_neighbors": self.direct_neighbors,
            "interactive": self.interactive,
        }
