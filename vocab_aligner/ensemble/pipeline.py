"""
Ensemble matching pipeline.

Runs the enabled matcher stages in a fixed order over one accumulator
alignment, commits it to the run, then selects and repairs it.

Stage order:
    TRANSLATE -> baseline (BK or lexical) -> WORD -> STRING -> STRUCT
    -> PROPERTY -> commit -> SELECT -> REPAIR

Every extension stage is merged into the accumulator with
``add_all_one_to_one``, so the accumulator stays 1-to-1 once any extension
has run. SELECT either applies a single Selector, or the structural
refinement:

    b = block rematch(acc)
    c = neighbor rematch(acc, MAXIMUM, direct neighbors)
    b = combine(b, c, 0.75)
    b = combine(acc, b, 0.8)
    b = Selector(threshold - 0.05, STRICT).filter(b)
    acc = Selector(threshold, support=b).filter(acc)

With ``interactive`` enabled the accumulator is selected by an
InteractiveSelector over the per-stage outputs; if the oracle becomes
unavailable the run falls back to the non-interactive selection.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence
import logging
import time

from .base import Matcher, Rematcher, RunFilter, Translator
from .combine import combine
from ..alignment import Alignment, EntityIndex
from ..config import RunConfig
from ..errors import ConfigurationError, OracleUnavailable
from ..selection import (
    InteractionStats,
    InteractiveSelector,
    Oracle,
    SelectionType,
    Selector,
)
from ..settings import (
    LanguageSetting,
    MatchStep,
    NeighborSimilarityStrategy,
    StringSimMeasure,
    WordMatchStrategy,
)


@dataclass
class MatcherSuite:
    """Collaborators available to a pipeline

    Matchers that depend on run settings are given as factories, called when
    their stage runs. ``structural`` must return an object that is both a
    Matcher and a Rematcher.

    ``support_panel`` overrides the interactive support panel, which
    otherwise consists of the per-stage matcher outputs.
    """

    lexical: Optional[Matcher] = None
    background: Optional[Matcher] = None
    word: Optional[Callable[[Optional[str], WordMatchStrategy], Matcher]] = None
    string: Optional[Callable[[StringSimMeasure], Matcher]] = None
    structural: Optional[Callable[[NeighborSimilarityStrategy, bool], Matcher]] = None
    property: Optional[Matcher] = None
    block_rematcher: Optional[Rematcher] = None
    translator: Optional[Translator] = None
    obsolete_filter: Optional[RunFilter] = None
    repairer: Optional[RunFilter] = None
    oracle: Optional[Oracle] = None
    entity_index: Optional[EntityIndex] = None
    support_panel: Optional[Sequence[Alignment]] = None


@dataclass
class MatchRun:
    """State of one matching run

    ``alignment`` holds the accumulator once it is committed and the final
    alignment after ``match()`` returns.
    """

    config: RunConfig
    alignment: Optional[Alignment] = None
    stage_alignments: Dict[str, Alignment] = field(default_factory=dict)
    stage_timings: Dict[str, float] = field(default_factory=dict)
    interactions: Optional[InteractionStats] = None
    fallback_reason: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            "config": self.config.to_dict(),
            "final_size": len(self.alignment) if self.alignment is not None else 0,
            "stages": {
                name: {
                    "mappings": len(a),
                    "seconds": round(self.stage_timings.get(name, 0.0), 4),
                }
                for name, a in self.stage_alignments.items()
            },
            "interactions": (
                self.interactions.to_dict() if self.interactions is not None else None
            ),
            "fallback_reason": self.fallback_reason,
        }


class MatchPipeline:
    """Configurable ensemble of matching, selection and repair stages

    Args:
        config: Run configuration
        suite: Collaborators for the enabled stages

    Raises:
        ConfigurationError: an enabled stage has no collaborator
    """

    STRUCTURAL_BLEND_WEIGHT = 0.75
    ACCUMULATOR_BLEND_WEIGHT = 0.8
    PRESELECTION_MARGIN = 0.05

    def __init__(self, config: RunConfig, suite: MatcherSuite):
        self.config = config
        self.suite = suite
        self.logger = logging.getLogger(__name__)
        self._check_suite()

    def _check_suite(self):
        cfg, suite = self.config, self.suite
        missing: List[str] = []
        if cfg.enabled(MatchStep.TRANSLATE) and suite.translator is None:
            missing.append("translator")
        if cfg.enabled(MatchStep.BK):
            if suite.background is None:
                missing.append("background")
        elif suite.lexical is None:
            missing.append("lexical")
        if cfg.enabled(MatchStep.WORD) and suite.word is None:
            missing.append("word")
        if cfg.enabled(MatchStep.STRING) and suite.string is None:
            missing.append("string")
        if cfg.enabled(MatchStep.STRUCT) and suite.structural is None:
            missing.append("structural")
        if cfg.enabled(MatchStep.PROPERTY) and suite.property is None:
            missing.append("property")
        if cfg.enabled(MatchStep.SELECT):
            if cfg.remove_obsolete and suite.obsolete_filter is None:
                missing.append("obsolete_filter")
            if cfg.structural_selection:
                if suite.block_rematcher is None:
                    missing.append("block_rematcher")
                if suite.structural is None and "structural" not in missing:
                    missing.append("structural")
            if cfg.interactive and suite.oracle is None:
                missing.append("oracle")
        if cfg.enabled(MatchStep.REPAIR) and suite.repairer is None:
            missing.append("repairer")
        if missing:
            raise ConfigurationError(
                f"Missing collaborators for enabled steps: {', '.join(missing)}"
            )

    def match(self) -> MatchRun:
        """Execute the configured stages and return the run"""
        cfg, suite = self.config, self.suite
        thresh = cfg.threshold
        run = MatchRun(config=cfg)
        start_time = time.time()
        self.logger.info(
            f"Starting matching run: steps={[s.value for s in cfg.steps]}, "
            f"threshold={thresh:.2f}"
        )

        if cfg.enabled(MatchStep.TRANSLATE):
            t0 = time.time()
            suite.translator.translate()
            run.stage_timings[MatchStep.TRANSLATE.value] = time.time() - t0

        if cfg.enabled(MatchStep.BK):
            a = self._stage(run, MatchStep.BK.value, lambda: suite.background.match(thresh))
        else:
            a = self._stage(run, "lexical", lambda: suite.lexical.match(thresh))
        # The stage snapshot must not alias the accumulator
        a = a.copy()

        if cfg.enabled(MatchStep.WORD):
            a.add_all_one_to_one(self._stage(run, MatchStep.WORD.value, self._word_match))
        if cfg.enabled(MatchStep.STRING):
            sm = suite.string(cfg.string_measure)
            if cfg.primary_string_matcher:
                string = self._stage(run, MatchStep.STRING.value, lambda: sm.match(thresh))
            else:
                string = self._stage(
                    run, MatchStep.STRING.value, lambda: sm.extend_alignment(a, thresh)
                )
            a.add_all_one_to_one(string)
        if cfg.enabled(MatchStep.STRUCT):
            nsm = suite.structural(cfg.neighbor_strategy, cfg.direct_neighbors)
            a.add_all_one_to_one(
                self._stage(
                    run, MatchStep.STRUCT.value, lambda: nsm.extend_alignment(a, thresh)
                )
            )
        if cfg.enabled(MatchStep.PROPERTY):
            a.add_all_one_to_one(
                self._stage(
                    run,
                    MatchStep.PROPERTY.value,
                    lambda: suite.property.extend_alignment(a, thresh),
                )
            )
        self.logger.info(f"Accumulated alignment: {len(a)} mappings")

        run.alignment = a

        if cfg.enabled(MatchStep.SELECT):
            t0 = time.time()
            self._select(run)
            run.stage_timings[MatchStep.SELECT.value] = time.time() - t0
        if cfg.enabled(MatchStep.REPAIR):
            t0 = time.time()
            suite.repairer.filter(run)
            run.stage_timings[MatchStep.REPAIR.value] = time.time() - t0

        self.logger.info(
            f"Matching run finished in {time.time() - start_time:.2f} seconds: "
            f"{len(run.alignment)} mappings"
        )
        return run

    def _stage(self, run: MatchRun, name: str, produce: Callable[[], Alignment]) -> Alignment:
        t0 = time.time()
        result = produce()
        run.stage_timings[name] = time.time() - t0
        run.stage_alignments[name] = result
        self.logger.info(f"{name}: {len(result)} mappings")
        return result

    def _word_match(self) -> Alignment:
        cfg = self.config
        if cfg.language_setting is LanguageSetting.SINGLE:
            language = cfg.languages[0] if cfg.languages else None
            return self.suite.word(language, cfg.word_strategy).match(cfg.threshold)
        word = Alignment()
        for language in cfg.languages:
            word.add_all(self.suite.word(language, cfg.word_strategy).match(cfg.threshold))
        return word

    def _select(self, run: MatchRun) -> None:
        cfg, suite = self.config, self.suite
        if cfg.remove_obsolete:
            suite.obsolete_filter.filter(run)

        if cfg.interactive:
            try:
                self._select_interactively(run)
                return
            except OracleUnavailable as e:
                self.logger.warning(
                    f"Oracle unavailable ({e}); falling back to non-interactive selection"
                )
                run.fallback_reason = str(e)

        if cfg.structural_selection:
            self._select_structurally(run)
        else:
            Selector(cfg.threshold, cfg.selection_type).filter(
                run.alignment, in_place=True
            )

    def _select_interactively(self, run: MatchRun) -> None:
        panel = self.suite.support_panel
        if panel is None:
            panel = list(run.stage_alignments.values())
        selector = InteractiveSelector(
            self.suite.oracle, panel, entity_index=self.suite.entity_index
        )
        selected = selector.select(run.alignment, self.config.threshold)
        run.alignment.retain(selected)
        run.interactions = selector.stats()

    def _select_structurally(self, run: MatchRun) -> None:
        cfg = self.config
        a = run.alignment
        b = self.suite.block_rematcher.rematch(a)
        nb = self.suite.structural(NeighborSimilarityStrategy.MAXIMUM, True)
        c = nb.rematch(a)
        b = combine(b, c, self.STRUCTURAL_BLEND_WEIGHT)
        b = combine(a, b, self.ACCUMULATOR_BLEND_WEIGHT)
        preselect = max(0.0, cfg.threshold - self.PRESELECTION_MARGIN)
        b = Selector(preselect, SelectionType.STRICT).filter(b)
        Selector(
            cfg.threshold, cfg.selection_type, support=b, support_rule=cfg.support_rule
        ).filter(a, in_place=True)
