"""
API module for candidate alignment selection.
Provides a high-level, file-based interface around the matching pipeline.
"""

from typing import Any, Dict, Iterable, Optional
import logging
import os
import time

from .alignment import EntityIndex, read_tsv, write_tsv
from .config import RunConfig
from .errors import ConfigurationError
from .ensemble import MatchPipeline, MatcherSuite, ObsoleteFilter, PrecomputedMatcher
from .output.formatter import OutputFormatter
from .selection import ReferenceOracle, TimeoutOracle
from .settings import MatchStep


class AlignmentRefiner:
    """Select a final alignment from a file of candidate mappings.

    Candidates (and optional support alignments and reference) are read from
    TSV files; selection runs through a single-stage MatchPipeline.

    Args:
        candidates_path: TSV of candidate mappings
        support_paths: TSVs of independently produced alignments, used as the
            panel for interactive selection
        reference_path: TSV reference alignment answering oracle queries
        obsolete_path: Text file with one obsolete entity id per line
        error_rate: Probability that the simulated oracle answers wrongly
        oracle_timeout: Seconds allowed per oracle answer
        config_path: JSON file with RunConfig overrides; keyword overrides
            take precedence over it
        **config: RunConfig overrides

    Raises:
        FileNotFoundError: an input file does not exist
        ConfigurationError: invalid configuration
        AlignmentFormatError: malformed input file

    Example:
        >>> refiner = AlignmentRefiner("candidates.tsv", threshold=0.6)
        >>> result = refiner.refine()
        >>> refiner.save_results(result, "output/")
        >>> refiner.print_report(result)
    """

    def __init__(
        self,
        candidates_path: str,
        support_paths: Iterable[str] = (),
        reference_path: Optional[str] = None,
        obsolete_path: Optional[str] = None,
        error_rate: float = 0.0,
        oracle_timeout: Optional[float] = None,
        config_path: Optional[str] = None,
        **config,
    ):
        self.logger = logging.getLogger(__name__)
        self.candidates_path = candidates_path
        support_paths = list(support_paths)
        for path in [
            candidates_path,
            *support_paths,
            reference_path,
            obsolete_path,
            config_path,
        ]:
            if path is not None and not os.path.exists(path):
                raise FileNotFoundError(f"Input file '{path}' does not exist.")

        self.index = EntityIndex()
        self.candidates = read_tsv(candidates_path, self.index)
        self.supports = [read_tsv(p, self.index) for p in support_paths]
        self.reference = (
            read_tsv(reference_path, self.index) if reference_path is not None else None
        )
        self.obsolete_ids = (
            self._read_obsolete(obsolete_path) if obsolete_path is not None else None
        )
        self.error_rate = error_rate
        self.oracle_timeout = oracle_timeout

        overrides = {**config, "steps": (MatchStep.SELECT,)}
        if self.obsolete_ids is not None:
            overrides["remove_obsolete"] = True
        if config_path is not None:
            self.config = RunConfig.from_json(config_path, **overrides)
        else:
            self.config = RunConfig.from_dict(overrides)
        if self.config.interactive and len(self.supports) < 2:
            raise ConfigurationError(
                "Interactive selection needs at least 2 support alignments, "
                f"got {len(self.supports)}"
            )

        self.logger.info(
            f"Loading completed: {len(self.candidates)} candidates, "
            f"{len(self.supports)} support alignments, {len(self.index)} entities"
        )

    def _read_obsolete(self, path: str):
        with open(path, "r", encoding="utf-8") as f:
            ids = [line.strip() for line in f if line.strip()]
        return {self.index.register(i) for i in ids}

    def refine(self) -> Dict[str, Any]:
        """Run selection and return the result dict"""
        start_time = time.time()
        oracle = None
        if self.reference is not None:
            oracle = ReferenceOracle(self.reference, self.index, self.error_rate)
            if self.oracle_timeout is not None:
                oracle = TimeoutOracle(oracle, self.oracle_timeout)

        suite = MatcherSuite(
            lexical=PrecomputedMatcher(self.candidates, name="candidates"),
            obsolete_filter=(
                ObsoleteFilter(self.obsolete_ids)
                if self.obsolete_ids is not None
                else None
            ),
            oracle=oracle,
            entity_index=self.index,
            support_panel=self.supports or None,
        )
        try:
            run = MatchPipeline(self.config, suite).match()
        finally:
            if isinstance(oracle, TimeoutOracle):
                oracle.close()

        return {
            "alignment": run.alignment,
            "run": run,
            "stats": {
                "candidates": len(self.candidates),
                "selected": len(run.alignment),
                "support_alignments": len(self.supports),
                "processing_time_seconds": round(time.time() - start_time, 4),
            },
        }

    def save_results(
        self,
        result: Dict[str, Any],
        output_dir: Optional[str] = None,
        alignment_file: Optional[str] = None,
        report_file: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Save the selected alignment and the JSON report.

        Relative file names are resolved against ``output_dir`` (current
        working directory if None); absolute paths are used as-is.

        Returns:
            result dict with an "io" key holding the absolute output paths
        """
        if output_dir is None:
            output_dir = os.getcwd()
        output_dir = os.path.normpath(os.path.abspath(output_dir))

        if alignment_file is None:
            base_name = os.path.splitext(os.path.basename(self.candidates_path))[0]
            alignment_file = f"{base_name}_selected.tsv"
        if report_file is None:
            report_file = "selection_report.json"

        alignment_path = write_tsv(
            result["alignment"], os.path.join(output_dir, alignment_file), self.index
        )
        report_path = OutputFormatter.write_json(
            OutputFormatter.build_report(result), os.path.join(output_dir, report_file)
        )
        result["io"] = {
            "alignment_path": alignment_path,
            "report_path": report_path,
            "output_base": output_dir,
        }
        return result

    def print_report(self, result: Dict[str, Any], level: str = "normal"):
        """Print a summary report of the selection

        Args:
            result: Result dict from ``refine()``
            level: Output level (minimal, normal, verbose)
        """
        print(OutputFormatter.format_console(OutputFormatter.build_report(result), level))
