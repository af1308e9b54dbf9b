"""Unified output formatting for run reports and console summaries"""

from typing import Any, Dict, List
import json
import os

import numpy as np

from ..alignment import Alignment


class OutputFormatter:
    """Formats selection results into the report schema and console output"""

    # Output levels
    OUTPUT_LEVELS = {"minimal", "normal", "verbose"}
    DEFAULT_LEVEL = "normal"

    @staticmethod
    def similarity_statistics(alignment: Alignment) -> Dict[str, Any]:
        """Distribution of similarities in ``alignment``"""
        sims = np.array([m.similarity for m in alignment], dtype=float)
        if sims.size == 0:
            return {"count": 0}
        p25, p50, p75 = np.percentile(sims, [25, 50, 75])
        return {
            "count": int(sims.size),
            "mean": round(float(sims.mean()), 4),
            "stdev": round(float(sims.std(ddof=1)) if sims.size > 1 else 0.0, 4),
            "min": round(float(sims.min()), 4),
            "max": round(float(sims.max()), 4),
            "percentiles": {
                "p25": round(float(p25), 4),
                "p50": round(float(p50), 4),
                "p75": round(float(p75), 4),
            },
        }

    @staticmethod
    def build_report(result: Dict[str, Any]) -> Dict[str, Any]:
        """Build the JSON report from a result dict returned by
        ``AlignmentRefiner.refine()``.
        """
        run = result["run"]
        stats = result.get("stats", {})
        return {
            "summary": {
                "candidates": stats.get("candidates", 0),
                "selected": stats.get("selected", 0),
                "support_alignments": stats.get("support_alignments", 0),
                "processing_time_seconds": stats.get("processing_time_seconds", 0.0),
            },
            "similarity": OutputFormatter.similarity_statistics(result["alignment"]),
            "run": run.to_dict(),
        }

    @staticmethod
    def write_json(report: Dict[str, Any], path: str) -> str:
        path = os.path.abspath(path)
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, ensure_ascii=False, indent=2)
        return path

    @staticmethod
    def format_console(report: Dict[str, Any], level: str = DEFAULT_LEVEL) -> str:
        if level not in OutputFormatter.OUTPUT_LEVELS:
            level = OutputFormatter.DEFAULT_LEVEL

        summary = report["summary"]
        lines: List[str] = [
            "=" * 60,
            "Selection Report",
            "=" * 60,
            f"Candidates: {summary['candidates']}  ->  Selected: {summary['selected']}",
        ]
        if level == "minimal":
            return "\n".join(lines)

        run = report["run"]
        interactions = run.get("interactions")
        if interactions:
            lines.append(
                f"Oracle input: {interactions['total']} "
                f"(positive {interactions['positive']}, negative {interactions['negative']})"
            )
            if interactions["budget_exhausted"]:
                lines.append("Oracle rejection budget exhausted")
        if run.get("fallback_reason"):
            lines.append(f"Interactive selection fell back: {run['fallback_reason']}")

        sim = report["similarity"]
        if sim.get("count"):
            lines.append(
                f"Similarity: mean={sim['mean']:.4f} min={sim['min']:.4f} "
                f"max={sim['max']:.4f}"
            )
        lines.append(f"Time: {summary['processing_time_seconds']:.2f}s")

        if level == "verbose":
            lines.append("-" * 60)
            for name, stage in run["stages"].items():
                lines.append(
                    f"  {name:<12} {stage['mappings']:>8} mappings  {stage['seconds']:.4f}s"
                )
            lines.append(f"  config: {json.dumps(run['config'])}")
        return "\n".join(lines)
