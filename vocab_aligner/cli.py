import argparse
import logging
from .api import AlignmentRefiner
from .errors import AlignerError
from .utils import build_config_from_args


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vocabulary Alignment Selection Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  vocab-aligner -i candidates.tsv -o results/
  vocab-aligner -i candidates.tsv -o results/ --policy hybrid --threshold 0.65
  vocab-aligner -i candidates.tsv -o results/ --interactive \\
      --reference reference.tsv --support lexical.tsv word.tsv string.tsv
        """,
    )

    parser.add_argument(
        "-i", "--input", required=True, help="TSV file with candidate mappings"
    )
    parser.add_argument(
        "-o", "--output", required=True, help="Output directory for results"
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Selection threshold in [0, 1] (default: 0.6)",
    )
    parser.add_argument(
        "--policy",
        choices=["strict", "permissive", "hybrid"],
        default=None,
        help="Selection policy (default: strict)",
    )
    parser.add_argument(
        "--support-rule",
        choices=["validate", "rescue"],
        default=None,
        help="How support alignments corroborate candidates (default: validate)",
    )
    parser.add_argument(
        "--support",
        nargs="+",
        default=[],
        help="TSV files of independently produced alignments (interactive panel)",
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Consult the oracle (requires --reference) on contested mappings",
    )
    parser.add_argument(
        "--reference", type=str, help="Reference alignment answering oracle queries"
    )
    parser.add_argument(
        "--error-rate",
        type=float,
        default=0.0,
        help="Probability that the simulated oracle answers wrongly (default: 0.0)",
    )
    parser.add_argument(
        "--oracle-timeout",
        type=float,
        default=None,
        help="Seconds allowed per oracle answer before falling back",
    )
    parser.add_argument(
        "--obsolete", type=str, help="File with one obsolete entity id per line"
    )
    parser.add_argument(
        "--config", type=str, help="JSON file with run configuration overrides"
    )
    parser.add_argument(
        "--alignment-file",
        type=str,
        help="Filename for the selected alignment. Simple filenames and relative paths are written into --output; absolute paths are used as-is.",
    )
    parser.add_argument(
        "--report-file",
        type=str,
        help="Filename for the JSON report, resolved like --alignment-file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output (show debug information)",
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    if args.interactive and not args.reference:
        logging.error("Error: --reference is required when using --interactive")
        return 1

    if args.interactive and len(args.support) < 2:
        logging.error(
            "Error: --interactive needs at least 2 --support alignments "
            "to measure disagreement"
        )
        return 1

    try:
        refiner = AlignmentRefiner(
            args.input,
            support_paths=args.support,
            reference_path=args.reference,
            obsolete_path=args.obsolete,
            error_rate=args.error_rate,
            oracle_timeout=args.oracle_timeout,
            config_path=args.config,
            **build_config_from_args(args),
        )
        result = refiner.refine()
        saved = refiner.save_results(
            result,
            args.output,
            alignment_file=args.alignment_file,
            report_file=args.report_file,
        )
        refiner.print_report(result, level="verbose" if args.verbose else "normal")
        io_info = saved.get("io", {})
        logging.info(f"Selected alignment written: {io_info.get('alignment_path')}")
        logging.info(f"Report written: {io_info.get('report_path')}")
        return 0
    except (AlignerError, FileNotFoundError) as e:
        logging.error(f"Error during selection: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
