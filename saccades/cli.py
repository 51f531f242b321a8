"""Command line interface for fixation detection."""
from __future__ import annotations

import argparse
import logging
import sys

from .analyzer import DiagnosticPlotter, PlotConfig
from .config import THRESHOLD_SCOPES, DetectionConfig
from .errors import SaccadeDetectionError
from .io import read_fixations, read_samples, write_fixations
from .pipeline import FixationDetector, detect_fixations_parallel
from .summary import calculate_summary, format_summary

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Detect fixations in raw eye-tracking samples")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    detect = sub.add_parser("detect", help="Detect fixations and write them as TSV")
    detect.add_argument("input", help="TSV with time, trial, x and y columns")
    detect.add_argument("output", help="Path to write the fixation TSV")
    detect.add_argument(
        "--lambda",
        dest="lam",
        type=float,
        default=15.0,
        help="Multiple of the median-based velocity SD used as threshold",
    )
    detect.add_argument(
        "--no-smooth-coordinates",
        action="store_true",
        help="Skip the moving average over x/y before velocity estimation",
    )
    detect.add_argument(
        "--no-smooth-saccades",
        action="store_true",
        help="Do not join saccades separated by a single sample",
    )
    detect.add_argument(
        "--threshold-scope",
        choices=THRESHOLD_SCOPES,
        default="dataset",
        help="Compute one threshold for the whole file or one per trial",
    )
    detect.add_argument(
        "--jobs",
        type=int,
        default=None,
        help="Process trials in parallel with this many joblib workers",
    )
    detect.add_argument("--sep", default="\t", help="Column separator of the input file")
    detect.add_argument("--summary", action="store_true", help="Print summary statistics")

    summary = sub.add_parser("summary", help="Print summary statistics for a fixation TSV")
    summary.add_argument("input", help="Fixation TSV written by `detect`")
    summary.add_argument("--digits", type=int, default=2, help="Rounding of the printed table")

    plot = sub.add_parser("plot", help="Plot samples and fixations for visual inspection")
    plot.add_argument("samples", help="Sample TSV")
    plot.add_argument("fixations", help="Fixation TSV written by `detect`")
    plot.add_argument("output", help="Path to write the generated plot (png or pdf)")
    plot.add_argument("--max-fixations", type=int, default=20, help="Fixations in the initial view")
    plot.add_argument("--sep", default="\t", help="Column separator of the sample file")
    plot.add_argument(
        "--show",
        action="store_true",
        help="Display the plot window in addition to saving the file (uses your default backend)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "detect":
            cfg = DetectionConfig(
                lam=args.lam,
                smooth_coordinates=not args.no_smooth_coordinates,
                smooth_saccades=not args.no_smooth_saccades,
                threshold_scope=args.threshold_scope,
            )
            samples = read_samples(args.input, sep=args.sep)
            if args.jobs:
                fixations = detect_fixations_parallel(samples, cfg, n_jobs=args.jobs)
            else:
                fixations = FixationDetector(cfg).run(samples).fixations
            write_fixations(fixations, args.output)
            logger.info("Wrote %s fixations to %s", len(fixations), args.output)
            if args.summary:
                calculate_summary(fixations, verbose=True)
            return 0

        if args.command == "summary":
            stats = calculate_summary(read_fixations(args.input))
            print(format_summary(stats, digits=args.digits))
            return 0

        if args.command == "plot":
            cfg = PlotConfig(max_fixations=args.max_fixations, show=args.show)
            samples = read_samples(args.samples, sep=args.sep)
            DiagnosticPlotter(cfg).plot(samples, read_fixations(args.fixations), args.output)
            return 0
    except SaccadeDetectionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
