"""Command-line interface for the on-call summary tool."""

import argparse
import logging
import sys
from typing import Optional

from oncallsummary.coverage.reconciler import CoverageReconciler, ReconcilerConfig
from oncallsummary.domain.models import parse_service_time
from oncallsummary.domain.policies import NegativeDurationPolicy, UnknownEngineerPolicy
from oncallsummary.exceptions import (
    ConfigurationError,
    TimeFormatError,
    UnknownEngineerError,
)
from oncallsummary.output.debug_generator import DebugGenerator
from oncallsummary.output.pdf_generator import PDFGenerator
from oncallsummary.output.summary_reporter import SummaryReporter
from oncallsummary.source.pagerduty import PagerDutyConfig, PagerDutyScheduleSource

DEFAULT_SCHEDULE_NAME = "ACDC Oncall Schedule"
DEFAULT_SINCE = "2018-06-01T00:00:01+00:00"
DEFAULT_UNTIL = "2018-07-01T00:00:01+00:00"

logger = logging.getLogger(__name__)


def service_timestamp(text: str) -> str:
    """argparse type: accept only service-format timestamps, keep the text."""
    try:
        parse_service_time(text)
    except TimeFormatError:
        raise argparse.ArgumentTypeError(
            f"invalid timestamp {text!r}, expected YYYY-MM-DDTHH:MM:SS+HH:MM"
        )
    return text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oncall-summary",
        description="Summarize who covered which on-call layer, and for how long",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --token TOKEN                          Summarize the default schedule
  %(prog)s -t TOKEN --name "Platform On-call"     Summarize another schedule
  %(prog)s -t TOKEN --since 2018-06-01T00:00:00+00:00 --until 2018-06-08T00:00:00+00:00
  %(prog)s -t TOKEN --output oncall.pdf           Also write a PDF summary
  %(prog)s -t TOKEN --debug-output audit.txt      Also write every record and skip
        """,
    )

    parser.add_argument(
        "--token", "-t",
        type=str,
        default="",
        help="Auth token for PagerDuty (required)",
    )
    parser.add_argument(
        "--name", "-n",
        type=str,
        default=DEFAULT_SCHEDULE_NAME,
        help=f"Name of the on-call schedule to extract (default: {DEFAULT_SCHEDULE_NAME})",
    )
    parser.add_argument(
        "--since",
        type=service_timestamp,
        default=DEFAULT_SINCE,
        help=f"Extract data since this timestamp (default: {DEFAULT_SINCE})",
    )
    parser.add_argument(
        "--until",
        type=service_timestamp,
        default=DEFAULT_UNTIL,
        help=f"Extract data until this timestamp (default: {DEFAULT_UNTIL})",
    )
    parser.add_argument(
        "--unknown-engineers",
        type=str,
        default=UnknownEngineerPolicy.DROP.value,
        choices=[p.value for p in UnknownEngineerPolicy],
        help="Coverage for engineers missing from the user list: "
             "drop with a warning, create them, or fail (default: drop)",
    )
    parser.add_argument(
        "--negative-durations",
        type=str,
        default=NegativeDurationPolicy.REJECT.value,
        choices=[p.value for p in NegativeDurationPolicy],
        help="Entries ending before they start: reject or clamp to 0 (default: reject)",
    )
    parser.add_argument(
        "--shift-layers-only",
        action="store_true",
        help="Only report layers with at least one normal turn",
    )
    parser.add_argument(
        "--hide-empty",
        action="store_true",
        help="Print only the header for engineers without coverage",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        help="Output PDF file path",
    )
    parser.add_argument(
        "--debug-output",
        type=str,
        help="Write every extracted record and skipped entry to this text file",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Per-request timeout in seconds (default: 30)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every remote request",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        pd_config = PagerDutyConfig(token=args.token, timeout_seconds=args.timeout)
    except ConfigurationError as e:
        parser.print_usage(sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        return 2

    configure_logging(args.verbose)

    reconciler = CoverageReconciler(
        PagerDutyScheduleSource(pd_config),
        ReconcilerConfig(
            negative_duration_policy=NegativeDurationPolicy(args.negative_durations),
            unknown_engineer_policy=UnknownEngineerPolicy(args.unknown_engineers),
        ),
    )

    schedule_id = reconciler.resolve_schedule_id(args.name)
    print(f"Extracting Schedule {schedule_id or ''} from {args.since} to {args.until}\n")

    try:
        result = reconciler.reconcile_schedule(schedule_id, args.since, args.until)
    except UnknownEngineerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    reporter = SummaryReporter(
        include_override_only_layers=not args.shift_layers_only,
        show_empty=not args.hide_empty,
    )
    reporter.report(result.overviews)

    if args.output:
        stats = result.get_stats()
        generator = PDFGenerator(reporter=reporter)
        generator.generate(
            result.overviews,
            args.output,
            title=f"On-call Summary - {args.name}",
            subtitle=f"{args.since} to {args.until}",
            footer=(
                f"{stats['records']} records, {stats['skipped_entries']} skipped entries, "
                f"{stats['dropped_records']} dropped records, "
                f"{stats['failed_windows']} failed windows"
            ),
        )
        logger.info("PDF written to %s", args.output)

    if args.debug_output:
        DebugGenerator().generate(result, args.debug_output)
        logger.info("Debug output written to %s", args.debug_output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
