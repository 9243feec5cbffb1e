"""
Main entry point for the journey analysis application.

This module provides the main execution flow: it processes one daily batch
file and prints the answers to the daily journey queries.

Usage:
    python -m journey_analytics.main <file-path> [batch-date]
    # or, once installed
    journey-analytics <file-path> [batch-date]
"""

import argparse
import dataclasses
import sys
import logging
from typing import List, Optional

from .config import Settings, get_settings
from .services import ProcessingPipeline
from .reports import ConsoleReporter, ReportGenerator


def setup_logging(level: int = logging.INFO) -> None:
    """
    Configure application logging.

    Args:
        level: Logging level (default: INFO)
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def print_banner() -> None:
    """Print application banner."""
    print("=" * 60)
    print("  DAILY JOURNEY ANALYSIS")
    print("  Version 1.0.0")
    print("=" * 60)


def build_parser() -> argparse.ArgumentParser:
    """Command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="journey-analytics",
        description="Clean a daily journey batch file and report on it.",
    )
    parser.add_argument("file_path", help="batch file with one journey per line")
    parser.add_argument(
        "batch_date", nargs="?", default=None,
        help="batch date (YYYY-MM-DD); taken from the file name when omitted",
    )
    parser.add_argument("--timezone", help="IANA zone used to read the timestamps")
    parser.add_argument("--min-duration", type=float, help="minimum journey duration in minutes")
    parser.add_argument(
        "--no-export", action="store_true",
        help="skip the Excel workbook and Word report",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def settings_from_args(args: argparse.Namespace, base: Settings) -> Settings:
    """Apply command-line overrides on top of the configured settings."""
    settings = base
    if args.timezone:
        settings = dataclasses.replace(
            settings, time=dataclasses.replace(settings.time, timezone=args.timezone)
        )
    if args.min_duration is not None:
        settings = dataclasses.replace(
            settings, queries=dataclasses.replace(settings.queries, min_duration=args.min_duration)
        )
    return settings


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    logger = logging.getLogger(__name__)
    settings = settings_from_args(args, get_settings())

    try:
        pipeline = ProcessingPipeline(settings)

        logger.info("Starting journey analysis pipeline")
        result = pipeline.run(args.file_path, args.batch_date, export=not args.no_export)

        if not result.success:
            logger.error(f"Pipeline failed: {result.message}")
            print(f"\n✗ Processing failed: {result.message}")
            return 1

        print_banner()
        print(f"Batch Date: {result.batch_date}")

        ConsoleReporter().render(
            result.duration_matches,
            result.min_duration,
            result.speed_matches,
            result.mileage_by_driver,
            result.most_active_driver,
        )

        if not args.no_export:
            report_path = ReportGenerator(settings).generate(result)
            if report_path:
                logger.info(f"Report generated: {report_path}")

        return 0

    except Exception as e:
        logger.exception("Unexpected error during execution")
        print(f"\n✗ Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
