"""Command line entry point."""
import sys
import argparse
from datetime import datetime
from pathlib import Path

from ledgerflow.config.settings import AppSettings
from ledgerflow.ledger.models import MonthKey
from ledgerflow.orchestrator.processor import LedgerProcessor
from ledgerflow.utils.logger import configure_logging, get_logger
from ledgerflow.utils.exceptions import LedgerFlowError

logger = get_logger()


def run_command(processor: LedgerProcessor, args: argparse.Namespace) -> None:
    """Write the report tables for a ledger."""
    date_format = processor.settings.date_format
    start = _parse_day(args.date_from, date_format) if args.date_from else None
    end = _parse_day(args.date_to, date_format) if args.date_to else None
    month = _parse_month(args.month) if args.month else None

    result = processor.run(args.input, args.output_dir, start=start, end=end, month=month)
    for path in result.files_written:
        print(f"✓ {path}")


def months_command(processor: LedgerProcessor, args: argparse.Namespace) -> None:
    """Print the months present in a ledger with their totals."""
    report = processor.load(args.input)
    localizer = processor.localizer

    print(f"\nTotal: {len(report.monthly)} months")
    print(f"{'Month':<20} {'Consumption':>14} {'Income':>14} {'Transfer':>14}")
    print("-" * 65)
    for key, bucket in report.monthly.items():
        print(
            f"{localizer.month_year(key):<20} {bucket.consumption_total:>14} "
            f"{bucket.income_total:>14} {bucket.transaction_total:>14}"
        )


def _parse_day(text: str, date_format: str):
    try:
        return datetime.strptime(text, date_format).date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"Date {text!r} does not match {date_format}")


def _parse_month(text: str) -> MonthKey:
    try:
        return MonthKey.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="LedgerFlow Coinkeeper ledger reports")
    parser.add_argument(
        "command",
        nargs="?",
        choices=["run", "months"],
        default="run",
        help="Command to execute (default: run)"
    )
    parser.add_argument("input", type=Path, help="Coinkeeper CSV export")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory for report files (default: current directory)"
    )
    parser.add_argument("--from", dest="date_from", help="First day of the transaction listing")
    parser.add_argument("--to", dest="date_to", help="Last day of the transaction listing")
    parser.add_argument("--month", help="Month for the category table, as MM.YYYY")
    parser.add_argument("--config", type=Path, help="Settings YAML (default: packaged settings)")
    return parser


def main(argv=None):
    """Main entry point for LedgerFlow."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = AppSettings.load(args.config)
        configure_logging(
            settings.log_level,
            Path(settings.log_dir) if settings.log_dir else None,
            settings.log_max_file_size_mb,
            settings.log_backup_count
        )
        processor = LedgerProcessor(settings)

        if args.command == "months":
            months_command(processor, args)
        else:
            run_command(processor, args)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    except LedgerFlowError as e:
        logger.critical(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
