"""Ledger processing pipeline.

Rows are classified, grouped by day, rolled up by month and projected onto
the category vocabulary. Every stage runs before any report is written, so a
bad row leaves no partial output behind.
"""
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional

from ledgerflow.config.settings import AppSettings
from ledgerflow.ledger.models import LedgerReport, MonthKey
from ledgerflow.ledger.classifier import EntryClassifier, RawRow
from ledgerflow.ledger.aggregator import DailyAggregator, MonthlyAggregator
from ledgerflow.ledger.projector import CategoryProjector
from ledgerflow.localization.labels import Localizer
from ledgerflow.tables.reader import read_rows
from ledgerflow.tables.writer import ReportWriter
from ledgerflow.utils.logger import get_logger, set_ledger_context

logger = get_logger()


@dataclass
class ProcessingResult:
    ledger: str
    entries: int = 0
    days: int = 0
    months: int = 0
    files_written: List[Path] = field(default_factory=list)


class LedgerProcessor:
    """Orchestrates the flow: rows -> entries -> days -> months -> reports."""

    def __init__(self, settings: AppSettings):
        self.settings = settings
        self.classifier = EntryClassifier(
            operation_types=settings.operation_types,
            always_income_sources=settings.always_income_sources,
            date_format=settings.date_format
        )
        self.daily_aggregator = DailyAggregator(
            settings.categories,
            strict_date_order=settings.strict_date_order
        )
        self.monthly_aggregator = MonthlyAggregator()
        self.projector = CategoryProjector(settings.categories)
        self.localizer = Localizer(
            settings.operation_labels,
            settings.month_names,
            date_format=settings.date_format
        )

    def process(self, rows: Iterable[RawRow]) -> LedgerReport:
        """Classify and aggregate a complete ledger."""
        entries = self.classifier.classify_all(rows)
        daily = self.daily_aggregator.aggregate(entries)
        monthly = self.monthly_aggregator.aggregate(daily.values())
        return LedgerReport(
            entries=entries,
            daily=daily,
            monthly=monthly,
            categories=list(self.settings.categories)
        )

    def load(self, input_path: Path) -> LedgerReport:
        """Read and process a ledger file."""
        input_path = Path(input_path)
        set_ledger_context(input_path.stem)
        return self.process(read_rows(input_path, self.settings.columns))

    def run(
        self,
        input_path: Path,
        output_dir: Path,
        start: Optional[date] = None,
        end: Optional[date] = None,
        month: Optional[MonthKey] = None
    ) -> ProcessingResult:
        """
        Process a ledger file and write the report tables.

        Args:
            input_path: Coinkeeper CSV export
            output_dir: Directory for the report files
            start: First day of the transaction listing
            end: Last day of the transaction listing
            month: Month for the category table; skipped when None

        Returns:
            ProcessingResult with counts and written files
        """
        input_path = Path(input_path)
        logger.info(f"Processing ledger {input_path.name}")
        report = self.load(input_path)

        projection = None
        if month is not None:
            projection = self.projector.project(report.monthly, month)

        s = self.settings
        writer = ReportWriter(output_dir, self.localizer, s.headers)
        result = ProcessingResult(
            ledger=input_path.stem,
            entries=len(report.entries),
            days=len(report.daily),
            months=len(report.monthly)
        )
        result.files_written.append(
            writer.write_entries(report.entries, s.records_file, s.records_delimiter, start, end)
        )
        result.files_written.append(
            writer.write_monthly(report.monthly, s.categories, s.monthly_file, s.monthly_delimiter)
        )
        if projection is not None:
            result.files_written.append(
                writer.write_category_statistics(projection, s.category_file, s.category_delimiter)
            )

        logger.info(
            f"Ledger {input_path.name} complete: "
            f"{result.entries} entries, {result.days} days, {result.months} months, "
            f"{len(result.files_written)} files written"
        )
        return result
