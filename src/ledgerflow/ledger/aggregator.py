"""Daily and monthly aggregation of ledger entries."""
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence

from .models import ZERO, DailyBucket, Entry, MonthKey, MonthlyBucket, Operation
from ledgerflow.utils.logger import get_logger
from ledgerflow.utils.exceptions import DataConsistencyError, UnsortedLedgerError

logger = get_logger()


def sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)


def merge_spend(maps: Iterable[Dict[str, Decimal]]) -> Dict[str, Decimal]:
    """Add category maps key by key; a missing key counts as zero."""
    merged = defaultdict(Decimal)
    for spend in maps:
        for category, amount in spend.items():
            merged[category] += amount
    return dict(merged)


class DailyAggregator:
    """Groups entries by date and reduces them to daily buckets."""

    def __init__(self, categories: Sequence[str], strict_date_order: bool = False):
        """
        Initialize aggregator.

        Args:
            categories: Category vocabulary, in report order
            strict_date_order: Require entries sorted ascending by date
        """
        self.categories = list(categories)
        self.strict_date_order = strict_date_order

    def aggregate(self, entries: Sequence[Entry]) -> Dict[date, DailyBucket]:
        """
        Build one bucket per distinct date.

        Args:
            entries: Classified entries

        Returns:
            Date -> DailyBucket, dates ascending
        """
        if self.strict_date_order:
            self._check_sorted(entries)

        by_date: Dict[date, List[Entry]] = defaultdict(list)
        for entry in entries:
            by_date[entry.date].append(entry)

        buckets = {day: self._reduce(day, by_date[day]) for day in sorted(by_date)}
        logger.info(f"Aggregated {len(entries)} entries into {len(buckets)} daily buckets")
        return buckets

    def _check_sorted(self, entries: Sequence[Entry]) -> None:
        for previous, current in zip(entries, entries[1:]):
            if current.date < previous.date:
                raise UnsortedLedgerError(
                    f"Ledger is not sorted by date: {current.date} follows {previous.date}"
                )

    def _reduce(self, day: date, entries: List[Entry]) -> DailyBucket:
        totals = defaultdict(Decimal)
        for entry in entries:
            totals[entry.operation] += entry.amount

        bucket = DailyBucket(
            date=day,
            consumption_total=totals[Operation.CONSUMPTION],
            income_total=totals[Operation.INCOME],
            transaction_total=totals[Operation.TRANSFER],
            category_spend=self._category_spend(entries)
        )
        logger.debug(f"Daily bucket {day}: consumption={bucket.consumption_total}")
        return bucket

    def _category_spend(self, entries: List[Entry]) -> Dict[str, Decimal]:
        spend = {category: ZERO for category in self.categories}
        for entry in entries:
            if entry.destination not in spend:
                continue
            if entry.operation is not Operation.CONSUMPTION:
                raise DataConsistencyError(
                    f"Entry {entry} goes to category {entry.destination!r} "
                    f"but is {entry.operation.value}, not consumption"
                )
            spend[entry.destination] += entry.amount
        return spend


class MonthlyAggregator:
    """Rolls daily buckets up into monthly buckets."""

    def aggregate(self, daily: Iterable[DailyBucket]) -> Dict[MonthKey, MonthlyBucket]:
        """
        Build one bucket per (month, year) present.

        Args:
            daily: Daily buckets, in any order

        Returns:
            MonthKey -> MonthlyBucket, months ascending
        """
        by_month: Dict[MonthKey, List[DailyBucket]] = defaultdict(list)
        for bucket in daily:
            by_month[bucket.month_key].append(bucket)

        monthly = {key: self._reduce(key, by_month[key]) for key in sorted(by_month)}
        logger.info(f"Rolled up {len(monthly)} months: {', '.join(str(key) for key in monthly)}")
        return monthly

    def _reduce(self, key: MonthKey, buckets: List[DailyBucket]) -> MonthlyBucket:
        return MonthlyBucket(
            month_key=key,
            consumption_total=sum_amounts(b.consumption_total for b in buckets),
            income_total=sum_amounts(b.income_total for b in buckets),
            transaction_total=sum_amounts(b.transaction_total for b in buckets),
            category_spend=merge_spend(b.category_spend for b in buckets)
        )
