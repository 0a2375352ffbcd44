"""CSV report writer."""
import json
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from ledgerflow.ledger.models import Entry, MonthKey, MonthlyBucket, Operation
from ledgerflow.ledger.projector import CategoryProjector
from ledgerflow.localization.labels import Localizer
from ledgerflow.utils.logger import get_logger

logger = get_logger()


def select_window(
    entries: Iterable[Entry],
    start: Optional[date] = None,
    end: Optional[date] = None
) -> List[Entry]:
    """Entries dated within [start, end]; an open side is unbounded."""
    return [
        e for e in entries
        if (start is None or e.date >= start) and (end is None or e.date <= end)
    ]


def serialize_spend(projection: Sequence[Tuple[str, Decimal]]) -> str:
    return json.dumps({category: str(amount) for category, amount in projection}, ensure_ascii=False)


class ReportWriter:
    """Writes the listing, monthly rollup and category tables."""

    def __init__(self, output_dir: Path, localizer: Localizer, headers: Dict[str, str]):
        self.output_dir = Path(output_dir)
        self.localizer = localizer
        self.headers = headers

    def write_entries(
        self,
        entries: Iterable[Entry],
        file_name: str,
        delimiter: str = ";",
        start: Optional[date] = None,
        end: Optional[date] = None
    ) -> Path:
        """Write the transaction listing restricted to a date window."""
        h = self.headers
        selected = select_window(entries, start, end)
        rows = [
            {
                h["date"]: self.localizer.date(e.date),
                h["amount"]: e.amount,
                h["type"]: self.localizer.operation(e.operation),
                h["source"]: e.source,
                h["destination"]: e.destination,
                h["note"]: e.note,
            }
            for e in selected
        ]
        columns = [h["date"], h["amount"], h["type"], h["source"], h["destination"], h["note"]]
        return self._write(rows, columns, file_name, delimiter)

    def write_monthly(
        self,
        monthly: Dict[MonthKey, MonthlyBucket],
        categories: Sequence[str],
        file_name: str,
        delimiter: str = ","
    ) -> Path:
        """Write one row per month with totals and the category map."""
        labels = {op: self.localizer.operation(op) for op in Operation}
        projector = CategoryProjector(categories)
        rows = [
            {
                self.headers["date"]: self.localizer.month_year(key),
                labels[Operation.CONSUMPTION]: bucket.consumption_total,
                labels[Operation.INCOME]: bucket.income_total,
                labels[Operation.TRANSFER]: bucket.transaction_total,
                self.headers["spending"]: serialize_spend(projector.project_bucket(bucket)),
            }
            for key, bucket in monthly.items()
        ]
        columns = [
            self.headers["date"],
            labels[Operation.CONSUMPTION],
            labels[Operation.INCOME],
            labels[Operation.TRANSFER],
            self.headers["spending"],
        ]
        return self._write(rows, columns, file_name, delimiter)

    def write_category_statistics(
        self,
        projection: Sequence[Tuple[str, Decimal]],
        file_name: str,
        delimiter: str = ";"
    ) -> Path:
        """Write one row per category for a single month."""
        category = self.headers["category"]
        consumption = self.localizer.operation(Operation.CONSUMPTION)
        rows = [{category: name, consumption: amount} for name, amount in projection]
        return self._write(rows, [category, consumption], file_name, delimiter)

    def _write(self, rows: List[dict], columns: List[str], file_name: str, delimiter: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / file_name
        pd.DataFrame(rows, columns=columns).to_csv(path, sep=delimiter, index=False, encoding="utf-8")
        logger.info(f"Wrote {len(rows)} rows to {path.name}")
        return path
