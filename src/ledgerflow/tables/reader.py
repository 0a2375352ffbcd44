"""Coinkeeper CSV export reader."""
from pathlib import Path
from typing import Dict, Iterable, List

import pandas as pd

from ledgerflow.config.settings import REQUIRED_COLUMNS
from ledgerflow.ledger.classifier import RawRow
from ledgerflow.utils.logger import get_logger
from ledgerflow.utils.exceptions import TableError

logger = get_logger()


def read_rows(path: Path, columns: Dict[str, str]) -> List[RawRow]:
    """
    Read a Coinkeeper CSV export.

    Args:
        path: CSV file
        columns: RawRow field name -> column header in the file

    Returns:
        Raw rows in file order
    """
    path = Path(path)
    if not path.exists():
        raise TableError(f"Ledger file not found: {path}")

    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise TableError(f"Cannot read ledger {path.name}: {e}") from e

    df.columns = [str(c).strip() for c in df.columns]
    check_columns(df.columns, columns)
    rows = rows_from_records(df.to_dict(orient="records"), columns)
    logger.info(f"Read {len(rows)} rows from {path.name}")
    return rows


def check_columns(present: Iterable[str], columns: Dict[str, str]) -> None:
    """Fail when a required column header is absent."""
    present = set(present)
    missing = [columns[f] for f in REQUIRED_COLUMNS if columns[f] not in present]
    if missing:
        raise TableError(f"Ledger is missing columns: {', '.join(missing)}")


def rows_from_records(records: Iterable[Dict[str, str]], columns: Dict[str, str]) -> List[RawRow]:
    """Map header-keyed records onto RawRow fields."""
    records = list(records)
    if records:
        check_columns(records[0], columns)

    return [
        RawRow(**{field: record.get(header, "") for field, header in columns.items()})
        for record in records
    ]
