"""Raw row classification into ledger entries."""
from datetime import datetime, date
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field, field_validator

from .models import Entry, Operation
from ledgerflow.utils.logger import get_logger
from ledgerflow.utils.exceptions import (
    MalformedDateError,
    MalformedAmountError,
    UnknownOperationError
)

logger = get_logger()


class RawRow(BaseModel):
    """One row of a Coinkeeper export, as text."""
    date: str = Field(description="Transaction date in DD.MM.YYYY format")
    declared_type: str = Field(description="Declared operation type, e.g. Расход")
    source: str = Field(default="", description="Account or label money comes from")
    destination: str = Field(default="", description="Account or category money goes to")
    tags: List[str] = Field(default_factory=list)
    amount: str = Field(description="Amount with comma or dot decimal separator")
    currency: str = ""
    secondary_amount: str = ""
    secondary_currency: str = ""
    repeat: str = ""
    note: str = ""

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [tag.strip() for tag in value.split(",") if tag.strip()]
        return value


def parse_amount(text: str) -> Decimal:
    """Parse an amount such as "100,50" into an exact Decimal."""
    normalized = text.strip().replace(",", ".")
    try:
        amount = Decimal(normalized)
    except InvalidOperation:
        raise MalformedAmountError(f"Not a decimal amount: {text!r}")
    if not amount.is_finite():
        raise MalformedAmountError(f"Not a finite amount: {text!r}")
    return amount


def normalize_amount(operation: Operation, amount: Decimal) -> Decimal:
    """Store consumption as negative; safe to apply more than once."""
    if operation is Operation.CONSUMPTION:
        return -abs(amount)
    return amount


class EntryClassifier:
    """Turns raw rows into typed entries."""

    def __init__(
        self,
        operation_types: Dict[str, Operation],
        always_income_sources: Iterable[str],
        date_format: str = "%d.%m.%Y"
    ):
        """
        Initialize classifier.

        Args:
            operation_types: Declared type string -> operation kind
            always_income_sources: Sources that are income whatever the declared type
            date_format: strptime format of the date column
        """
        self.operation_types = dict(operation_types)
        self.always_income_sources = frozenset(always_income_sources)
        self.date_format = date_format

    def classify(self, row: RawRow, row_number: Optional[int] = None) -> Entry:
        """
        Classify one raw row.

        Args:
            row: Raw input row
            row_number: Position in the ledger, used in error messages

        Returns:
            Entry with resolved operation and normalized amount
        """
        where = f" (row {row_number})" if row_number is not None else ""
        try:
            day = self.parse_date(row.date)
            operation = self.resolve_operation(row.declared_type, row.source)
            amount = parse_amount(row.amount)
        except (MalformedDateError, MalformedAmountError, UnknownOperationError) as e:
            raise type(e)(f"{e}{where}") from e

        return Entry(
            date=day,
            operation=operation,
            source=row.source,
            destination=row.destination,
            amount=normalize_amount(operation, amount),
            note=row.note
        )

    def classify_all(self, rows: Iterable[RawRow]) -> List[Entry]:
        """Classify every row; the first bad row aborts."""
        entries = [self.classify(row, number) for number, row in enumerate(rows, start=1)]
        logger.info(f"Classified {len(entries)} entries")
        return entries

    def parse_date(self, text: str) -> date:
        """Parse a date that matches the format exactly, zero padding included."""
        text = text.strip()
        try:
            parsed = datetime.strptime(text, self.date_format)
        except ValueError:
            parsed = None
        if parsed is None or parsed.strftime(self.date_format) != text:
            raise MalformedDateError(f"Date {text!r} does not match {self.date_format}")
        return parsed.date()

    def resolve_operation(self, declared_type: str, source: str) -> Operation:
        """Always-income sources win over the declared type."""
        if source in self.always_income_sources:
            if self.operation_types.get(declared_type) is not Operation.INCOME:
                logger.debug(f"Source {source!r} overrides declared type {declared_type!r} to income")
            return Operation.INCOME

        try:
            return self.operation_types[declared_type]
        except KeyError:
            raise UnknownOperationError(f"Unknown operation {declared_type!r}")
