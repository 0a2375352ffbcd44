"""Data models for ledger processing."""
import re
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, NamedTuple

ZERO = Decimal("0")

_MONTH_KEY_PATTERN = re.compile(r"^(\d{1,2})\.(\d{4})$")


class Operation(Enum):
    """Closed set of operation kinds."""
    CONSUMPTION = "consumption"
    INCOME = "income"
    TRANSFER = "transfer"


class MonthKey(NamedTuple):
    """A (year, month) pair; ordering is chronological."""
    year: int
    month: int

    @classmethod
    def of(cls, day: date) -> "MonthKey":
        return cls(day.year, day.month)

    @classmethod
    def parse(cls, text: str) -> "MonthKey":
        """Parse the MM.YYYY form, e.g. "09.2021"."""
        match = _MONTH_KEY_PATTERN.match(text.strip())
        if not match:
            raise ValueError(f"Month must look like MM.YYYY, got {text!r}")
        return cls(int(match.group(2)), int(match.group(1)))

    def __str__(self) -> str:
        return f"{self.month:02d}.{self.year}"


@dataclass(frozen=True)
class Entry:
    """One classified transaction."""
    date: date
    operation: Operation
    source: str
    destination: str
    amount: Decimal  # negative for consumption
    note: str = ""


@dataclass(frozen=True)
class DailyBucket:
    """Totals for one calendar date."""
    date: date
    consumption_total: Decimal
    income_total: Decimal
    transaction_total: Decimal
    category_spend: Mapping[str, Decimal]  # category -> consumption for the day

    def __post_init__(self):
        object.__setattr__(self, "category_spend", MappingProxyType(dict(self.category_spend)))

    @property
    def month_key(self) -> MonthKey:
        return MonthKey.of(self.date)


@dataclass(frozen=True)
class MonthlyBucket:
    """Totals for one (month, year)."""
    month_key: MonthKey
    consumption_total: Decimal
    income_total: Decimal
    transaction_total: Decimal
    category_spend: Mapping[str, Decimal]  # category -> consumption for the month

    def __post_init__(self):
        object.__setattr__(self, "category_spend", MappingProxyType(dict(self.category_spend)))


@dataclass(frozen=True)
class LedgerReport:
    """Everything computed from one ledger."""
    entries: List[Entry]
    daily: Dict[date, DailyBucket]
    monthly: Dict[MonthKey, MonthlyBucket]
    categories: List[str] = field(default_factory=list)
