"""Utility modules."""
from .logger import get_logger, configure_logging, set_ledger_context
from .exceptions import (
    LedgerFlowError,
    ConfigError,
    TableError,
    ClassificationError,
    MalformedDateError,
    MalformedAmountError,
    UnknownOperationError,
    AggregationError,
    DataConsistencyError,
    UnsortedLedgerError,
    UnknownMonthError,
    LocalizationError,
    UnknownMonthNumberError
)

__all__ = [
    "get_logger",
    "configure_logging",
    "set_ledger_context",
    "LedgerFlowError",
    "ConfigError",
    "TableError",
    "ClassificationError",
    "MalformedDateError",
    "MalformedAmountError",
    "UnknownOperationError",
    "AggregationError",
    "DataConsistencyError",
    "UnsortedLedgerError",
    "UnknownMonthError",
    "LocalizationError",
    "UnknownMonthNumberError"
]
