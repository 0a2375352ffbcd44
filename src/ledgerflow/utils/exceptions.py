"""Custom exception classes for LedgerFlow."""


class LedgerFlowError(Exception):
    """Base exception for LedgerFlow."""
    pass


class ConfigError(LedgerFlowError):
    """Configuration-related errors."""
    pass


class TableError(LedgerFlowError):
    """Tabular input/output errors."""
    pass


# Classification errors
class ClassificationError(LedgerFlowError):
    """Raw row could not be turned into an entry."""
    pass


class MalformedDateError(ClassificationError):
    """Date field does not match the expected format."""
    pass


class MalformedAmountError(ClassificationError):
    """Amount field is not a decimal number."""
    pass


class UnknownOperationError(ClassificationError):
    """Declared operation type is not one of the known kinds."""
    pass


# Aggregation errors
class AggregationError(LedgerFlowError):
    """Errors raised while building buckets."""
    pass


class DataConsistencyError(AggregationError):
    """Entries contradict the classification contract."""
    pass


class UnsortedLedgerError(DataConsistencyError):
    """Ledger is not sorted by date while strict ordering is required."""
    pass


class UnknownMonthError(AggregationError):
    """No monthly bucket exists for the requested month."""
    pass


# Localization errors
class LocalizationError(LedgerFlowError):
    """Display rendering errors."""
    pass


class UnknownMonthNumberError(LocalizationError):
    """Month number outside 01-12."""
    pass
