"""Ledger classification and aggregation module."""
from .models import Operation, MonthKey, Entry, DailyBucket, MonthlyBucket, LedgerReport
from .classifier import RawRow, EntryClassifier
from .aggregator import DailyAggregator, MonthlyAggregator
from .projector import CategoryProjector

__all__ = [
    "Operation",
    "MonthKey",
    "Entry",
    "DailyBucket",
    "MonthlyBucket",
    "LedgerReport",
    "RawRow",
    "EntryClassifier",
    "DailyAggregator",
    "MonthlyAggregator",
    "CategoryProjector"
]
