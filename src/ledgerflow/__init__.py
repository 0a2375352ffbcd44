"""LedgerFlow: Coinkeeper ledger classification and monthly rollups."""

__version__ = "0.1.0"
