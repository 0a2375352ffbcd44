"""Orchestrator module."""
from .processor import LedgerProcessor, ProcessingResult

__all__ = ["LedgerProcessor", "ProcessingResult"]
