"""Logging infrastructure with ledger context."""
import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] [ledger:%(ledger)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LedgerContextFilter(logging.Filter):
    """Add ledger context to log records."""
    
    def __init__(self):
        super().__init__()
        self.ledger: Optional[str] = None
    
    def filter(self, record):
        """Add ledger name to record."""
        record.ledger = self.ledger or "system"
        return True


class LedgerFlowLogger:
    """Centralized logging manager."""
    
    def __init__(self, log_level: str = "INFO"):
        self.ledger_filter = LedgerContextFilter()
        self.formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        self.log_file: Optional[Path] = None
        
        self.logger = logging.getLogger("ledgerflow")
        self.logger.setLevel(getattr(logging, log_level.upper()))
        
        # Remove existing handlers
        self.logger.handlers.clear()
        
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(self.formatter)
        console_handler.addFilter(self.ledger_filter)
        self.logger.addHandler(console_handler)
    
    def set_level(self, log_level: str):
        """Change the logger level."""
        self.logger.setLevel(getattr(logging, log_level.upper()))
    
    def enable_file_logging(self, log_dir: Path, max_bytes: int, backup_count: int):
        """Attach a rotating file handler writing to log_dir/ledgerflow.log."""
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = log_dir / "ledgerflow.log"
        
        for handler in list(self.logger.handlers):
            if isinstance(handler, RotatingFileHandler):
                self.logger.removeHandler(handler)
                handler.close()
        
        file_handler = RotatingFileHandler(
            self.log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(self.formatter)
        file_handler.addFilter(self.ledger_filter)
        self.logger.addHandler(file_handler)
    
    def set_ledger_context(self, ledger: Optional[str]):
        """Set current ledger context for logging."""
        self.ledger_filter.ledger = ledger
    
    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[LedgerFlowLogger] = None


def _instance(log_level: str = "INFO") -> LedgerFlowLogger:
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = LedgerFlowLogger(log_level)
    return _logger_instance


def get_logger(log_level: str = "INFO") -> logging.Logger:
    """Get or create global logger instance."""
    return _instance(log_level).get_logger()


def configure_logging(
    log_level: str,
    log_dir: Optional[Path] = None,
    max_file_size_mb: int = 10,
    backup_count: int = 30
) -> logging.Logger:
    """Apply level and optional file logging from settings."""
    manager = _instance(log_level)
    manager.set_level(log_level)
    if log_dir:
        manager.enable_file_logging(log_dir, max_file_size_mb * 1024 * 1024, backup_count)
    return manager.get_logger()


def set_ledger_context(ledger: Optional[str]):
    """Set ledger context for logging."""
    _instance().set_ledger_context(ledger)
