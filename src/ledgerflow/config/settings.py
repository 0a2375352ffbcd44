"""Application settings loader from YAML configuration."""
import yaml
from pathlib import Path
from typing import Dict, List, Optional
from dataclasses import dataclass

from ledgerflow.ledger.models import Operation
from ledgerflow.utils.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default.yaml"

REQUIRED_COLUMNS = ("date", "declared_type", "amount")
REQUIRED_HEADERS = ("date", "amount", "type", "source", "destination", "note", "spending", "category")


@dataclass
class AppSettings:
    """Application-wide settings loaded from a YAML file."""
    
    # App info
    app_name: str
    app_version: str
    
    # Logging
    log_level: str
    log_max_file_size_mb: int
    log_backup_count: int
    log_dir: Optional[str]
    
    # Ledger format and classification tables
    date_format: str
    strict_date_order: bool
    columns: Dict[str, str]  # field name -> input column header
    operation_types: Dict[str, Operation]  # declared type -> operation
    always_income_sources: List[str]
    categories: List[str]
    
    # Reports
    records_file: str
    monthly_file: str
    category_file: str
    records_delimiter: str
    monthly_delimiter: str
    category_delimiter: str
    
    # Labels
    operation_labels: Dict[Operation, str]
    month_names: Dict[str, str]
    headers: Dict[str, str]
    
    @classmethod
    def load(cls, config_path: Path = None) -> "AppSettings":
        """Load settings from YAML file."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH
        config_path = Path(config_path)
        
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")
        
        with open(config_path, "r", encoding="utf-8") as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        
        try:
            return cls.from_dict(config)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ConfigError(f"Missing or invalid setting in {config_path}: {e}") from e
    
    @classmethod
    def from_dict(cls, config: dict) -> "AppSettings":
        ledger = config["ledger"]
        reports = config["reports"]
        labels = config["labels"]
        _require(ledger["columns"], REQUIRED_COLUMNS, "ledger.columns")
        _require(labels["headers"], REQUIRED_HEADERS, "labels.headers")
        
        return cls(
            app_name=config["app"]["name"],
            app_version=str(config["app"]["version"]),
            log_level=config["logging"]["level"],
            log_max_file_size_mb=config["logging"]["max_file_size_mb"],
            log_backup_count=config["logging"]["backup_count"],
            log_dir=config["logging"].get("log_dir"),
            date_format=ledger["date_format"],
            strict_date_order=bool(ledger.get("strict_date_order", False)),
            columns=dict(ledger["columns"]),
            operation_types={
                str(declared): _operation(kind)
                for declared, kind in ledger["operation_types"].items()
            },
            always_income_sources=[str(s) for s in ledger["always_income_sources"]],
            categories=[str(c) for c in ledger["categories"]],
            records_file=reports["records_file"],
            monthly_file=reports["monthly_file"],
            category_file=reports["category_file"],
            records_delimiter=reports["records_delimiter"],
            monthly_delimiter=reports["monthly_delimiter"],
            category_delimiter=reports["category_delimiter"],
            operation_labels={
                _operation(kind): label for kind, label in labels["operations"].items()
            },
            month_names={f"{int(k):02d}": v for k, v in labels["months"].items()},
            headers=dict(labels["headers"])
        )


def _require(section: dict, keys, name: str) -> None:
    missing = [key for key in keys if not section.get(key)]
    if missing:
        raise ConfigError(f"Missing keys in {name}: {', '.join(missing)}")


def _operation(kind: str) -> Operation:
    try:
        return Operation(kind)
    except ValueError:
        known = ", ".join(op.value for op in Operation)
        raise ConfigError(f"Unknown operation kind {kind!r}, expected one of: {known}")


# Global settings instance
_settings: AppSettings = None


def get_settings(config_path: Path = None) -> AppSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None or config_path is not None:
        _settings = AppSettings.load(config_path)
    return _settings
