"""Tests for application settings."""
import unittest
import tempfile
import shutil
from pathlib import Path

import yaml

from ledgerflow.config.settings import AppSettings, DEFAULT_CONFIG_PATH
from ledgerflow.ledger.models import Operation
from ledgerflow.utils.exceptions import ConfigError


class TestAppSettings(unittest.TestCase):
    """Test AppSettings loading."""
    
    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())
        with open(DEFAULT_CONFIG_PATH, "r", encoding="utf-8") as f:
            self.config = yaml.safe_load(f)
    
    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)
    
    def _write(self, config) -> Path:
        path = self.test_dir / "settings.yaml"
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(config, f, allow_unicode=True)
        return path
    
    def test_load_defaults(self):
        """Test the packaged settings."""
        settings = AppSettings.load()
        
        self.assertEqual(settings.app_name, "LedgerFlow")
        self.assertEqual(settings.date_format, "%d.%m.%Y")
        self.assertEqual(settings.operation_types["Расход"], Operation.CONSUMPTION)
        self.assertEqual(settings.operation_types["Перевод"], Operation.TRANSFER)
        self.assertIn("Mining", settings.always_income_sources)
        self.assertEqual(len(settings.categories), 18)
        self.assertEqual(settings.categories[0], "Комиссии (black hole)")
        self.assertEqual(settings.month_names["09"], "Сентябрь")
        self.assertEqual(settings.columns["date"], "Данные")
        self.assertFalse(settings.strict_date_order)
    
    def test_load_custom_vocabulary(self):
        """Test that tables can be replaced from a user file."""
        self.config["ledger"]["categories"] = ["Еда"]
        self.config["ledger"]["always_income_sources"] = []
        settings = AppSettings.load(self._write(self.config))
        
        self.assertEqual(settings.categories, ["Еда"])
        self.assertEqual(settings.always_income_sources, [])
    
    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            AppSettings.load(self.test_dir / "absent.yaml")
    
    def test_missing_section(self):
        del self.config["reports"]
        
        with self.assertRaises(ConfigError):
            AppSettings.load(self._write(self.config))
    
    def test_unknown_operation_kind(self):
        self.config["ledger"]["operation_types"]["Возврат"] = "refund"
        
        with self.assertRaises(ConfigError) as ctx:
            AppSettings.load(self._write(self.config))
        self.assertIn("refund", str(ctx.exception))

    def test_missing_required_column(self):
        """Test that the amount column mapping is required."""
        del self.config["ledger"]["columns"]["amount"]

        with self.assertRaises(ConfigError) as ctx:
            AppSettings.load(self._write(self.config))
        self.assertIn("amount", str(ctx.exception))

    def test_missing_report_header(self):
        """Test that every report header label is required."""
        del self.config["labels"]["headers"]["spending"]

        with self.assertRaises(ConfigError) as ctx:
            AppSettings.load(self._write(self.config))
        self.assertIn("spending", str(ctx.exception))

    def test_non_numeric_month_key(self):
        """Test that month names must be keyed by number."""
        self.config["labels"]["months"]["x"] = "Икс"

        with self.assertRaises(ConfigError):
            AppSettings.load(self._write(self.config))


if __name__ == "__main__":
    unittest.main()
