"""Tests for the ledger processing pipeline."""
import unittest
import tempfile
import shutil
from datetime import date
from decimal import Decimal
from pathlib import Path

import yaml

from ledgerflow.config.settings import AppSettings, DEFAULT_CONFIG_PATH
from ledgerflow.ledger.classifier import RawRow
from ledgerflow.ledger.models import MonthKey, Operation
from ledgerflow.orchestrator.processor import LedgerProcessor
from ledgerflow.main import main
from ledgerflow.utils.exceptions import (
    DataConsistencyError,
    UnknownMonthError,
    UnknownOperationError
)

HEADER = "Данные,Тип,Из,В,Метки,Сумма,Валюта,Сумма в др.валюте,Др.валюта,Повторение,Заметка\n"
LEDGER = (
    HEADER
    + '01.09.2021,Расход,Карта,Продукты,,"100,50",RUB,,,,\n'
    + "01.09.2021,Расход,Карта,Еда,,50.00,RUB,,,,\n"
    + "02.09.2021,Доход,Зарплата,Карта,,5000.00,RUB,,,,\n"
    + "15.10.2021,Расход,Mining,Карта,,0.75,RUB,,,,\n"
)


def raw(day, declared_type, source, destination, amount):
    return RawRow(date=day, declared_type=declared_type, source=source,
                  destination=destination, amount=amount)


class TestLedgerProcessor(unittest.TestCase):
    """Test LedgerProcessor functionality."""
    
    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())
        self.processor = LedgerProcessor(AppSettings.load())
        self.input_path = self.test_dir / "data.csv"
        self.input_path.write_text(LEDGER, encoding="utf-8")
        self.output_dir = self.test_dir / "out"
    
    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)
    
    def test_process_scenario(self):
        """Test the three-entry scenario through every stage."""
        report = self.processor.process([
            raw("01.09.2021", "Расход", "Карта", "Продукты", "100.50"),
            raw("01.09.2021", "Расход", "Карта", "Еда", "50.00"),
            raw("02.09.2021", "Доход", "Зарплата", "Карта", "5000.00"),
        ])
        
        day = report.daily[date(2021, 9, 1)]
        self.assertEqual(day.consumption_total, Decimal("-150.50"))
        self.assertEqual(day.category_spend["Продукты"], Decimal("-100.50"))
        self.assertEqual(day.category_spend["Еда"], Decimal("-50.00"))
        
        month = report.monthly[MonthKey(2021, 9)]
        self.assertEqual(month.consumption_total, Decimal("-150.50"))
        self.assertEqual(month.income_total, Decimal("5000.00"))
    
    def test_unknown_operation_aborts(self):
        """Test that a bad declared type stops the run."""
        with self.assertRaises(UnknownOperationError):
            self.processor.process([
                raw("01.09.2021", "Расход", "Карта", "Еда", "1"),
                raw("02.09.2021", "Obscure", "Карта", "Еда", "1"),
            ])
    
    def test_override_into_category_is_inconsistent(self):
        """Test that an overridden row pointing at a category is a data error."""
        with self.assertRaises(DataConsistencyError):
            self.processor.process([raw("01.09.2021", "Расход", "Mining", "Еда", "1")])
    
    def test_run_writes_reports(self):
        """Test a full run from file to report files."""
        result = self.processor.run(
            self.input_path,
            self.output_dir,
            start=date(2021, 9, 1),
            end=date(2021, 9, 30),
            month=MonthKey(2021, 9)
        )
        
        self.assertEqual(result.ledger, "data")
        self.assertEqual(result.entries, 4)
        self.assertEqual(result.days, 3)
        self.assertEqual(result.months, 2)
        self.assertEqual(
            sorted(p.name for p in result.files_written),
            ["monthly_category_statistics.csv", "monthly_records.csv", "records.csv"]
        )
        records = (self.output_dir / "records.csv").read_text(encoding="utf-8").splitlines()
        self.assertEqual(len(records), 4)  # header + September rows
        categories = (self.output_dir / "monthly_category_statistics.csv").read_text(encoding="utf-8").splitlines()
        self.assertEqual(len(categories), 19)
    
    def test_override_income_in_load(self):
        """Test that the Mining row becomes positive income."""
        report = self.processor.load(self.input_path)
        
        mining = report.entries[-1]
        self.assertEqual(mining.operation, Operation.INCOME)
        self.assertEqual(mining.amount, Decimal("0.75"))
        self.assertEqual(report.monthly[MonthKey(2021, 10)].income_total, Decimal("0.75"))
    
    def test_unknown_month_writes_nothing(self):
        """Test that a failed run leaves no output."""
        with self.assertRaises(UnknownMonthError):
            self.processor.run(self.input_path, self.output_dir, month=MonthKey(2020, 7))
        
        self.assertFalse(self.output_dir.exists())
    
    def test_cli_run(self):
        """Test the command line entry point."""
        main([
            "run", str(self.input_path),
            "--output-dir", str(self.output_dir),
            "--from", "01.09.2021",
            "--to", "30.09.2021",
            "--month", "09.2021",
        ])
        
        self.assertTrue((self.output_dir / "monthly_records.csv").exists())
    
    def test_cli_error_exits(self):
        """Test that a fatal error exits with status 1."""
        with self.assertRaises(SystemExit) as ctx:
            main([str(self.input_path), "--output-dir", str(self.output_dir), "--month", "07.2020"])
        self.assertEqual(ctx.exception.code, 1)
    
    def test_cli_bad_config_exits(self):
        """Test that a settings file without the amount column exits with status 1."""
        with open(DEFAULT_CONFIG_PATH, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
        del config["ledger"]["columns"]["amount"]
        config_path = self.test_dir / "settings.yaml"
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(config, f, allow_unicode=True)
        
        with self.assertRaises(SystemExit) as ctx:
            main([str(self.input_path), "--output-dir", str(self.output_dir), "--config", str(config_path)])
        self.assertEqual(ctx.exception.code, 1)
        self.assertFalse(self.output_dir.exists())


if __name__ == "__main__":
    unittest.main()
