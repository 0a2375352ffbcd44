"""Display labels for operation kinds, months and dates."""
from datetime import date
from typing import Dict, Union

from ledgerflow.ledger.models import MonthKey, Operation
from ledgerflow.utils.exceptions import LocalizationError, UnknownMonthNumberError


class Localizer:
    """Renders abstract keys as display strings."""

    def __init__(
        self,
        operation_labels: Dict[Operation, str],
        month_names: Dict[str, str],
        date_format: str = "%d.%m.%Y"
    ):
        missing = [op.value for op in Operation if op not in operation_labels]
        if missing:
            raise LocalizationError(f"No display label for operations: {', '.join(missing)}")
        missing = [f"{n:02d}" for n in range(1, 13) if f"{n:02d}" not in month_names]
        if missing:
            raise LocalizationError(f"No month name for: {', '.join(missing)}")
        self.operation_labels = dict(operation_labels)
        self.month_names = dict(month_names)
        self.date_format = date_format

    def operation(self, operation: Operation) -> str:
        return self.operation_labels[operation]

    def month_name(self, month_number: str) -> str:
        """Name of a month given as "01".."12"."""
        try:
            return self.month_names[month_number]
        except KeyError:
            raise UnknownMonthNumberError(f"Unknown month number: {month_number}")

    def month_year(self, month_key: Union[MonthKey, str]) -> str:
        """Render "09.2021" (or the matching MonthKey) as "Сентябрь 2021"."""
        month_number, _, year = str(month_key).partition(".")
        return f"{self.month_name(month_number)} {year}"

    def date(self, day: date) -> str:
        return day.strftime(self.date_format)
