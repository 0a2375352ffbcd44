"""Projection of a month's category spend onto the category vocabulary."""
from decimal import Decimal
from typing import Dict, List, Sequence, Tuple

from .models import ZERO, MonthKey, MonthlyBucket
from ledgerflow.utils.exceptions import UnknownMonthError


class CategoryProjector:
    """Lists one month's spend per category in vocabulary order."""

    def __init__(self, categories: Sequence[str]):
        self.categories = list(categories)

    def project(
        self,
        monthly: Dict[MonthKey, MonthlyBucket],
        month_key: MonthKey
    ) -> List[Tuple[str, Decimal]]:
        """
        Project the requested month onto every known category.

        Args:
            monthly: Monthly buckets keyed by month
            month_key: Month to project

        Returns:
            (category, amount) pairs, zero where the month has no spend
        """
        bucket = monthly.get(month_key)
        if bucket is None:
            raise UnknownMonthError(f"No data for month {month_key}")
        return self.project_bucket(bucket)

    def project_bucket(self, bucket: MonthlyBucket) -> List[Tuple[str, Decimal]]:
        return [
            (category, bucket.category_spend.get(category, ZERO))
            for category in self.categories
        ]
