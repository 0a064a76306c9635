from __future__ import annotations

from decimal import Decimal

from ...core.constants import DAYS_PER_MONTH
from ...users.model import User
from .base import DailyRateCalculator


class StandardDailyRateCalculator(DailyRateCalculator):
    """Standard rule: monthly base salary over a flat 30-day month."""

    def __init__(self, days_per_month: int = DAYS_PER_MONTH):
        self._days = Decimal(int(days_per_month))

    def daily_rate(self, user: User) -> Decimal:
        return Decimal(user.base_salary) / self._days
