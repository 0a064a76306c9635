from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ...users.model import User


class DailyRateCalculator(ABC):
    """Calculator interface (Strategy Pattern for a day's pay)."""

    @abstractmethod
    def daily_rate(self, user: User) -> Decimal:
        raise NotImplementedError
