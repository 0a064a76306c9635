from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import PunchType
from ..core.exceptions import ValidationError
from .strategies.base import PunchStatusStrategy
from .strategies.check_in_strategy import CheckInStrategy
from .strategies.check_out_strategy import CheckOutStrategy


@dataclass
class PunchStatusStrategyFactory:
    """Factory Pattern: choose the strategy for a punch direction."""

    def for_direction(self, direction: PunchType) -> PunchStatusStrategy:
        if direction == PunchType.IN:
            return CheckInStrategy()
        if direction == PunchType.OUT:
            return CheckOutStrategy()
        raise ValidationError(f"{direction.value} punches are not classified")
