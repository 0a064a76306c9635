from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Union

import structlog

from ..common.validators import require_non_empty
from ..core.enums import LeaveType
from ..core.exceptions import ValidationError
from ..users.repository import UserRepository
from .calculator.base import DailyRateCalculator
from .calculator.standard_calculator import StandardDailyRateCalculator

logger = structlog.get_logger(__name__)

Number = Union[int, float, Decimal]
DailyRateFn = Callable[[str], Number]

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class LeaveDeduction:
    user_id: str
    work_date: date
    month: str
    leave_type: LeaveType
    daily_rate: Decimal
    amount: Decimal

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "date": self.work_date.isoformat(),
            "month": self.month,
            "leaveType": self.leave_type.value,
            "dailyRate": str(self.daily_rate),
            "amount": str(self.amount),
        }


def _to_decimal(value: Number) -> Decimal:
    try:
        rate = Decimal(str(value))
    except ArithmeticError:
        raise ValidationError(f"Invalid daily rate {value!r}")
    if not rate.is_finite():
        raise ValidationError(f"Invalid daily rate {value!r}")
    return rate


class LeaveDeductionBridge:
    """The only hook from attendance into payroll.

    Works out what an approved leave costs; applying it to a salary record
    is the caller's job.
    """

    def on_leave_approved(
        self,
        user_id: str,
        work_date: date,
        leave_type: LeaveType | str,
        daily_rate_fn: DailyRateFn,
    ) -> LeaveDeduction:
        user_id = require_non_empty(user_id, "userId")
        try:
            kind = LeaveType(leave_type)
        except ValueError:
            raise ValidationError(f"Invalid leave type {leave_type!r}")

        daily_rate = _to_decimal(daily_rate_fn(user_id))
        if daily_rate < 0:
            raise ValidationError("Daily rate cannot be negative")

        amount = daily_rate if kind == LeaveType.FULL else daily_rate / 2
        deduction = LeaveDeduction(
            user_id=user_id,
            work_date=work_date,
            month=work_date.strftime("%Y-%m"),
            leave_type=kind,
            daily_rate=daily_rate.quantize(_CENT, rounding=ROUND_HALF_UP),
            amount=amount.quantize(_CENT, rounding=ROUND_HALF_UP),
        )
        logger.info(
            "leave_deduction_computed",
            user_id=user_id,
            work_date=work_date.isoformat(),
            leave_type=kind.value,
            amount=str(deduction.amount),
        )
        return deduction


def daily_rate_from_users(
    users: UserRepository,
    calculator: DailyRateCalculator | None = None,
) -> DailyRateFn:
    """Build a ``daily_rate_fn`` that looks the employee up and applies ``calculator``."""
    calculator = calculator or StandardDailyRateCalculator()

    def daily_rate(user_id: str) -> Decimal:
        user = users.get_by_id(user_id)
        if user is None:
            raise ValidationError("Employee does not exist")
        return calculator.daily_rate(user)

    return daily_rate
