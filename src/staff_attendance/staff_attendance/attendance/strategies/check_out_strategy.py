from __future__ import annotations

from ...core.enums import PunchStatus
from ...timings.model import StoreTimings
from .base import PunchStatusStrategy


class CheckOutStrategy(PunchStatusStrategy):
    """Departure against the evening closing time; grace only forgives leaving early."""

    def expected_minutes(self, timings: StoreTimings) -> int:
        return timings.check_out_minutes

    def status_for(self, diff: int, grace_minutes: int) -> PunchStatus:
        if diff > 0:
            return PunchStatus.OVERTIME
        if diff < -grace_minutes:
            return PunchStatus.EARLY
        return PunchStatus.ON_TIME
