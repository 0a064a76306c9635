from __future__ import annotations

from ...core.enums import PunchStatus
from ...timings.model import StoreTimings
from .base import PunchStatusStrategy


class CheckInStrategy(PunchStatusStrategy):
    """Arrival against the morning opening time; grace only forgives lateness."""

    def expected_minutes(self, timings: StoreTimings) -> int:
        return timings.check_in_minutes

    def status_for(self, diff: int, grace_minutes: int) -> PunchStatus:
        if diff < 0:
            return PunchStatus.EARLY
        if diff > grace_minutes:
            return PunchStatus.LATE
        return PunchStatus.ON_TIME
