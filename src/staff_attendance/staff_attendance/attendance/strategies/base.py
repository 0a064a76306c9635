from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...common.datetime_utils import minutes_since_midnight
from ...core.enums import PunchStatus
from ...timings.model import StoreTimings


@dataclass(frozen=True)
class PunchClassification:
    status: PunchStatus
    offset_minutes: int
    message: Optional[str] = None


class PunchStatusStrategy(ABC):
    """Strategy Pattern: how a punch in one direction is judged against store hours."""

    @abstractmethod
    def expected_minutes(self, timings: StoreTimings) -> int:
        raise NotImplementedError

    @abstractmethod
    def status_for(self, diff: int, grace_minutes: int) -> PunchStatus:
        """``diff`` is actual minus expected, in whole minutes."""
        raise NotImplementedError

    def classify(self, *, at: datetime, timings: StoreTimings) -> PunchClassification:
        diff = minutes_since_midnight(at) - self.expected_minutes(timings)
        status = self.status_for(diff, timings.grace_minutes)
        offset = abs(diff)
        if status == PunchStatus.ON_TIME:
            return PunchClassification(status=status, offset_minutes=offset)
        return PunchClassification(status=status, offset_minutes=offset, message=f"{offset} minutes {status.value}")
