from __future__ import annotations

from datetime import datetime

from ..core.enums import PunchType
from ..timings.model import StoreTimings
from .factory import PunchStatusStrategyFactory
from .model import Punch, coerce_punch_type
from .strategies.base import PunchClassification

_factory = PunchStatusStrategyFactory()


def classify(timestamp: datetime, direction: PunchType | str, timings: StoreTimings) -> PunchClassification:
    """Compare one IN/OUT time with the store hours.

    Deterministic: the cached status on a stored punch can always be checked
    by classifying it again.
    """
    strategy = _factory.for_direction(coerce_punch_type(direction))
    return strategy.classify(at=timestamp, timings=timings)


def annotate(punch: Punch, timings: StoreTimings) -> Punch:
    """Return the punch with its status cache filled in (break punches unchanged)."""
    if punch.type not in (PunchType.IN, PunchType.OUT):
        return punch
    result = classify(punch.at, punch.type, timings)
    return punch.with_status(result.status, result.message)
