from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role, used to attribute and authorize manual punches."""

    ADMIN = "admin"
    STAFF = "staff"


class PunchType(str, Enum):
    """Closed set of attendance events."""

    IN = "IN"
    OUT = "OUT"
    BREAK_START = "BREAK_START"
    BREAK_END = "BREAK_END"


class PunchStatus(str, Enum):
    """Classification of a check-in/check-out against store hours."""

    ON_TIME = "on-time"
    LATE = "late"
    EARLY = "early"
    OVERTIME = "overtime"


class LedgerState(str, Enum):
    """Where an employee stands in the day, derived from the last punch."""

    NOT_STARTED = "NOT_STARTED"
    CHECKED_IN = "CHECKED_IN"
    ON_BREAK = "ON_BREAK"
    CHECKED_OUT = "CHECKED_OUT"


class LeaveType(str, Enum):
    FULL = "full"
    HALF = "half"
