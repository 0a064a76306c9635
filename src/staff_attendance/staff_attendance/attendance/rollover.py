from __future__ import annotations

from datetime import date
from typing import Optional

import structlog

from ..common.datetime_utils import end_of_day, previous_day
from ..core.enums import PunchType
from .ledger import AttendanceLedger
from .model import Punch
from .repository import AttendanceRepository

logger = structlog.get_logger(__name__)

# Last punch types that leave yesterday's session (or break) open.
_OPEN_TYPES = frozenset({PunchType.IN, PunchType.BREAK_END, PunchType.BREAK_START})


class DayRolloverHandler:
    """Close a session left open on the previous calendar date.

    Runs before a new IN is recorded. If yesterday's ledger still ends in an
    open state, a synthetic OUT at 23:59:59.999 of that date is added and the
    ledger saved with recomputed totals. An unreturned break is closed but its
    break time is not counted.

    ``pending_close`` only builds the closed ledger; ``commit`` stores it. The
    punch service keeps them apart so nothing is written when the new punch
    is rejected.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def pending_close(self, user_id: str, work_date: date) -> Optional[AttendanceLedger]:
        prior = self._attendance.get_for_user_and_date(user_id, previous_day(work_date))
        if prior is None or prior.last_punch is None:
            return None
        if prior.last_punch.type not in _OPEN_TYPES:
            return None
        return prior.insert_punch(Punch(at=end_of_day(prior.work_date), type=PunchType.OUT))

    def commit(self, closed: AttendanceLedger) -> None:
        self._attendance.save(closed)
        logger.info(
            "rollover_closed_session",
            user_id=closed.user_id,
            work_date=closed.work_date.isoformat(),
            left_open_by=closed.punches[-2].type.value,
            work_min=closed.totals.work_min,
            break_min=closed.totals.break_min,
        )

    def close_previous_day(self, user_id: str, work_date: date) -> Optional[AttendanceLedger]:
        closed = self.pending_close(user_id, work_date)
        if closed is not None:
            self.commit(closed)
        return closed
