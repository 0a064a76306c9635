from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Optional, Sequence

import structlog

from ..common.datetime_utils import now_local
from ..common.validators import optional_text, require_non_empty
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import PunchType
from ..core.exceptions import ValidationError
from ..timings.model import StoreTimings
from ..users.repository import UserRepository
from .classifier import annotate
from .ledger import AttendanceLedger
from .locks import KeyedLock
from .manual import ManualPunchAuthorizer
from .model import Punch, Session, Totals, coerce_punch_type
from .repository import AttendanceRepository
from .rollover import DayRolloverHandler
from .state_machine import can_follow

logger = structlog.get_logger(__name__)


class AttendanceService:
    """Use case: record punches and read attendance.

    ``record_punch`` is the only way a ledger changes. It always hands back a
    ledger whose totals were recomputed from its punches.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        timings: StoreTimings,
        *,
        users: Optional[UserRepository] = None,
        rollover: Optional[DayRolloverHandler] = None,
        manual: Optional[ManualPunchAuthorizer] = None,
        locks: Optional[KeyedLock] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._timings = timings
        self._rollover = rollover or DayRolloverHandler(attendance)
        self._manual = manual or ManualPunchAuthorizer(users)
        self._locks = locks or KeyedLock()
        self._clock = clock

    def record_punch(
        self,
        user_id: str,
        punch_type: PunchType | str,
        *,
        reason: Optional[str] = None,
        manual_punch: bool = False,
        punched_by: Optional[str] = None,
        custom_time: datetime | str | None = None,
        remote_punch: bool = False,
        selfie_url: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceLedger:
        user_id = require_non_empty(user_id, "userId")
        kind = coerce_punch_type(punch_type)
        now = now or self._clock()

        if manual_punch:
            punch = self._manual.authorize(
                user_id,
                kind,
                custom_time if custom_time is not None else now,
                punched_by,
                reason,
                remote_punch=remote_punch,
                selfie_url=selfie_url,
                now=now,
            )
        else:
            if custom_time is not None:
                raise ValidationError("customTime is only accepted for manual punches")
            punch = Punch(
                at=now,
                type=kind,
                punched_by=optional_text(punched_by),
                reason=optional_text(reason),
                remote_punch=bool(remote_punch),
                selfie_url=optional_text(selfie_url),
            )

        punch = annotate(punch, self._timings)
        work_date = punch.at.date()

        with self._locks.hold(user_id):
            closed = None
            if punch.type == PunchType.IN:
                closed = self._rollover.pending_close(user_id, work_date)

            ledger = self._attendance.get_for_user_and_date(user_id, work_date)
            if ledger is None:
                ledger = AttendanceLedger.new(user_id=user_id, work_date=work_date)

            if punch.manual_punch:
                updated = self._manual.insert(ledger, punch)
            else:
                self._warn_if_out_of_sequence(ledger, punch)
                updated = ledger.insert_punch(punch)

            # Both writes happen only once the new punch has been accepted.
            if closed is not None:
                self._rollover.commit(closed)
            self._attendance.save(updated)

        logger.info(
            "punch_recorded",
            user_id=user_id,
            work_date=work_date.isoformat(),
            punch_type=punch.type.value,
            at=punch.at.isoformat(),
            manual=punch.manual_punch,
            status=punch.status.value if punch.status else None,
            work_min=updated.totals.work_min,
            break_min=updated.totals.break_min,
        )
        return updated

    def get_today_attendance(self, user_id: str, *, today: Optional[date] = None) -> Optional[AttendanceLedger]:
        today = today or self._clock().date()
        return self._attendance.get_for_user_and_date(str(user_id), today)

    def get_attendance_history(self, user_id: str, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceLedger]:
        return self._attendance.get_recent_for_user(str(user_id), int(limit))

    def get_all_attendance(self) -> Sequence[AttendanceLedger]:
        return self._attendance.get_all()

    def get_live_totals(self, user_id: str, *, now: Optional[datetime] = None) -> Totals:
        """Running totals for today's ledger. Read-only and never persisted."""
        now = now or self._clock()
        ledger = self._attendance.get_for_user_and_date(str(user_id), now.date())
        if ledger is None:
            return Totals()
        return ledger.live_totals(now)

    def get_sessions(self, user_id: str, work_date: date, *, now: Optional[datetime] = None) -> list[Session]:
        ledger = self._attendance.get_for_user_and_date(str(user_id), work_date)
        if ledger is None:
            return []
        return ledger.sessions(now)

    @staticmethod
    def _warn_if_out_of_sequence(ledger: AttendanceLedger, punch: Punch) -> None:
        # Self-service punches are stored as sent; totals skip unmatched punches.
        previous = ledger.last_punch
        if not can_follow(previous.type if previous else None, punch.type):
            logger.warning(
                "punch_out_of_sequence",
                user_id=ledger.user_id,
                work_date=ledger.work_date.isoformat(),
                previous=previous.type.value if previous else None,
                punch_type=punch.type.value,
            )
