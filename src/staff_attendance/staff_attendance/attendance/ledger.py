from __future__ import annotations

import uuid
from bisect import bisect_right
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..core.enums import LedgerState, PunchType
from .accounting import compute_totals, split_sessions
from .model import Punch, Session, Totals
from .state_machine import current_state


@dataclass(frozen=True)
class AttendanceLedger:
    """All punches of one user on one calendar date.

    ``punches`` is kept in chronological order and ``totals`` is derived from
    it when the ledger is built, so the stored figure can never drift from the
    punches. New punches go through :meth:`insert_punch`.
    """

    id: str
    user_id: str
    work_date: date
    punches: tuple[Punch, ...] = ()
    totals: Totals = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "punches", tuple(self.punches))
        object.__setattr__(self, "totals", compute_totals(self.punches))

    @classmethod
    def new(cls, *, user_id: str, work_date: date) -> "AttendanceLedger":
        return cls(id=str(uuid.uuid4()), user_id=str(user_id), work_date=work_date)

    def insertion_index(self, at: datetime) -> int:
        """Slot for a punch at ``at``; ties go after punches already recorded."""
        return bisect_right(self.punches, at, key=lambda p: p.at)

    def insert_punch(self, punch: Punch) -> "AttendanceLedger":
        index = self.insertion_index(punch.at)
        punches = self.punches[:index] + (punch,) + self.punches[index:]
        return AttendanceLedger(id=self.id, user_id=self.user_id, work_date=self.work_date, punches=punches)

    @property
    def last_punch(self) -> Optional[Punch]:
        return self.punches[-1] if self.punches else None

    @property
    def state(self) -> LedgerState:
        return current_state(self.punches)

    def live_totals(self, now: datetime) -> Totals:
        return compute_totals(self.punches, as_of=now)

    def sessions(self, as_of: Optional[datetime] = None) -> list[Session]:
        return split_sessions(self.punches, as_of)

    def first(self, punch_type: PunchType) -> Optional[Punch]:
        return next((p for p in self.punches if p.type == punch_type), None)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "userId": self.user_id,
            "date": self.work_date.isoformat(),
            "punches": [p.to_dict() for p in self.punches],
            "totals": self.totals.to_dict(),
        }
        status: dict[str, str] = {}
        check_in = self.first(PunchType.IN)
        check_out = self.first(PunchType.OUT)
        if check_in and check_in.status:
            status["checkIn"] = check_in.status.value
        if check_out and check_out.status:
            status["checkOut"] = check_out.status.value
        if status:
            data["status"] = status
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttendanceLedger":
        work_date = data["date"]
        if isinstance(work_date, str):
            work_date = parse_iso_date(work_date)
        punches = sorted((Punch.from_dict(p) for p in data.get("punches") or []), key=lambda p: p.at)
        return cls(id=str(data["id"]), user_id=str(data["userId"]), work_date=work_date, punches=tuple(punches))
