from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .ledger import AttendanceLedger


class AttendanceRepository(Protocol):
    """Document store keyed by (user_id, work_date).

    Implementations raise their own errors on failure; callers do not retry.
    """

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceLedger]:
        raise NotImplementedError

    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceLedger]:
        """Newest date first."""

        raise NotImplementedError

    def get_in_range(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[str] = None,
    ) -> Sequence[AttendanceLedger]:
        raise NotImplementedError

    def get_all(self) -> Sequence[AttendanceLedger]:
        raise NotImplementedError

    def save(self, ledger: AttendanceLedger) -> None:
        """Insert or replace the ledger for its (user_id, work_date)."""

        raise NotImplementedError
