"""Drive the attendance engine without Flask or MySQL.

Records a day with a lunch break, then a forgotten check-in that an admin
enters the next morning, and prints the ledgers.
"""

from datetime import date, datetime, time
from decimal import Decimal

from src.staff_attendance.staff_attendance.attendance.service import AttendanceService
from src.staff_attendance.staff_attendance.core.enums import Role
from src.staff_attendance.staff_attendance.core.logging import setup_logging
from src.staff_attendance.staff_attendance.timings.model import StoreTimings
from src.staff_attendance.staff_attendance.users.model import User


class DictAttendance:
    def __init__(self):
        self._rows = {}

    def get_for_user_and_date(self, user_id, work_date):
        return self._rows.get((user_id, work_date))

    def get_recent_for_user(self, user_id, limit):
        rows = sorted((r for r in self._rows.values() if r.user_id == user_id), key=lambda r: r.work_date, reverse=True)
        return rows[:limit]

    def get_in_range(self, *, start_date, end_date, user_id=None):
        return [r for r in self._rows.values() if start_date <= r.work_date <= end_date and user_id in (None, r.user_id)]

    def get_all(self):
        return list(self._rows.values())

    def save(self, ledger):
        self._rows[(ledger.user_id, ledger.work_date)] = ledger


class DictUsers:
    def __init__(self, *users):
        self._users = {u.user_id: u for u in users}

    def get_by_id(self, user_id):
        return self._users.get(user_id)


def main():
    setup_logging("INFO")
    users = DictUsers(
        User(user_id="a1", full_name="Store Admin", role=Role.ADMIN),
        User(user_id="e1", full_name="Lan", role=Role.STAFF, base_salary=Decimal("9000000")),
    )
    service = AttendanceService(DictAttendance(), StoreTimings.default(), users=users)

    day = date(2026, 3, 2)
    service.record_punch("e1", "IN", now=datetime.combine(day, time(9, 40)))
    service.record_punch("e1", "BREAK_START", reason="lunch", now=datetime.combine(day, time(13, 45)))
    service.record_punch("e1", "BREAK_END", now=datetime.combine(day, time(14, 30)))
    print(service.record_punch("e1", "OUT", now=datetime.combine(day, time(21, 35))).to_dict())

    # Next day: only an OUT was captured, the admin fills in the check-in.
    nxt = date(2026, 3, 3)
    service.record_punch("e1", "OUT", now=datetime.combine(nxt, time(21, 30)))
    ledger = service.record_punch(
        "e1",
        "IN",
        manual_punch=True,
        punched_by="a1",
        custom_time=datetime.combine(nxt, time(9, 30)),
        reason="badge reader offline",
        now=datetime.combine(nxt, time(22, 0)),
    )
    print(ledger.to_dict())


if __name__ == "__main__":
    main()
