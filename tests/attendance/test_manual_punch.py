from datetime import date, datetime
from decimal import Decimal

import pytest

from src.staff_attendance.staff_attendance.attendance.manual import ManualPunchAuthorizer
from src.staff_attendance.staff_attendance.core.enums import PunchType, Role
from src.staff_attendance.staff_attendance.core.exceptions import AuthorizationError, OrderingError, ValidationError
from src.staff_attendance.staff_attendance.users.model import User
from tests.fakes import InMemoryUsers, at, ledger_of, punch

DAY = date(2026, 3, 2)
NOW = datetime(2026, 3, 2, 20, 0)


def _users():
    return InMemoryUsers(
        {
            "admin-1": User(user_id="admin-1", full_name="Admin", role=Role.ADMIN),
            "staff-1": User(user_id="staff-1", full_name="Staff", role=Role.STAFF, base_salary=Decimal("30000")),
        }
    )


def test_authorize_tags_punch_with_caller():
    authorizer = ManualPunchAuthorizer()

    result = authorizer.authorize("staff-1", "IN", "2026-03-02T09:00:00", "admin-1", reason=" forgot to punch ", now=NOW)

    assert result.type == PunchType.IN
    assert result.at == at(DAY, 9, 0)
    assert result.manual_punch is True
    assert result.punched_by == "admin-1"
    assert result.reason == "forgot to punch"


def test_authorize_rejects_bad_input():
    authorizer = ManualPunchAuthorizer()

    with pytest.raises(ValidationError):
        authorizer.authorize("staff-1", "LUNCH", at(DAY, 9, 0), "admin-1", now=NOW)
    with pytest.raises(ValidationError):
        authorizer.authorize("staff-1", "IN", "yesterday morning", "admin-1", now=NOW)
    with pytest.raises(ValidationError):
        authorizer.authorize("staff-1", "IN", at(DAY, 9, 0), "  ", now=NOW)
    with pytest.raises(ValidationError):
        authorizer.authorize("staff-1", "BREAK_START", at(DAY, 13, 0), "admin-1", now=NOW)


def test_authorize_rejects_future_time():
    with pytest.raises(ValidationError):
        ManualPunchAuthorizer().authorize("staff-1", "OUT", at(DAY, 21, 0), "admin-1", now=NOW)


def test_only_admins_may_enter_manual_punches():
    authorizer = ManualPunchAuthorizer(_users())

    with pytest.raises(AuthorizationError):
        authorizer.authorize("staff-1", "IN", at(DAY, 9, 0), "staff-1", now=NOW)
    with pytest.raises(AuthorizationError):
        authorizer.authorize("staff-1", "IN", at(DAY, 9, 0), "nobody", now=NOW)
    with pytest.raises(ValidationError):
        authorizer.authorize("ghost", "IN", at(DAY, 9, 0), "admin-1", now=NOW)

    assert authorizer.authorize("staff-1", "IN", at(DAY, 9, 0), "admin-1", now=NOW).manual_punch


def test_backdated_punch_lands_in_chronological_slot():
    authorizer = ManualPunchAuthorizer()
    ledger = ledger_of("staff-1", DAY, punch("IN", at(DAY, 9, 0)), punch("IN", at(DAY, 14, 0)), punch("OUT", at(DAY, 18, 0)))
    assert ledger.totals.work_min == 240

    manual = authorizer.authorize("staff-1", "OUT", at(DAY, 13, 0), "admin-1", now=NOW)
    updated = authorizer.insert(ledger, manual)

    assert [(p.type, p.at.hour) for p in updated.punches] == [
        (PunchType.IN, 9),
        (PunchType.OUT, 13),
        (PunchType.IN, 14),
        (PunchType.OUT, 18),
    ]
    assert updated.totals.work_min == 240 + 240


def test_consecutive_check_ins_are_rejected():
    authorizer = ManualPunchAuthorizer()
    ledger = ledger_of("staff-1", DAY, punch("IN", at(DAY, 9, 0)))

    manual = authorizer.authorize("staff-1", "IN", at(DAY, 10, 0), "admin-1", now=NOW)
    with pytest.raises(OrderingError):
        authorizer.insert(ledger, manual)

    assert len(ledger.punches) == 1


def test_conflict_with_following_punch_is_rejected():
    authorizer = ManualPunchAuthorizer()
    ledger = ledger_of("staff-1", DAY, punch("IN", at(DAY, 9, 0)), punch("OUT", at(DAY, 18, 0)))

    manual = authorizer.authorize("staff-1", "BREAK_START", at(DAY, 13, 0), "admin-1", reason="lunch", now=NOW)
    with pytest.raises(OrderingError) as exc:
        authorizer.insert(ledger, manual)

    assert "cannot follow" in str(exc.value)


def test_day_cannot_start_with_check_out():
    authorizer = ManualPunchAuthorizer()
    ledger = ledger_of("staff-1", DAY)

    manual = authorizer.authorize("staff-1", "OUT", at(DAY, 18, 0), "admin-1", now=NOW)
    with pytest.raises(OrderingError, match="cannot start the day"):
        authorizer.insert(ledger, manual)


def test_punch_must_belong_to_ledger_date():
    authorizer = ManualPunchAuthorizer()
    ledger = ledger_of("staff-1", DAY)

    manual = authorizer.authorize("staff-1", "IN", datetime(2026, 3, 1, 9, 0), "admin-1", now=NOW)
    with pytest.raises(ValidationError):
        authorizer.insert(ledger, manual)
