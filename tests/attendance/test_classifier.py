from datetime import datetime

import pytest

from src.staff_attendance.staff_attendance.attendance.classifier import annotate, classify
from src.staff_attendance.staff_attendance.attendance.factory import PunchStatusStrategyFactory
from src.staff_attendance.staff_attendance.attendance.model import Punch
from src.staff_attendance.staff_attendance.attendance.strategies.check_in_strategy import CheckInStrategy
from src.staff_attendance.staff_attendance.attendance.strategies.check_out_strategy import CheckOutStrategy
from src.staff_attendance.staff_attendance.core.constants import DEFAULT_STORE_TIMINGS
from src.staff_attendance.staff_attendance.core.enums import PunchStatus, PunchType
from src.staff_attendance.staff_attendance.core.exceptions import ValidationError
from src.staff_attendance.staff_attendance.timings.model import StoreTimings

TIMINGS = StoreTimings.default()


def on(hour, minute, second=0):
    return datetime(2026, 3, 2, hour, minute, second)


def test_check_in_before_opening_is_early():
    result = classify(on(9, 5), PunchType.IN, TIMINGS)

    assert result.status == PunchStatus.EARLY
    assert result.offset_minutes == 25
    assert result.message == "25 minutes early"


def test_check_in_after_opening_is_late():
    result = classify(on(10, 2), PunchType.IN, TIMINGS)

    assert (result.status, result.offset_minutes, result.message) == (PunchStatus.LATE, 32, "32 minutes late")


def test_seconds_are_discarded():
    result = classify(on(9, 30, 59), PunchType.IN, TIMINGS)

    assert result.status == PunchStatus.ON_TIME
    assert result.offset_minutes == 0
    assert result.message is None


def test_check_out_against_closing_time():
    early = classify(on(21, 0), PunchType.OUT, TIMINGS)
    overtime = classify(on(22, 15), PunchType.OUT, TIMINGS)
    exact = classify(on(21, 30), PunchType.OUT, TIMINGS)

    assert (early.status, early.message) == (PunchStatus.EARLY, "30 minutes early")
    assert (overtime.status, overtime.message) == (PunchStatus.OVERTIME, "45 minutes overtime")
    assert exact.status == PunchStatus.ON_TIME


def test_classify_is_idempotent():
    first = classify(on(9, 47), PunchType.IN, TIMINGS)
    second = classify(on(9, 47), PunchType.IN, TIMINGS)

    assert first == second


def test_direction_can_be_given_as_text():
    assert classify(on(9, 5), "in", TIMINGS).status == PunchStatus.EARLY


def test_break_punches_are_not_classified():
    with pytest.raises(ValidationError):
        classify(on(13, 0), PunchType.BREAK_START, TIMINGS)


def test_alternate_timings_are_honoured():
    timings = StoreTimings.from_mapping({**DEFAULT_STORE_TIMINGS, "morningStart": "08:00", "eveningEnd": "17:00"})

    assert classify(on(8, 10), PunchType.IN, timings).message == "10 minutes late"
    assert classify(on(17, 0), PunchType.OUT, timings).status == PunchStatus.ON_TIME


def test_grace_forgives_late_arrival_and_early_departure():
    timings = StoreTimings.from_mapping(DEFAULT_STORE_TIMINGS, grace_minutes=5)

    assert classify(on(9, 34), PunchType.IN, timings).status == PunchStatus.ON_TIME
    assert classify(on(9, 36), PunchType.IN, timings).status == PunchStatus.LATE
    assert classify(on(9, 29), PunchType.IN, timings).status == PunchStatus.EARLY
    assert classify(on(21, 26), PunchType.OUT, timings).status == PunchStatus.ON_TIME
    assert classify(on(21, 24), PunchType.OUT, timings).message == "6 minutes early"


def test_factory_picks_strategy_by_direction():
    factory = PunchStatusStrategyFactory()

    assert isinstance(factory.for_direction(PunchType.IN), CheckInStrategy)
    assert isinstance(factory.for_direction(PunchType.OUT), CheckOutStrategy)


def test_annotate_caches_status_on_in_and_out_only():
    check_in = annotate(Punch(at=on(9, 45), type=PunchType.IN), TIMINGS)
    break_end = annotate(Punch(at=on(14, 0), type=PunchType.BREAK_END), TIMINGS)

    assert check_in.status == PunchStatus.LATE
    assert check_in.status_message == "15 minutes late"
    assert break_end.status is None
