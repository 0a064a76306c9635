from datetime import time

import pytest

from src.staff_attendance.staff_attendance.core.constants import DEFAULT_STORE_TIMINGS
from src.staff_attendance.staff_attendance.core.exceptions import ConfigurationError
from src.staff_attendance.staff_attendance.timings.model import StoreTimings


def test_defaults():
    timings = StoreTimings.default()

    assert timings.morning_start == time(9, 30)
    assert timings.evening_end == time(21, 30)
    assert timings.check_in_minutes == 570
    assert timings.grace_minutes == 0
    assert timings.to_dict() == DEFAULT_STORE_TIMINGS


def test_missing_key_fails_fast():
    mapping = dict(DEFAULT_STORE_TIMINGS)
    del mapping["eveningEnd"]

    with pytest.raises(ConfigurationError, match="eveningEnd"):
        StoreTimings.from_mapping(mapping)


@pytest.mark.parametrize("value", ["9.30", "25:00", "noon"])
def test_malformed_time_fails_fast(value):
    with pytest.raises(ConfigurationError):
        StoreTimings.from_mapping({**DEFAULT_STORE_TIMINGS, "morningStart": value})


def test_grace_must_be_non_negative():
    assert StoreTimings.from_mapping(DEFAULT_STORE_TIMINGS, grace_minutes="5").grace_minutes == 5
    with pytest.raises(ConfigurationError):
        StoreTimings.from_mapping(DEFAULT_STORE_TIMINGS, grace_minutes=-1)


def test_morning_must_precede_evening():
    with pytest.raises(ConfigurationError):
        StoreTimings.from_mapping({**DEFAULT_STORE_TIMINGS, "morningStart": "22:00"})
