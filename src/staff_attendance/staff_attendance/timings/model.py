from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Mapping

from ..common.datetime_utils import minutes_since_midnight, parse_hhmm
from ..core.constants import DEFAULT_GRACE_MINUTES, DEFAULT_STORE_TIMINGS
from ..core.exceptions import ConfigurationError

TIMING_KEYS = {
    "morningStart": "morning_start",
    "morningEnd": "morning_end",
    "lunchStart": "lunch_start",
    "lunchEnd": "lunch_end",
    "eveningStart": "evening_start",
    "eveningEnd": "evening_end",
}


@dataclass(frozen=True)
class StoreTimings:
    """Store opening hours used as reference points for punch classification.

    Loaded once at startup and passed explicitly to the classifier; nothing in
    the engine reads timings from module state.
    """

    morning_start: time
    morning_end: time
    lunch_start: time
    lunch_end: time
    evening_start: time
    evening_end: time
    grace_minutes: int = DEFAULT_GRACE_MINUTES

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str], *, grace_minutes: int = DEFAULT_GRACE_MINUTES) -> "StoreTimings":
        """Build from ``{"morningStart": "09:30", ...}``.

        Every key is required; a missing or malformed value fails fast.
        """
        values: dict[str, time] = {}
        missing = [k for k in TIMING_KEYS if k not in mapping or mapping[k] in (None, "")]
        if missing:
            raise ConfigurationError(f"STORE_TIMINGS missing keys: {', '.join(missing)}")

        for key, attr in TIMING_KEYS.items():
            raw = mapping[key]
            try:
                values[attr] = parse_hhmm(str(raw))
            except ValueError:
                raise ConfigurationError(f"STORE_TIMINGS.{key}={raw!r} is not a HH:MM time")

        try:
            grace = int(grace_minutes)
        except (TypeError, ValueError):
            raise ConfigurationError(f"GRACE_MINUTES={grace_minutes!r} is not an integer")
        if grace < 0:
            raise ConfigurationError("GRACE_MINUTES must not be negative")

        timings = cls(grace_minutes=grace, **values)
        if timings.morning_start >= timings.evening_end:
            raise ConfigurationError("STORE_TIMINGS.morningStart must be before eveningEnd")
        return timings

    @classmethod
    def default(cls) -> "StoreTimings":
        return cls.from_mapping(DEFAULT_STORE_TIMINGS)

    @property
    def check_in_minutes(self) -> int:
        return minutes_since_midnight(self.morning_start)

    @property
    def check_out_minutes(self) -> int:
        return minutes_since_midnight(self.evening_end)

    def to_dict(self) -> dict[str, str]:
        return {key: getattr(self, attr).strftime("%H:%M") for key, attr in TIMING_KEYS.items()}
