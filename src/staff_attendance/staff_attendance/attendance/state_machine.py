from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import LedgerState, PunchType
from .model import Punch

_STATE_AFTER = {
    PunchType.IN: LedgerState.CHECKED_IN,
    PunchType.BREAK_START: LedgerState.ON_BREAK,
    PunchType.BREAK_END: LedgerState.CHECKED_IN,
    PunchType.OUT: LedgerState.CHECKED_OUT,
}

# Which states each punch may be recorded from.
ALLOWED_FROM = {
    PunchType.IN: frozenset({LedgerState.NOT_STARTED, LedgerState.CHECKED_OUT}),
    PunchType.BREAK_START: frozenset({LedgerState.CHECKED_IN}),
    PunchType.BREAK_END: frozenset({LedgerState.ON_BREAK}),
    PunchType.OUT: frozenset({LedgerState.CHECKED_IN}),
}


def state_after(punch_type: Optional[PunchType]) -> LedgerState:
    if punch_type is None:
        return LedgerState.NOT_STARTED
    return _STATE_AFTER[punch_type]


def current_state(punches: Sequence[Punch]) -> LedgerState:
    """The ledger state is a function of its last punch only; it is never stored."""
    return state_after(punches[-1].type if punches else None)


def can_follow(previous: Optional[PunchType], next_type: PunchType) -> bool:
    return state_after(previous) in ALLOWED_FROM[next_type]
