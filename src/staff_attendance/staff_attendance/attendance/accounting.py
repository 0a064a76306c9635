"""Folding a day's punches into work and break minutes.

Everything here is a pure function of its arguments. Persisted totals use the
closed evaluation (``as_of=None``); a running clock passes ``as_of=now`` and
gets the live figure, which is only ever displayed.
"""
from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from ..core.enums import PunchType
from .model import Punch, Session, Totals

_ZERO = timedelta(0)


def round_minutes(span: timedelta) -> int:
    """Nearest whole minute, halves rounded up."""
    return int(math.floor(span.total_seconds() / 60 + 0.5))


def _span(start: datetime, end: datetime) -> timedelta:
    return max(end - start, _ZERO)


def accumulate(punches: Iterable[Punch], as_of: Optional[datetime] = None) -> tuple[timedelta, timedelta]:
    """Unrounded (work, break) durations.

    Punches without their opening counterpart (an OUT with no IN, a BREAK_END
    with no BREAK_START) are skipped rather than rejected so that imported or
    hand-edited days still render.
    """
    work = _ZERO
    brk = _ZERO
    last_in: Optional[datetime] = None
    last_break_start: Optional[datetime] = None

    for punch in punches:
        if punch.type == PunchType.IN:
            last_in = punch.at
        elif punch.type == PunchType.OUT:
            if last_in is not None:
                work += _span(last_in, punch.at)
                last_in = None
            # an unreturned break is closed without being counted
            last_break_start = None
        elif punch.type == PunchType.BREAK_START:
            if last_in is not None:
                work += _span(last_in, punch.at)
                last_in = None
                last_break_start = punch.at
        elif punch.type == PunchType.BREAK_END:
            if last_break_start is not None:
                brk += _span(last_break_start, punch.at)
                last_break_start = None
                last_in = punch.at

    if as_of is not None:
        if last_in is not None:
            work += _span(last_in, as_of)
        if last_break_start is not None:
            brk += _span(last_break_start, as_of)

    return work, brk


def compute_totals(punches: Iterable[Punch], as_of: Optional[datetime] = None) -> Totals:
    work, brk = accumulate(punches, as_of)
    return Totals(work_min=round_minutes(work), break_min=round_minutes(brk))


def split_sessions(punches: Sequence[Punch], as_of: Optional[datetime] = None) -> list[Session]:
    """Group a ledger into IN -> OUT sessions.

    An OUT (or a stray punch) without an open session does not start one. The
    last session stays open (``ended_at=None``) when the day has not been
    closed; its minutes are live when ``as_of`` is given.
    """
    sessions: list[Session] = []
    current: list[Punch] = []

    for punch in punches:
        if punch.type == PunchType.IN and not current:
            current = [punch]
        elif current:
            current.append(punch)
            if punch.type == PunchType.OUT:
                totals = compute_totals(current)
                sessions.append(Session(current[0].at, punch.at, totals.work_min, totals.break_min))
                current = []

    if current:
        totals = compute_totals(current, as_of)
        sessions.append(Session(current[0].at, None, totals.work_min, totals.break_min))
    return sessions
