from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_timestamp
from ..core.enums import PunchStatus, PunchType
from ..core.exceptions import ValidationError


def coerce_punch_type(value: Any) -> PunchType:
    if isinstance(value, PunchType):
        return value
    try:
        return PunchType(str(value).strip().upper())
    except ValueError:
        raise ValidationError(f"Invalid punch type {value!r}")


@dataclass(frozen=True)
class Punch:
    """Domain entity: one timestamped attendance event.

    Type-specific rules are checked on construction, so a Punch that exists is
    always well formed:

    - ``BREAK_START`` carries a non-blank ``reason``.
    - ``status``/``status_message`` only appear on ``IN`` and ``OUT``.
    - ``punched_by`` only appears on manual punches.
    """

    at: datetime
    type: PunchType
    manual_punch: bool = False
    punched_by: Optional[str] = None
    reason: Optional[str] = None
    remote_punch: bool = False
    selfie_url: Optional[str] = None
    status: Optional[PunchStatus] = None
    status_message: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, PunchType):
            raise ValidationError(f"Invalid punch type {self.type!r}")
        if not isinstance(self.at, datetime):
            raise ValidationError("Punch time must be a datetime")
        if self.at.tzinfo is not None:
            raise ValidationError("Punch time must be local wall-clock time (naive)")
        if self.type == PunchType.BREAK_START and not (self.reason or "").strip():
            raise ValidationError("A reason is required to start a break")
        if self.status is not None and self.type not in (PunchType.IN, PunchType.OUT):
            raise ValidationError("Only IN and OUT punches carry a status")
        if self.punched_by and not self.manual_punch:
            raise ValidationError("punched_by is only recorded for manual punches")

    def with_status(self, status: Optional[PunchStatus], message: Optional[str]) -> "Punch":
        return replace(self, status=status, status_message=message)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"at": self.at.isoformat(timespec="milliseconds"), "type": self.type.value}
        if self.manual_punch:
            data["manualPunch"] = True
            if self.punched_by:
                data["punchedBy"] = self.punched_by
        if self.reason:
            data["reason"] = self.reason
        if self.remote_punch:
            data["remotePunch"] = True
        if self.selfie_url:
            data["selfieUrl"] = self.selfie_url
        if self.status is not None:
            data["status"] = self.status.value
            if self.status_message:
                data["statusMessage"] = self.status_message
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Punch":
        status = data.get("status")
        return cls(
            at=parse_timestamp(data["at"]),
            type=coerce_punch_type(data["type"]),
            manual_punch=bool(data.get("manualPunch", False)),
            punched_by=data.get("punchedBy"),
            reason=data.get("reason"),
            remote_punch=bool(data.get("remotePunch", False)),
            selfie_url=data.get("selfieUrl"),
            status=PunchStatus(status) if status else None,
            status_message=data.get("statusMessage"),
        )


@dataclass(frozen=True)
class Totals:
    work_min: int = 0
    break_min: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"workMin": self.work_min, "breakMin": self.break_min}


@dataclass(frozen=True)
class Session:
    """One IN -> OUT span of a ledger. ``ended_at`` is None while still open."""

    started_at: datetime
    ended_at: Optional[datetime]
    work_min: int
    break_min: int

    @property
    def is_open(self) -> bool:
        return self.ended_at is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "startedAt": self.started_at.isoformat(timespec="seconds"),
            "endedAt": self.ended_at.isoformat(timespec="seconds") if self.ended_at else None,
            "workMin": self.work_min,
            "breakMin": self.break_min,
        }
