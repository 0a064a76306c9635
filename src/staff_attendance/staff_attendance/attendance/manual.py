from __future__ import annotations

from datetime import datetime
from typing import Optional

import structlog

from ..common.datetime_utils import now_local, parse_timestamp
from ..common.validators import optional_text, require_non_empty
from ..core.enums import PunchType
from ..core.exceptions import AuthorizationError, OrderingError, ValidationError
from ..users.repository import UserRepository
from .ledger import AttendanceLedger
from .model import Punch, coerce_punch_type
from .state_machine import can_follow

logger = structlog.get_logger(__name__)


class ManualPunchAuthorizer:
    """Punches entered by an administrator on behalf of an employee.

    Unlike self-service punches, a manual punch may be backdated, so it is
    slotted into the ledger by time and must fit the state machine on both
    sides of that slot. Nothing is written when validation fails.
    """

    def __init__(self, users: Optional[UserRepository] = None):
        self._users = users

    def authorize(
        self,
        target_user_id: str,
        punch_type: PunchType | str,
        custom_timestamp: datetime | str,
        caller_id: str,
        reason: Optional[str] = None,
        *,
        remote_punch: bool = False,
        selfie_url: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Punch:
        target_user_id = require_non_empty(target_user_id, "userId")
        caller_id = require_non_empty(caller_id, "punchedBy")
        kind = coerce_punch_type(punch_type)
        at = parse_timestamp(custom_timestamp)

        now = now or now_local()
        if at > now:
            raise ValidationError("A manual punch cannot be in the future")

        if self._users is not None:
            caller = self._users.get_by_id(caller_id)
            if caller is None or not caller.is_admin or not caller.is_active:
                logger.warning("manual_punch_rejected", caller_id=caller_id, user_id=target_user_id, reason="not_admin")
                raise AuthorizationError("Only administrators can enter manual punches")
            if self._users.get_by_id(target_user_id) is None:
                raise ValidationError("Employee does not exist")

        punch = Punch(
            at=at,
            type=kind,
            manual_punch=True,
            punched_by=caller_id,
            reason=optional_text(reason),
            remote_punch=bool(remote_punch),
            selfie_url=optional_text(selfie_url),
        )
        logger.info(
            "manual_punch_authorized",
            user_id=target_user_id,
            caller_id=caller_id,
            punch_type=kind.value,
            at=at.isoformat(),
        )
        return punch

    def insert(self, ledger: AttendanceLedger, punch: Punch) -> AttendanceLedger:
        """Place ``punch`` at its chronological slot, or raise without touching ``ledger``."""
        if punch.at.date() != ledger.work_date:
            raise ValidationError(
                f"Punch at {punch.at.isoformat()} does not belong to {ledger.work_date.isoformat()}"
            )

        index = ledger.insertion_index(punch.at)
        before = ledger.punches[index - 1] if index > 0 else None
        after = ledger.punches[index] if index < len(ledger.punches) else None

        if not can_follow(before.type if before else None, punch.type):
            raise OrderingError(self._conflict_message(before, punch))
        if after is not None and not can_follow(punch.type, after.type):
            raise OrderingError(self._conflict_message(punch, after))

        return ledger.insert_punch(punch)

    @staticmethod
    def _conflict_message(first: Optional[Punch], second: Punch) -> str:
        if first is None:
            return f"{second.type.value} at {second.at:%H:%M} cannot start the day"
        return (
            f"{second.type.value} at {second.at:%H:%M} cannot follow "
            f"{first.type.value} at {first.at:%H:%M}"
        )
