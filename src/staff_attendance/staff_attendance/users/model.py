from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an employee or administrator.

    Only the fields the attendance engine needs: the role attributes manual
    punches and the base salary feeds leave deductions.
    """

    user_id: str
    full_name: str
    role: Role
    base_salary: Decimal = Decimal("0")
    is_active: bool = True

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
