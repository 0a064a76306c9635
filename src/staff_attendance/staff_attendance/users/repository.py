from __future__ import annotations

from typing import Optional, Protocol

from .model import User


class UserRepository(Protocol):
    """Read-only view of users; the attendance services depend on this, not on a concrete DB."""

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError
