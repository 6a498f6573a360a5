from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account with its hourly pay rate.

    Plain data object, no DB access code here.
    """

    user_id: int
    username: str
    password_hash: str
    role: Role
    hourly_rate: Decimal

    def to_public(self) -> dict:
        return {
            "id": self.user_id,
            "username": self.username,
            "role": self.role.value,
            "hourly_rate": float(self.hourly_rate),
        }


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    username: str
    role: Role
    hourly_rate: Decimal

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def can_access(self, owner_id: int) -> bool:
        """Admins may touch anything, painters only their own data."""
        return self.is_admin or self.user_id == int(owner_id)

    def to_public(self) -> dict:
        return {
            "id": self.user_id,
            "username": self.username,
            "role": self.role.value,
            "hourly_rate": float(self.hourly_rate),
        }
