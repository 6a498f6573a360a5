from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """User repository interface.

    Services depend on this Protocol, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def create_user(self, *, username: str, password_hash: str, role: Role, hourly_rate: Decimal) -> int:
        raise NotImplementedError

    def update_user(
        self,
        *,
        user_id: int,
        username: str,
        role: Role,
        hourly_rate: Decimal,
        password_hash: Optional[str] = None,
    ) -> bool:
        """Leaves the stored password untouched when password_hash is None."""

        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError

    def count_by_role(self, role: Role) -> int:
        raise NotImplementedError
