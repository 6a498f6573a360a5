from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_hourly_rate, require_non_empty
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from .model import SessionUser, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def _require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise AuthorizationError("Not authorized to access this resource")


def _parse_role(value) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError('Role must be either "admin" or "painter"')


def _password_matches(user: Optional[User], password: str) -> bool:
    if user is None:
        return False
    try:
        return check_password_hash(user.password_hash, password)
    except ValueError:
        # unparseable stored hash
        return False


class AuthService:
    """Login: checks credentials and returns what goes into the session."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        if not username or not password:
            raise ValidationError("Please provide username and password")

        user = self._users.get_by_username(username)
        if not _password_matches(user, password):
            logger.warning("Failed login for %r (%s)", username, "bad password" if user else "unknown user")
            raise AuthenticationError("Invalid credentials")

        logger.debug("Authenticated %r as %s", user.username, user.role.value)
        return SessionUser(
            user_id=user.user_id,
            username=user.username,
            role=user.role,
            hourly_rate=user.hourly_rate,
        )


class UserService:
    """Use case: manage users and pay rates (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self, *, current_role: Role) -> Sequence[User]:
        _require_admin(current_role)
        return self._users.list_all()

    def get_user(self, *, current_user: SessionUser, user_id: int) -> User:
        if not current_user.can_access(user_id):
            raise AuthorizationError("Not authorized to access this resource")

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def create_user(
        self,
        *,
        current_role: Role,
        username: str,
        password: str,
        role: str,
        hourly_rate,
    ) -> User:
        _require_admin(current_role)
        if not username or not password or not role or hourly_rate is None:
            raise ValidationError("Please provide all required fields")

        username = require_non_empty(username, "Username")
        parsed_role = _parse_role(role)
        rate = require_hourly_rate(hourly_rate)

        if self._users.get_by_username(username):
            raise ConflictError("Username already exists")

        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            role=parsed_role,
            hourly_rate=rate,
        )
        logger.info("Created %s account %r (id=%s)", parsed_role.value, username, user_id)
        return self._users.get_by_id(user_id)

    def update_user(
        self,
        *,
        current_role: Role,
        user_id: int,
        username: str,
        role: str,
        hourly_rate,
        password: Optional[str] = None,
    ) -> User:
        _require_admin(current_role)
        if not username or not role or hourly_rate is None:
            raise ValidationError("Please provide all required fields")

        username = require_non_empty(username, "Username")
        parsed_role = _parse_role(role)
        rate = require_hourly_rate(hourly_rate)

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")

        existing = self._users.get_by_username(username)
        if existing and existing.user_id != user.user_id:
            raise ConflictError("Username already exists")

        self._users.update_user(
            user_id=user.user_id,
            username=username,
            role=parsed_role,
            hourly_rate=rate,
            password_hash=generate_password_hash(password) if password else None,
        )
        logger.info("Updated user id=%s (password changed: %s)", user.user_id, bool(password))
        return self._users.get_by_id(user.user_id)

    def delete_user(self, *, current_role: Role, user_id: int) -> None:
        _require_admin(current_role)

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        if user.role == Role.ADMIN and self._users.count_by_role(Role.ADMIN) <= 1:
            raise ValidationError("Cannot delete the last admin user")

        if not self._users.delete_by_id(user.user_id):
            raise ValidationError("Failed to delete user")
        logger.info("Deleted user %r (id=%s)", user.username, user.user_id)
