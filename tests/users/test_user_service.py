from __future__ import annotations

from decimal import Decimal

import pytest

from src.timesheet_tracker.timesheet_tracker.core.enums import Role
from src.timesheet_tracker.timesheet_tracker.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.timesheet_tracker.timesheet_tracker.users.service import AuthService, UserService


def test_auth_wrong_password_raises(users_repo):
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("bob", "wrong")


def test_auth_unknown_user_raises(users_repo):
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("nobody", "painter123")


def test_auth_requires_both_fields(users_repo):
    with pytest.raises(ValidationError):
        AuthService(users_repo).authenticate("bob", "")


def test_auth_returns_session_user(users_repo):
    s_user = AuthService(users_repo).authenticate("bob", "painter123")
    assert s_user.user_id == 2
    assert s_user.role == Role.PAINTER
    assert s_user.hourly_rate == Decimal("20.00")


def test_admin_creates_painter(users_repo):
    svc = UserService(users_repo)
    user = svc.create_user(current_role=Role.ADMIN, username="dave", password="secret1", role="painter", hourly_rate="22.5")

    assert user.role == Role.PAINTER
    assert user.hourly_rate == Decimal("22.5")
    assert user.password_hash != "secret1"
    assert AuthService(users_repo).authenticate("dave", "secret1").user_id == user.user_id


def test_painter_cannot_manage_users(users_repo):
    svc = UserService(users_repo)
    with pytest.raises(AuthorizationError):
        svc.list_users(current_role=Role.PAINTER)
    with pytest.raises(AuthorizationError):
        svc.create_user(current_role=Role.PAINTER, username="x", password="y", role="painter", hourly_rate=1)


@pytest.mark.parametrize(
    "kwargs,error",
    [
        ({"username": "bob", "password": "pw", "role": "painter", "hourly_rate": 10}, ConflictError),
        ({"username": "eve", "password": "pw", "role": "manager", "hourly_rate": 10}, ValidationError),
        ({"username": "eve", "password": "pw", "role": "painter", "hourly_rate": -1}, ValidationError),
        ({"username": "eve", "password": "pw", "role": "painter", "hourly_rate": "abc"}, ValidationError),
        ({"username": "eve", "password": "", "role": "painter", "hourly_rate": 10}, ValidationError),
        ({"username": "eve", "password": "pw", "role": "painter", "hourly_rate": None}, ValidationError),
    ],
)
def test_create_user_validation(users_repo, kwargs, error):
    with pytest.raises(error):
        UserService(users_repo).create_user(current_role=Role.ADMIN, **kwargs)


def test_zero_rate_is_allowed(users_repo):
    user = UserService(users_repo).create_user(
        current_role=Role.ADMIN, username="intern", password="pw", role="painter", hourly_rate=0
    )
    assert user.hourly_rate == Decimal("0")


def test_update_without_password_keeps_hash(users_repo):
    before = users_repo.get_by_id(2).password_hash
    user = UserService(users_repo).update_user(
        current_role=Role.ADMIN, user_id=2, username="bobby", role="painter", hourly_rate="21.00"
    )

    assert user.username == "bobby"
    assert user.hourly_rate == Decimal("21.00")
    assert user.password_hash == before


def test_update_with_password_rehashes(users_repo):
    UserService(users_repo).update_user(
        current_role=Role.ADMIN, user_id=2, username="bob", role="painter", hourly_rate="20", password="newpass"
    )
    assert AuthService(users_repo).authenticate("bob", "newpass").user_id == 2


def test_update_rejects_taken_username(users_repo):
    with pytest.raises(ConflictError):
        UserService(users_repo).update_user(
            current_role=Role.ADMIN, user_id=2, username="carol", role="painter", hourly_rate="20"
        )


def test_update_unknown_user(users_repo):
    with pytest.raises(NotFoundError):
        UserService(users_repo).update_user(
            current_role=Role.ADMIN, user_id=99, username="ghost", role="painter", hourly_rate="20"
        )


def test_cannot_delete_last_admin(users_repo):
    with pytest.raises(ValidationError):
        UserService(users_repo).delete_user(current_role=Role.ADMIN, user_id=1)


def test_can_delete_admin_when_another_exists(users_repo):
    svc = UserService(users_repo)
    svc.create_user(current_role=Role.ADMIN, username="boss", password="pw", role="admin", hourly_rate=30)

    svc.delete_user(current_role=Role.ADMIN, user_id=1)

    assert users_repo.get_by_id(1) is None


def test_delete_unknown_user(users_repo):
    with pytest.raises(NotFoundError):
        UserService(users_repo).delete_user(current_role=Role.ADMIN, user_id=42)


def test_get_user_self_or_admin_only(users_repo, admin, bob, carol):
    svc = UserService(users_repo)

    assert svc.get_user(current_user=bob, user_id=2).username == "bob"
    assert svc.get_user(current_user=admin, user_id=3).username == "carol"
    with pytest.raises(AuthorizationError):
        svc.get_user(current_user=carol, user_id=2)
    with pytest.raises(NotFoundError):
        svc.get_user(current_user=admin, user_id=77)
