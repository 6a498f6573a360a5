from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..common.decimal_utils import to_decimal
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor, first_row
from .model import User
from .repository import UserRepository

_SELECT_USERS = "SELECT user_id, username, password_hash, role, hourly_rate FROM users"


def _user_from_record(record: dict) -> User:
    return User(
        user_id=int(record["user_id"]),
        username=record["username"],
        password_hash=record["password_hash"],
        role=Role(record["role"]),
        hourly_rate=to_decimal(record["hourly_rate"]),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, db: DatabaseConnection):
        self._db = db

    def _find_one(self, column: str, value) -> Optional[User]:
        with db_cursor(self._db) as cur:
            cur.execute(f"{_SELECT_USERS} WHERE {column} = %s", (value,))
            record = first_row(cur)
        return _user_from_record(record) if record else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._find_one("user_id", int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return self._find_one("username", username)

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._db) as cur:
            cur.execute(f"{_SELECT_USERS} ORDER BY username")
            return [_user_from_record(r) for r in all_rows(cur)]

    def create_user(self, *, username: str, password_hash: str, role: Role, hourly_rate: Decimal) -> int:
        with db_cursor(self._db) as cur:
            cur.execute(
                "INSERT INTO users (username, password_hash, role, hourly_rate) VALUES (%s, %s, %s, %s)",
                (username, password_hash, role.value, hourly_rate),
            )
            return int(cur.lastrowid)

    def update_user(
        self,
        *,
        user_id: int,
        username: str,
        role: Role,
        hourly_rate: Decimal,
        password_hash: Optional[str] = None,
    ) -> bool:
        changes = {"username": username, "role": role.value, "hourly_rate": hourly_rate}
        if password_hash:
            changes["password_hash"] = password_hash

        assignments = ", ".join(f"{col} = %s" for col in changes)
        with db_cursor(self._db) as cur:
            cur.execute(
                f"UPDATE users SET {assignments} WHERE user_id = %s",
                (*changes.values(), int(user_id)),
            )
            # MySQL reports 0 affected rows when nothing changed.
            return cur.rowcount >= 0

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._db) as cur:
            cur.execute("DELETE FROM users WHERE user_id = %s", (int(user_id),))
            return cur.rowcount > 0

    def count_by_role(self, role: Role) -> int:
        with db_cursor(self._db, dictionary=False) as cur:
            cur.execute("SELECT COUNT(*) FROM users WHERE role = %s", (role.value,))
            (count,) = cur.fetchone()
        return int(count)
