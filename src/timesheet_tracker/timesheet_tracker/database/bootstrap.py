"""Schema setup, default admin account and demo data for a MySQL database."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_ADMIN_HOURLY_RATE, DEFAULT_ADMIN_USERNAME
from ..core.enums import Role
from .connection import DatabaseConnection
from .mysql_base import db_cursor, first_row

logger = logging.getLogger(__name__)

# The target database comes from DBConfig, so the script's own selection is ignored.
_DATABASE_SELECTION = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)

_INSERT_USER = "INSERT INTO users (username, password_hash, role, hourly_rate) VALUES (%s, %s, %s, %s)"


def schema_statements(script: str) -> list[str]:
    """Split a schema script into statements.

    Handles the plain DDL in schema.sql: ``--`` comment lines are dropped and
    statements end at ``;``. Semicolons inside string literals are not supported.
    """
    body = "\n".join(line for line in script.splitlines() if not line.lstrip().startswith("--"))
    statements = (chunk.strip() for chunk in body.split(";"))
    return [s for s in statements if s and not _DATABASE_SELECTION.match(s)]


def ensure_database_exists(db: DatabaseConnection) -> None:
    with db_cursor(db, dictionary=False, with_database=False) as cur:
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{db.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )


def apply_schema(db: DatabaseConnection, *, schema_path: str | Path) -> int:
    """Create the database and its tables. Safe to run on every start."""
    ensure_database_exists(db)
    statements = schema_statements(Path(schema_path).read_text(encoding="utf-8"))
    with db_cursor(db, dictionary=False) as cur:
        for stmt in statements:
            cur.execute(stmt)
    logger.info("Applied %s to %s (%d statements)", Path(schema_path).name, db.config.describe(), len(statements))
    return len(statements)


def _user_exists(cur, username: str) -> bool:
    cur.execute("SELECT user_id FROM users WHERE username = %s", (username,))
    return first_row(cur) is not None


def ensure_default_admin(db: DatabaseConnection, *, password: str) -> bool:
    """Create the default admin account if it is missing. Returns True if created."""
    with db_cursor(db) as cur:
        if _user_exists(cur, DEFAULT_ADMIN_USERNAME):
            return False
        cur.execute(
            _INSERT_USER,
            (DEFAULT_ADMIN_USERNAME, generate_password_hash(password), Role.ADMIN.value, DEFAULT_ADMIN_HOURLY_RATE),
        )
    logger.warning("Created default %r account; change its password", DEFAULT_ADMIN_USERNAME)
    return True


def list_tables(db: DatabaseConnection) -> list[str]:
    with db_cursor(db, dictionary=False) as cur:
        cur.execute("SHOW TABLES")
        return [name for (name,) in cur.fetchall()]


DEMO_PAINTER = ("painter", "painter123", "20.00")

DEMO_TIMESHEETS = [
    ("2025-01-06", "07:00", "15:30", "11:00", "11:30", "Oak St. residence", "Prep and prime"),
    ("2025-01-07", "07:00", "16:00", "12:00", "12:45", "Oak St. residence, Elm Ave. office", None),
    ("2025-01-08", "22:00", "06:00", None, None, "Mall night shift", "Overnight, no break"),
]


def seed_demo_data(db: DatabaseConnection) -> bool:
    """Add a demo painter with a few timesheets. Returns False if already seeded."""
    username, password, rate = DEMO_PAINTER
    with db_cursor(db) as cur:
        if _user_exists(cur, username):
            return False

        cur.execute(_INSERT_USER, (username, generate_password_hash(password), Role.PAINTER.value, rate))
        painter_id = cur.lastrowid
        cur.executemany(
            "INSERT INTO timesheets "
            "(user_id, work_date, start_time, end_time, break_start, break_end, location, notes) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            [(painter_id, *entry) for entry in DEMO_TIMESHEETS],
        )
    logger.info("Seeded demo painter %r with %d timesheets", username, len(DEMO_TIMESHEETS))
    return True
