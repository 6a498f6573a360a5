from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Optional, Sequence

from .connection import DatabaseConnection


@contextmanager
def db_cursor(db: DatabaseConnection, *, dictionary: bool = True, with_database: bool = True):
    """Yield a cursor inside one transaction.

    Commits when the block exits cleanly; any exception rolls back and re-raises.
    """
    conn = db.connect(with_database=with_database)
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def first_row(cur) -> Optional[dict[str, Any]]:
    return cur.fetchone() or None


def all_rows(cur) -> list[dict[str, Any]]:
    return list(cur.fetchall() or [])


def where_clause(conditions: Sequence[str]) -> str:
    if not conditions:
        return ""
    return " WHERE " + " AND ".join(conditions)
