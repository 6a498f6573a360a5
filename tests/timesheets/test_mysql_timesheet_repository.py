from __future__ import annotations

from datetime import date

import pytest

from src.timesheet_tracker.timesheet_tracker.database.connection import DBConfig, DatabaseConnection
from src.timesheet_tracker.timesheet_tracker.timesheets.model import TimesheetFilter, TimesheetInput
from src.timesheet_tracker.timesheet_tracker.timesheets.mysql_timesheet_repository import MySQLTimesheetRepository


class RecordingCursor:
    def __init__(self, fail=False):
        self.executed = []
        self.rowcount = 0
        self.lastrowid = 7
        self._fail = fail

    def execute(self, sql, params=()):
        if self._fail:
            raise RuntimeError("boom")
        self.executed.append((" ".join(sql.split()), params))

    def fetchall(self):
        return []

    def fetchone(self):
        return None

    def close(self):
        pass


class RecordingConnection:
    def __init__(self, cursor):
        self.cursor_obj = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cursor_obj

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class RecordingDatabase(DatabaseConnection):
    def __init__(self, fail=False):
        super().__init__(DBConfig())
        self.conn = RecordingConnection(RecordingCursor(fail=fail))

    def connect(self, *, with_database=True):
        return self.conn


def _entry():
    return TimesheetInput(
        work_date=date(2025, 1, 8),
        start_time="07:00",
        end_time="15:00",
        break_start=None,
        break_end=None,
        location="Pine Rd. garage",
    )


def test_update_writes_all_columns_and_returns_nothing():
    db = RecordingDatabase()

    result = MySQLTimesheetRepository(db).update(timesheet_id=5, data=_entry())

    assert result is None
    sql, params = db.conn.cursor_obj.executed[0]
    assert sql.startswith("UPDATE timesheets SET work_date = %s")
    assert params[-1] == 5
    assert params[:3] == (date(2025, 1, 8), "07:00", "15:00")
    assert db.conn.committed and db.conn.closed


def test_filters_become_where_clause():
    db = RecordingDatabase()

    MySQLTimesheetRepository(db).list_rows(TimesheetFilter(user_id=2, location="Oak"))

    sql, params = db.conn.cursor_obj.executed[0]
    assert "WHERE t.user_id = %s AND t.location LIKE %s" in sql
    assert sql.endswith("ORDER BY t.work_date DESC, t.start_time DESC")
    assert params == (2, "%Oak%")


def test_failed_statement_rolls_back():
    db = RecordingDatabase(fail=True)

    with pytest.raises(RuntimeError):
        MySQLTimesheetRepository(db).update(timesheet_id=5, data=_entry())

    assert db.conn.rolled_back and not db.conn.committed and db.conn.closed
