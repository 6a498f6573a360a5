from __future__ import annotations

from typing import Optional, Sequence

from ..common.decimal_utils import to_decimal
from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor, first_row, where_clause
from .model import Timesheet, TimesheetFilter, TimesheetInput, TimesheetRow
from .repository import TimesheetRepository

_ENTRY_COLUMNS = ("work_date", "start_time", "end_time", "break_start", "break_end", "location", "notes")

_SELECT_JOINED = (
    "SELECT t.timesheet_id, t.user_id, u.username, u.hourly_rate, "
    + ", ".join(f"t.{c}" for c in _ENTRY_COLUMNS)
    + " FROM timesheets t JOIN users u ON u.user_id = t.user_id"
)

_LIST_ORDER = " ORDER BY t.work_date DESC, t.start_time DESC"
_EXPORT_ORDER = " ORDER BY t.work_date DESC, u.username"


def _entry_fields(record: dict) -> dict:
    # Empty strings in break columns come from rows written by older clients.
    return {
        "work_date": record["work_date"],
        "start_time": record["start_time"],
        "end_time": record["end_time"],
        "break_start": record.get("break_start") or None,
        "break_end": record.get("break_end") or None,
        "location": record["location"],
        "notes": record.get("notes"),
    }


def _row_from_record(record: dict) -> TimesheetRow:
    return TimesheetRow(
        timesheet_id=int(record["timesheet_id"]),
        user_id=int(record["user_id"]),
        username=record["username"],
        hourly_rate=to_decimal(record["hourly_rate"]),
        **_entry_fields(record),
    )


def _entry_values(data: TimesheetInput) -> tuple:
    return tuple(getattr(data, c) for c in _ENTRY_COLUMNS)


def _filter_conditions(filters: TimesheetFilter) -> tuple[str, tuple]:
    conditions: list[str] = []
    params: list = []
    if filters.user_id:
        conditions.append("t.user_id = %s")
        params.append(int(filters.user_id))
    if filters.date_from:
        conditions.append("t.work_date >= %s")
        params.append(filters.date_from)
    if filters.date_to:
        conditions.append("t.work_date <= %s")
        params.append(filters.date_to)
    if filters.location:
        conditions.append("t.location LIKE %s")
        params.append(f"%{filters.location}%")
    return where_clause(conditions), tuple(params)


class MySQLTimesheetRepository(TimesheetRepository):
    """Timesheets joined with their owner's username and current hourly rate."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def _select_rows(self, filters: TimesheetFilter, order_by: str) -> list[TimesheetRow]:
        where, params = _filter_conditions(filters)
        with db_cursor(self._db) as cur:
            cur.execute(_SELECT_JOINED + where + order_by, params)
            return [_row_from_record(r) for r in all_rows(cur)]

    def get_by_id(self, timesheet_id: int) -> Optional[Timesheet]:
        with db_cursor(self._db) as cur:
            cur.execute(
                f"SELECT timesheet_id, user_id, {', '.join(_ENTRY_COLUMNS)} FROM timesheets WHERE timesheet_id = %s",
                (int(timesheet_id),),
            )
            record = first_row(cur)
        if not record:
            return None
        return Timesheet(
            timesheet_id=int(record["timesheet_id"]),
            user_id=int(record["user_id"]),
            **_entry_fields(record),
        )

    def get_row(self, timesheet_id: int) -> Optional[TimesheetRow]:
        with db_cursor(self._db) as cur:
            cur.execute(_SELECT_JOINED + " WHERE t.timesheet_id = %s", (int(timesheet_id),))
            record = first_row(cur)
        return _row_from_record(record) if record else None

    def list_rows(self, filters: TimesheetFilter) -> Sequence[TimesheetRow]:
        return self._select_rows(filters, _LIST_ORDER)

    def list_export_rows(self, filters: TimesheetFilter) -> Sequence[TimesheetRow]:
        return self._select_rows(filters, _EXPORT_ORDER)

    def create(self, *, user_id: int, data: TimesheetInput) -> int:
        placeholders = ", ".join(["%s"] * (len(_ENTRY_COLUMNS) + 1))
        with db_cursor(self._db) as cur:
            cur.execute(
                f"INSERT INTO timesheets (user_id, {', '.join(_ENTRY_COLUMNS)}) VALUES ({placeholders})",
                (int(user_id), *_entry_values(data)),
            )
            return int(cur.lastrowid)

    def update(self, *, timesheet_id: int, data: TimesheetInput) -> None:
        assignments = ", ".join(f"{c} = %s" for c in _ENTRY_COLUMNS)
        with db_cursor(self._db) as cur:
            cur.execute(
                f"UPDATE timesheets SET {assignments} WHERE timesheet_id = %s",
                (*_entry_values(data), int(timesheet_id)),
            )

    def delete_by_id(self, timesheet_id: int) -> bool:
        with db_cursor(self._db) as cur:
            cur.execute("DELETE FROM timesheets WHERE timesheet_id = %s", (int(timesheet_id),))
            return cur.rowcount > 0
