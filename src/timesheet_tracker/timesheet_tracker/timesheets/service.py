from __future__ import annotations

import csv
import io
import logging
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_text, optional_time, require_date, require_non_empty, require_time
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..payroll.service import PayrollReportService
from ..users.model import SessionUser
from ..users.repository import UserRepository
from .model import TimesheetFilter, TimesheetInput, TimesheetRow
from .repository import TimesheetRepository

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "Username",
    "Date",
    "Start Time",
    "End Time",
    "Break Start",
    "Break End",
    "Location",
    "Notes",
    "Hourly Rate",
    "Hours Worked",
    "Pay",
]


def parse_filters(args) -> TimesheetFilter:
    """Build a filter from query args; user_id 'all' or blank means every user."""
    user_s = (args.get("userId") or args.get("user_id") or "").strip()
    date_from = (args.get("dateFrom") or args.get("date_from") or "").strip()
    date_to = (args.get("dateTo") or args.get("date_to") or "").strip()
    location = (args.get("location") or "").strip()

    user_id = None
    if user_s and user_s != "all":
        try:
            user_id = int(user_s)
        except ValueError:
            raise ValidationError("Invalid user filter")

    return TimesheetFilter(
        user_id=user_id,
        date_from=parse_iso_date(require_date(date_from)) if date_from else None,
        date_to=parse_iso_date(require_date(date_to)) if date_to else None,
        location=location or None,
    )


def validate_payload(payload: dict) -> TimesheetInput:
    """Request validation for create/update bodies.

    A break must have both bounds or neither.
    """

    date_s = payload.get("date")
    start = payload.get("start_time") or payload.get("startTime")
    end = payload.get("end_time") or payload.get("endTime")
    location = payload.get("location")
    if not date_s or not start or not end or not location:
        raise ValidationError("Please provide all required fields")

    require_date(date_s)
    require_time(start)
    require_time(end)
    break_start = optional_time(payload.get("break_start") or payload.get("breakStart"), "break start time")
    break_end = optional_time(payload.get("break_end") or payload.get("breakEnd"), "break end time")
    if bool(break_start) != bool(break_end):
        raise ValidationError("Provide both break start and break end, or neither")

    notes = optional_text(payload.get("notes"), "Notes")
    return TimesheetInput(
        work_date=parse_iso_date(date_s),
        start_time=start,
        end_time=end,
        break_start=break_start,
        break_end=break_end,
        location=require_non_empty(location, "Location"),
        notes=notes,
    )


class TimesheetService:
    """Use cases for timesheet entries. Admins see everything, painters their own rows."""

    def __init__(self, timesheets: TimesheetRepository, users: UserRepository, reports: PayrollReportService):
        self._timesheets = timesheets
        self._users = users
        self._reports = reports

    def list_timesheets(self, *, current_user: SessionUser, filters: Optional[TimesheetFilter] = None) -> Sequence[TimesheetRow]:
        filters = filters or TimesheetFilter()
        if not current_user.is_admin:
            filters = TimesheetFilter(
                user_id=current_user.user_id,
                date_from=filters.date_from,
                date_to=filters.date_to,
                location=filters.location,
            )
        return self._timesheets.list_rows(filters)

    def list_for_user(self, *, current_user: SessionUser, user_id: int) -> Sequence[TimesheetRow]:
        if not current_user.can_access(user_id):
            raise AuthorizationError("Not authorized to access this resource")
        return self._timesheets.list_rows(TimesheetFilter(user_id=int(user_id)))

    def get_timesheet(self, *, current_user: SessionUser, timesheet_id: int) -> TimesheetRow:
        row = self._timesheets.get_row(int(timesheet_id))
        if not row:
            raise NotFoundError("Timesheet not found")
        if not current_user.can_access(row.user_id):
            raise AuthorizationError("Not authorized to access this resource")
        return row

    def create_timesheet(self, *, current_user: SessionUser, payload: dict) -> TimesheetRow:
        user_id = payload.get("user_id") or payload.get("userId")
        if not user_id:
            raise ValidationError("Please provide all required fields")
        try:
            user_id = int(user_id)
        except (TypeError, ValueError):
            raise ValidationError("Invalid user id")

        data = validate_payload(payload)

        if not current_user.can_access(user_id):
            raise AuthorizationError("Not authorized to create timesheets for other users")
        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found")

        timesheet_id = self._timesheets.create(user_id=user_id, data=data)
        logger.info("User %s created timesheet %s for user %s", current_user.user_id, timesheet_id, user_id)
        return self._timesheets.get_row(timesheet_id)

    def update_timesheet(self, *, current_user: SessionUser, timesheet_id: int, payload: dict) -> TimesheetRow:
        data = validate_payload(payload)

        existing = self._timesheets.get_by_id(int(timesheet_id))
        if not existing:
            raise NotFoundError("Timesheet not found")
        if not current_user.can_access(existing.user_id):
            raise AuthorizationError("Not authorized to update this timesheet")

        self._timesheets.update(timesheet_id=existing.timesheet_id, data=data)
        logger.info("User %s updated timesheet %s", current_user.user_id, existing.timesheet_id)
        return self._timesheets.get_row(existing.timesheet_id)

    def delete_timesheet(self, *, current_user: SessionUser, timesheet_id: int) -> None:
        existing = self._timesheets.get_by_id(int(timesheet_id))
        if not existing:
            raise NotFoundError("Timesheet not found")
        if not current_user.can_access(existing.user_id):
            raise AuthorizationError("Not authorized to delete this timesheet")

        self._timesheets.delete_by_id(existing.timesheet_id)
        logger.info("User %s deleted timesheet %s", current_user.user_id, existing.timesheet_id)

    def export_csv(self, *, current_role: Role, filters: Optional[TimesheetFilter] = None) -> str:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Not authorized to access this resource")

        rows = self._timesheets.list_export_rows(filters or TimesheetFilter())
        out = io.StringIO()
        writer = csv.writer(out, lineterminator="\n")
        writer.writerow(EXPORT_COLUMNS)
        for r in rows:
            calc = self._reports.calculate_row(r)
            writer.writerow(
                [
                    r.username,
                    r.work_date.strftime("%Y-%m-%d"),
                    r.start_time,
                    r.end_time,
                    r.break_start or "",
                    r.break_end or "",
                    r.location,
                    r.notes or "",
                    f"{r.hourly_rate:.2f}",
                    f"{calc.result.hours_worked:.2f}",
                    f"{calc.pay:.2f}",
                ]
            )
        logger.info("Exported %d timesheets", len(rows))
        return out.getvalue()
