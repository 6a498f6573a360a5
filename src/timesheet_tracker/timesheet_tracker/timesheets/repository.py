from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Timesheet, TimesheetFilter, TimesheetInput, TimesheetRow


class TimesheetRepository(Protocol):
    def get_by_id(self, timesheet_id: int) -> Optional[Timesheet]:
        raise NotImplementedError

    def get_row(self, timesheet_id: int) -> Optional[TimesheetRow]:
        raise NotImplementedError

    def list_rows(self, filters: TimesheetFilter) -> Sequence[TimesheetRow]:
        """Newest first: date desc, start time desc."""

        raise NotImplementedError

    def list_export_rows(self, filters: TimesheetFilter) -> Sequence[TimesheetRow]:
        """Export ordering: date desc, then username."""

        raise NotImplementedError

    def create(self, *, user_id: int, data: TimesheetInput) -> int:
        raise NotImplementedError

    def update(self, *, timesheet_id: int, data: TimesheetInput) -> None:
        raise NotImplementedError

    def delete_by_id(self, timesheet_id: int) -> bool:
        raise NotImplementedError
