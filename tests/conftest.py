from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.timesheet_tracker.timesheet_tracker.container import wire
from src.timesheet_tracker.timesheet_tracker.core.enums import Role
from src.timesheet_tracker.timesheet_tracker.timesheets.model import (
    Timesheet,
    TimesheetFilter,
    TimesheetInput,
    TimesheetRow,
)
from src.timesheet_tracker.timesheet_tracker.users.model import SessionUser, User


class InMemoryUsers:
    def __init__(self):
        self._by_id: dict[int, User] = {}
        self._id = 0

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        for u in self._by_id.values():
            if u.username == username:
                return u
        return None

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda u: u.username)

    def create_user(self, *, username, password_hash, role, hourly_rate) -> int:
        self._id += 1
        self._by_id[self._id] = User(
            user_id=self._id,
            username=username,
            password_hash=password_hash,
            role=role,
            hourly_rate=Decimal(hourly_rate),
        )
        return self._id

    def update_user(self, *, user_id, username, role, hourly_rate, password_hash=None) -> bool:
        old = self._by_id[int(user_id)]
        self._by_id[int(user_id)] = User(
            user_id=old.user_id,
            username=username,
            password_hash=password_hash or old.password_hash,
            role=role,
            hourly_rate=Decimal(hourly_rate),
        )
        return True

    def delete_by_id(self, user_id: int) -> bool:
        return self._by_id.pop(int(user_id), None) is not None

    def count_by_role(self, role: Role) -> int:
        return sum(1 for u in self._by_id.values() if u.role == role)


class InMemoryTimesheets:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self._by_id: dict[int, Timesheet] = {}
        self._id = 0

    def _row(self, t: Timesheet) -> TimesheetRow:
        u = self._users.get_by_id(t.user_id)
        return TimesheetRow(
            timesheet_id=t.timesheet_id,
            user_id=t.user_id,
            username=u.username,
            hourly_rate=u.hourly_rate,
            work_date=t.work_date,
            start_time=t.start_time,
            end_time=t.end_time,
            break_start=t.break_start,
            break_end=t.break_end,
            location=t.location,
            notes=t.notes,
        )

    def _matching(self, filters: TimesheetFilter):
        for t in self._by_id.values():
            if self._users.get_by_id(t.user_id) is None:
                continue
            if filters.user_id and t.user_id != filters.user_id:
                continue
            if filters.date_from and t.work_date < filters.date_from:
                continue
            if filters.date_to and t.work_date > filters.date_to:
                continue
            if filters.location and filters.location.lower() not in t.location.lower():
                continue
            yield self._row(t)

    def get_by_id(self, timesheet_id: int) -> Optional[Timesheet]:
        return self._by_id.get(int(timesheet_id))

    def get_row(self, timesheet_id: int) -> Optional[TimesheetRow]:
        t = self._by_id.get(int(timesheet_id))
        return self._row(t) if t else None

    def list_rows(self, filters: TimesheetFilter):
        return sorted(self._matching(filters), key=lambda r: (r.work_date, r.start_time), reverse=True)

    def list_export_rows(self, filters: TimesheetFilter):
        return sorted(self._matching(filters), key=lambda r: (-r.work_date.toordinal(), r.username))

    def create(self, *, user_id: int, data: TimesheetInput) -> int:
        self._id += 1
        self._by_id[self._id] = Timesheet(timesheet_id=self._id, user_id=int(user_id), **data.__dict__)
        return self._id

    def update(self, *, timesheet_id: int, data: TimesheetInput) -> None:
        old = self._by_id[int(timesheet_id)]
        self._by_id[old.timesheet_id] = Timesheet(timesheet_id=old.timesheet_id, user_id=old.user_id, **data.__dict__)

    def delete_by_id(self, timesheet_id: int) -> bool:
        return self._by_id.pop(int(timesheet_id), None) is not None


def make_row(
    *,
    timesheet_id: int = 1,
    user_id: int = 2,
    username: str = "bob",
    hourly_rate: str = "20.00",
    work_date: date = date(2025, 1, 6),
    start: str = "09:00",
    end: str = "17:00",
    break_start: Optional[str] = None,
    break_end: Optional[str] = None,
    location: str = "Oak St.",
) -> TimesheetRow:
    return TimesheetRow(
        timesheet_id=timesheet_id,
        user_id=user_id,
        username=username,
        hourly_rate=Decimal(hourly_rate),
        work_date=work_date,
        start_time=start,
        end_time=end,
        break_start=break_start,
        break_end=break_end,
        location=location,
    )


@pytest.fixture
def users_repo():
    repo = InMemoryUsers()
    repo.create_user(username="admin", password_hash=generate_password_hash("admin123"), role=Role.ADMIN, hourly_rate="25.00")
    repo.create_user(username="bob", password_hash=generate_password_hash("painter123"), role=Role.PAINTER, hourly_rate="20.00")
    repo.create_user(username="carol", password_hash=generate_password_hash("painter123"), role=Role.PAINTER, hourly_rate="30.00")
    return repo


@pytest.fixture
def timesheets_repo(users_repo):
    repo = InMemoryTimesheets(users_repo)
    entries = [
        (2, date(2025, 1, 6), "07:00", "15:30", "11:00", "11:30", "Oak St. residence"),
        (2, date(2025, 1, 7), "07:00", "16:00", "12:00", "12:45", "Oak St. residence, Elm Ave. office"),
        (3, date(2025, 1, 7), "09:00", "17:30", "12:00", "12:45", "Mall"),
        (3, date(2025, 1, 14), "22:00", "06:00", None, None, "Mall night shift"),
    ]
    for user_id, work_date, start, end, bs, be, location in entries:
        repo.create(
            user_id=user_id,
            data=TimesheetInput(
                work_date=work_date,
                start_time=start,
                end_time=end,
                break_start=bs,
                break_end=be,
                location=location,
            ),
        )
    return repo


@pytest.fixture
def container(users_repo, timesheets_repo):
    return wire(users_repo, timesheets_repo)


@pytest.fixture
def admin():
    return SessionUser(user_id=1, username="admin", role=Role.ADMIN, hourly_rate=Decimal("25.00"))


@pytest.fixture
def bob():
    return SessionUser(user_id=2, username="bob", role=Role.PAINTER, hourly_rate=Decimal("20.00"))


@pytest.fixture
def carol():
    return SessionUser(user_id=3, username="carol", role=Role.PAINTER, hourly_rate=Decimal("30.00"))


@pytest.fixture
def row_factory():
    return make_row
