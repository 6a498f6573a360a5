from __future__ import annotations

from dataclasses import dataclass

from .database.connection import DatabaseConnection
from .payroll.calculator.tiered_calculator import TieredBreakCalculator
from .payroll.service import PayrollReportService
from .timesheets.mysql_timesheet_repository import MySQLTimesheetRepository
from .timesheets.repository import TimesheetRepository
from .timesheets.service import TimesheetService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    timesheets_repo: TimesheetRepository

    auth_service: AuthService
    user_service: UserService
    timesheet_service: TimesheetService
    payroll_report_service: PayrollReportService


def wire(users_repo: UserRepository, timesheets_repo: TimesheetRepository) -> Container:
    """Assemble services over any repository implementations (MySQL or in-memory)."""
    payroll_report_service = PayrollReportService(timesheets_repo, calculator=TieredBreakCalculator())
    return Container(
        users_repo=users_repo,
        timesheets_repo=timesheets_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        timesheet_service=TimesheetService(timesheets_repo, users_repo, payroll_report_service),
        payroll_report_service=payroll_report_service,
    )


def build_container(db: DatabaseConnection) -> Container:
    return wire(MySQLUserRepository(db), MySQLTimesheetRepository(db))
