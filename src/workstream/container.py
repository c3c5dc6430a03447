from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .company.mysql_settings_repository import MySQLCompanySettingsRepository
from .company.repository import CompanySettingsRepository
from .company.service import CompanySettingsService
from .core.constants import DEFAULT_TOKEN_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .holidays.service import HolidayService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .meetings.mysql_meeting_repository import MySQLMeetingRepository
from .meetings.repository import MeetingRepository
from .meetings.service import MeetingService
from .overview.service import EmployeeOverviewService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_salary_repository import MySQLSalaryRepository
from .payroll.report_service import AttendanceReportService
from .payroll.repository import SalaryRepository
from .payroll.service import PayrollService
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.repository import ProjectRepository
from .projects.service import ProjectService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .users.token_service import TokenService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    settings_repo: CompanySettingsRepository
    holidays_repo: HolidayRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    projects_repo: ProjectRepository
    meetings_repo: MeetingRepository
    salaries_repo: SalaryRepository

    token_service: TokenService
    auth_service: AuthService
    user_service: UserService
    settings_service: CompanySettingsService
    holiday_service: HolidayService
    attendance_service: AttendanceService
    attendance_report_service: AttendanceReportService
    leave_service: LeaveService
    project_service: ProjectService
    meeting_service: MeetingService
    payroll_service: PayrollService
    overview_service: EmployeeOverviewService


def wire_container(
    *,
    conn: Optional[DatabaseConnection],
    users_repo: UserRepository,
    settings_repo: CompanySettingsRepository,
    holidays_repo: HolidayRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    projects_repo: ProjectRepository,
    meetings_repo: MeetingRepository,
    salaries_repo: SalaryRepository,
    jwt_secret: str,
    jwt_expires_days: int = DEFAULT_TOKEN_DAYS,
) -> Container:
    """Build every service on top of the given repositories."""
    token_service = TokenService(jwt_secret, expires_days=jwt_expires_days)
    settings_service = CompanySettingsService(settings_repo)
    calculator = StandardPayrollCalculator()

    return Container(
        conn=conn,
        users_repo=users_repo,
        settings_repo=settings_repo,
        holidays_repo=holidays_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        projects_repo=projects_repo,
        meetings_repo=meetings_repo,
        salaries_repo=salaries_repo,
        token_service=token_service,
        auth_service=AuthService(users_repo, token_service),
        user_service=UserService(users_repo),
        settings_service=settings_service,
        holiday_service=HolidayService(holidays_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            users_repo,
            holidays_repo,
            leaves_repo,
            settings_service,
            strategy_factory=AttendanceStrategyFactory(),
        ),
        attendance_report_service=AttendanceReportService(attendance_repo, calculator=calculator),
        leave_service=LeaveService(leaves_repo, attendance_repo, holidays_repo, settings_service),
        project_service=ProjectService(projects_repo, users_repo),
        meeting_service=MeetingService(meetings_repo, users_repo),
        payroll_service=PayrollService(
            salaries_repo, users_repo, attendance_repo, settings_service, calculator=calculator
        ),
        overview_service=EmployeeOverviewService(
            users_repo, attendance_repo, leaves_repo, projects_repo, salaries_repo
        ),
    )


def build_container(*, db_config: dict, jwt_secret: str, jwt_expires_days: int = DEFAULT_TOKEN_DAYS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        settings_repo=MySQLCompanySettingsRepository(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        projects_repo=MySQLProjectRepository(conn),
        meetings_repo=MySQLMeetingRepository(conn),
        salaries_repo=MySQLSalaryRepository(conn),
        jwt_secret=jwt_secret,
        jwt_expires_days=jwt_expires_days,
    )
