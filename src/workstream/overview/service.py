from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds, year_bounds
from ..core.constants import FULL_DAY
from ..core.enums import AttendanceStatus, LeaveStatus
from ..core.exceptions import NotFoundError
from ..leaves.repository import LeaveRepository
from ..payroll.model import SalaryRecord
from ..payroll.repository import SalaryRepository
from ..projects.model import Project
from ..projects.repository import ProjectRepository
from ..users.model import User
from ..users.repository import UserRepository


@dataclass(frozen=True)
class EmployeeOverview:
    profile: User
    attendance_stats: dict[str, int]
    leave_breakdown: dict[str, float]
    projects: list[Project]
    recent_salary: Optional[SalaryRecord]

    def to_dict(self) -> dict:
        return {
            "profile": self.profile.to_public(),
            "attendanceStats": self.attendance_stats,
            "leaveBreakdown": self.leave_breakdown,
            "projects": [p.to_dict() for p in self.projects],
            "recentSalary": self.recent_salary.to_dict() if self.recent_salary else None,
        }


class EmployeeOverviewService:
    """One-page summary of an employee for the admin console."""

    def __init__(
        self,
        users: UserRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        projects: ProjectRepository,
        salaries: SalaryRepository,
    ):
        self._users = users
        self._attendance = attendance
        self._leaves = leaves
        self._projects = projects
        self._salaries = salaries

    def overview(self, user_id: int, *, today: Optional[date] = None) -> EmployeeOverview:
        today = today or date.today()
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        month_start, month_end = month_bounds(today.year, today.month)
        counts = Counter(r.status for r in self._attendance.list_for_user(user_id, start=month_start, end=month_end))
        attendance_stats = {
            "present": counts[AttendanceStatus.PRESENT] + counts[AttendanceStatus.LATE],
            "absent": counts[AttendanceStatus.ABSENT],
            "late": counts[AttendanceStatus.LATE],
            "halfDay": counts[AttendanceStatus.HALF_DAY],
            "leave": counts[AttendanceStatus.LEAVE],
            "holiday": counts[AttendanceStatus.HOLIDAY],
            "weekend": counts[AttendanceStatus.WEEKEND],
        }

        year_start, year_end = year_bounds(today.year)
        leave_breakdown: dict[str, float] = {}
        for leave in self._leaves.list_requests(user_id=user_id, status=LeaveStatus.APPROVED):
            if not year_start <= leave.start_date <= year_end:
                continue
            key = leave.leave_type or "Other"
            leave_breakdown[key] = leave_breakdown.get(key, 0.0) + float(leave.leave_duration or FULL_DAY)

        salaries = self._salaries.list_records(user_id=user_id)

        return EmployeeOverview(
            profile=user,
            attendance_stats=attendance_stats,
            leave_breakdown=leave_breakdown,
            projects=list(self._projects.list_projects(member_id=user_id)),
            recent_salary=salaries[0] if salaries else None,
        )
