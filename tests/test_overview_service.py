from __future__ import annotations

from datetime import date

import pytest

from workstream.core.enums import AttendanceStatus, LeaveStatus, SalaryStatus
from workstream.core.exceptions import NotFoundError

TODAY = date(2025, 3, 12)


def _approved_leave(fakes, user_id, leave_type, start, duration=1.0):
    leave_id = fakes.leaves.create(
        user_id=user_id,
        leave_type=leave_type,
        reason="r",
        start_date=start,
        end_date=start,
        leave_duration=duration,
    )
    fakes.leaves.set_status(leave_id, status=LeaveStatus.APPROVED, approved_by=None)


def test_overview_collects_everything(container, fakes, admin, employee):
    for day, status in [
        (3, AttendanceStatus.PRESENT),
        (4, AttendanceStatus.LATE),
        (5, AttendanceStatus.HALF_DAY),
        (6, AttendanceStatus.ABSENT),
        (7, AttendanceStatus.LEAVE),
        (8, AttendanceStatus.WEEKEND),
    ]:
        fakes.attendance.add(employee.user_id, date(2025, 3, day), status)
    fakes.attendance.add(employee.user_id, date(2025, 2, 28), AttendanceStatus.PRESENT)

    _approved_leave(fakes, employee.user_id, "Sick Leave", date(2025, 2, 3))
    _approved_leave(fakes, employee.user_id, "Sick Leave", date(2025, 3, 7), duration=0.5)
    _approved_leave(fakes, employee.user_id, "Casual", date(2024, 12, 30))

    container.project_service.create(admin, {"name": "Portal", "assignedTo": [employee.user_id]})
    container.project_service.create(admin, {"name": "Other"})
    fakes.salaries.create(
        user_id=employee.user_id,
        month=2,
        year=2025,
        base_salary=30000,
        deductions=0,
        net_pay=30000,
        unpaid_days=0,
        status=SalaryStatus.PAID,
    )

    data = container.overview_service.overview(employee.user_id, today=TODAY).to_dict()

    assert data["profile"]["email"] == "alice@example.com"
    assert "passwordHash" not in data["profile"]
    assert data["attendanceStats"] == {
        "present": 2,
        "absent": 1,
        "late": 1,
        "halfDay": 1,
        "leave": 1,
        "holiday": 0,
        "weekend": 1,
    }
    assert data["leaveBreakdown"] == {"Sick Leave": 1.5}
    assert [p["name"] for p in data["projects"]] == ["Portal"]
    assert data["recentSalary"]["month"] == 2


def test_overview_without_salary(container, employee):
    data = container.overview_service.overview(employee.user_id, today=TODAY).to_dict()

    assert data["recentSalary"] is None
    assert data["leaveBreakdown"] == {}


def test_overview_unknown_user(container):
    with pytest.raises(NotFoundError, match="User not found"):
        container.overview_service.overview(404, today=TODAY)
