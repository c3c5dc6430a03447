from __future__ import annotations

from datetime import date

import pytest

from workstream.company.model import CompanySettings, LeavePolicy
from workstream.core.enums import AttendanceStatus, LeaveStatus, LeaveType
from workstream.core.exceptions import AuthorizationError, ValidationError
from tests.fakes import Fakes

TODAY = date(2025, 3, 12)


def _apply(container, user, **data):
    body = {"leaveType": "Casual Leave", "reason": "family trip", **data}
    return container.leave_service.apply(user, body, today=TODAY)


def test_apply_creates_pending_request(container, employee):
    leave = _apply(container, employee, startDate="2025-03-17", endDate="2025-03-19")

    assert leave.status == LeaveStatus.PENDING
    assert leave.start_date == date(2025, 3, 17)
    assert leave.end_date == date(2025, 3, 19)
    assert leave.leave_duration == 1.0
    assert leave.user_name == "Alice"


@pytest.mark.parametrize(
    "data, message",
    [
        ({"startDate": "2025-03-11"}, "past dates"),
        ({"startDate": "2025-03-12"}, "at least one day in advance"),
        ({"startDate": "2025-03-17", "endDate": "2025-03-16"}, "End date cannot be before start date"),
        ({"startDate": "2025-03-17", "leaveDuration": 0.5}, "Half-day leave is not enabled"),
        ({"startDate": "2025-03-17", "leaveDuration": 2}, "must be 1 or 0.5"),
        ({"startDate": "2025-03-17", "reason": ""}, "Reason is required"),
    ],
)
def test_apply_rejects_invalid_requests(container, employee, data, message):
    with pytest.raises(ValidationError, match=message):
        _apply(container, employee, **data)


def test_apply_rejects_overlap_with_pending_request(container, employee):
    _apply(container, employee, startDate="2025-03-17", endDate="2025-03-19")

    with pytest.raises(ValidationError, match=r"already have a pending leave request .*2025-03-17 - 2025-03-19"):
        _apply(container, employee, startDate="2025-03-19", endDate="2025-03-20")


def test_rejected_requests_do_not_block(container, admin, employee):
    first = _apply(container, employee, startDate="2025-03-17")
    container.leave_service.reject(first.leave_id, approver=admin)

    again = _apply(container, employee, startDate="2025-03-17")
    assert again.status == LeaveStatus.PENDING


def test_half_day_same_day_allowed_when_enabled():
    fakes = Fakes(CompanySettings(leave_policy=LeavePolicy(enable_half_day=True)))
    container = fakes.container()
    user = fakes.users.add("Alice")

    leave = _apply(container, user, startDate="2025-03-12", endDate="2025-03-14", leaveDuration=0.5)

    assert leave.is_half_day
    assert leave.end_date == leave.start_date == TODAY


def test_approve_writes_leave_days_skipping_weekends_and_holidays(container, fakes, admin, employee):
    fakes.holidays.create(name="Spring Festival", holiday_date=date(2025, 3, 19))
    leave = _apply(container, employee, startDate="2025-03-17", endDate="2025-03-23")

    approved = container.leave_service.approve(leave.leave_id, approver=admin)

    assert approved.status == LeaveStatus.APPROVED
    assert approved.approved_by == admin.user_id
    records = fakes.attendance.list_for_user(employee.user_id, start=date(2025, 3, 1), end=date(2025, 3, 31))
    assert [r.work_date.day for r in records] == [17, 18, 20, 21]
    assert {r.status for r in records} == {AttendanceStatus.LEAVE}
    assert {r.leave_type for r in records} == {"Casual"}


def test_approve_beyond_quota_marks_unpaid_days():
    fakes = Fakes(CompanySettings(leave_policy=LeavePolicy(casual_leave=2)))
    container = fakes.container()
    admin = fakes.users.add("Admin")
    user = fakes.users.add("Alice")
    leave = _apply(container, user, startDate="2025-03-17", endDate="2025-03-19")

    container.leave_service.approve(leave.leave_id, approver=admin)

    records = fakes.attendance.list_for_user(user.user_id, start=date(2025, 3, 17), end=date(2025, 3, 19))
    assert [r.status for r in records] == [
        AttendanceStatus.LEAVE,
        AttendanceStatus.LEAVE,
        AttendanceStatus.UNPAID_LEAVE,
    ]


def test_approve_twice_fails(container, admin, employee):
    leave = _apply(container, employee, startDate="2025-03-17")
    container.leave_service.approve(leave.leave_id, approver=admin)

    with pytest.raises(ValidationError, match="already approved"):
        container.leave_service.approve(leave.leave_id, approver=admin)
    with pytest.raises(ValidationError, match="already approved"):
        container.leave_service.reject(leave.leave_id, approver=admin)


def test_auto_approve_when_policy_does_not_require_approval():
    fakes = Fakes(CompanySettings(leave_policy=LeavePolicy(require_approval=False)))
    container = fakes.container()
    user = fakes.users.add("Alice")

    leave = _apply(container, user, startDate="2025-03-17")

    assert leave.status == LeaveStatus.APPROVED
    assert fakes.attendance.get_for_user_and_date(user.user_id, date(2025, 3, 17)).status == AttendanceStatus.LEAVE


def test_balances_count_working_days_and_half_days():
    fakes = Fakes(CompanySettings(leave_policy=LeavePolicy(enable_half_day=True, maternity_leave=0)))
    container = fakes.container()
    admin = fakes.users.add("Admin")
    user = fakes.users.add("Alice")
    casual = _apply(container, user, startDate="2025-03-14", endDate="2025-03-18")
    sick = _apply(container, user, leaveType="Sick", startDate="2025-03-20", leaveDuration=0.5)
    _apply(container, user, startDate="2025-04-01")
    container.leave_service.approve(casual.leave_id, approver=admin)
    container.leave_service.approve(sick.leave_id, approver=admin)

    balances = {b.leave_type: b for b in container.leave_service.balances(user, user.user_id, year=2025)}

    assert set(balances) == {LeaveType.CASUAL, LeaveType.SICK, LeaveType.ANNUAL}
    assert balances[LeaveType.CASUAL].used == 3
    assert balances[LeaveType.CASUAL].remaining == 9
    assert balances[LeaveType.SICK].used == 0.5
    assert balances[LeaveType.ANNUAL].to_dict() == {"type": "Annual", "total": 18, "used": 0.0, "remaining": 18}


def test_employee_cannot_list_other_users_leaves(container, fakes, employee):
    other = fakes.users.add("Bob")
    with pytest.raises(AuthorizationError):
        container.leave_service.list_for_user(employee, other.user_id)


def test_list_all_filters_by_status_and_search(container, admin, employee):
    first = _apply(container, employee, startDate="2025-03-17", reason="Dentist appointment")
    _apply(container, employee, startDate="2025-03-24", reason="Wedding")
    container.leave_service.approve(first.leave_id, approver=admin)

    assert [leave.reason for leave in container.leave_service.list_all(status="approved")] == ["Dentist appointment"]
    assert [leave.reason for leave in container.leave_service.list_all(search="wed")] == ["Wedding"]
    assert [leave.reason for leave in container.leave_service.pending()] == ["Wedding"]
    with pytest.raises(ValidationError):
        container.leave_service.list_all(status="archived")
