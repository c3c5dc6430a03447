from datetime import date

from workstream.attendance.day_status import derive_day, missing_record
from workstream.attendance.model import AttendanceRecord
from workstream.core.enums import AttendanceStatus
from workstream.holidays.model import Holiday
from workstream.leaves.model import LeaveRequest

TODAY = date(2025, 3, 12)
HOLIDAY = Holiday(1, "Spring", date(2025, 3, 8))
LEAVE = LeaveRequest(1, 1, "Maternity leave", "r", date(2025, 3, 8), date(2025, 3, 8), leave_duration=1.0)


def test_stored_log_wins_over_everything():
    record = AttendanceRecord(attendance_id=5, user_id=1, work_date=date(2025, 3, 8), status=AttendanceStatus.PRESENT)

    day = derive_day(date(2025, 3, 8), today=TODAY, record=record, holiday=HOLIDAY, leave=LEAVE, weekend=True)

    assert day.status == AttendanceStatus.PRESENT
    assert day.record is record


def test_before_joining_shows_future():
    day = derive_day(date(2025, 3, 8), today=TODAY, joining_date=date(2025, 3, 10), holiday=HOLIDAY)
    assert day.status == AttendanceStatus.FUTURE


def test_holiday_then_leave_then_weekend():
    assert derive_day(date(2025, 3, 8), today=TODAY, holiday=HOLIDAY, leave=LEAVE, weekend=True).status == (
        AttendanceStatus.HOLIDAY
    )

    on_leave = derive_day(date(2025, 3, 8), today=TODAY, leave=LEAVE, weekend=True)
    assert on_leave.status == AttendanceStatus.LEAVE
    assert on_leave.leave_type == "Maternity"

    assert derive_day(date(2025, 3, 8), today=TODAY, weekend=True).status == AttendanceStatus.WEEKEND


def test_unlogged_workday_is_absent_until_today_then_future():
    assert derive_day(TODAY, today=TODAY).status == AttendanceStatus.ABSENT
    assert derive_day(date(2025, 3, 13), today=TODAY).status == AttendanceStatus.FUTURE


def test_missing_record_for_leave_uses_request_duration():
    half = LeaveRequest(2, 1, "Sick", "r", TODAY, TODAY, leave_duration=0.5)

    record = missing_record(1, TODAY, leave=half)

    assert record.attendance_id is None
    assert record.is_missing_record
    assert record.status == AttendanceStatus.LEAVE
    assert record.leave_duration == 0.5
    assert missing_record(1, TODAY).status == AttendanceStatus.ABSENT
