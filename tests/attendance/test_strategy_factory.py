from datetime import datetime

from workstream.attendance.factory import AttendanceStrategyFactory
from workstream.attendance.strategies.half_day_strategy import HalfDayStrategy
from workstream.attendance.strategies.late_strategy import LateStrategy
from workstream.attendance.strategies.normal_strategy import NormalStrategy
from workstream.company.model import WorkingHours
from workstream.core.enums import AttendanceStatus


def test_factory_checkin_on_time_within_grace():
    hours = WorkingHours(check_in="09:00", grace_period=15, check_out="18:00")
    now = datetime(2025, 1, 1, 9, 15, 0)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, hours=hours)

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_checkin(now=now, hours=hours).status == AttendanceStatus.PRESENT


def test_factory_checkin_late_after_grace():
    hours = WorkingHours(check_in="09:00", grace_period=15, check_out="18:00")
    now = datetime(2025, 1, 1, 9, 15, 1)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, hours=hours)

    assert isinstance(strategy, LateStrategy)
    assert strategy.decide_checkin(now=now, hours=hours).status == AttendanceStatus.LATE


def test_factory_checkout_before_half_shift_is_half_day():
    strategy = AttendanceStrategyFactory().for_checkout(elapsed_hours=4.4, shift_hours=9)

    assert isinstance(strategy, HalfDayStrategy)
    decision = strategy.decide_checkout(elapsed_hours=4.4, shift_hours=9, current=AttendanceStatus.LATE)
    assert decision.status == AttendanceStatus.HALF_DAY


def test_factory_checkout_keeps_checkin_status_after_half_shift():
    strategy = AttendanceStrategyFactory().for_checkout(elapsed_hours=4.5, shift_hours=9)

    decision = strategy.decide_checkout(elapsed_hours=4.5, shift_hours=9, current=AttendanceStatus.LATE)
    assert decision.status == AttendanceStatus.LATE


def test_night_shift_length_wraps_midnight():
    assert WorkingHours(check_in="22:00", check_out="06:00").shift_hours == 8
    assert WorkingHours(check_in="09:00", check_out="09:00").shift_hours == 9
