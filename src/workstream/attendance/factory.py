from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..common.datetime_utils import parse_hhmm
from ..company.model import WorkingHours
from .strategies.base import AttendanceStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, now: datetime, hours: WorkingHours) -> AttendanceStrategy:
        start = datetime.combine(now.date(), parse_hhmm(hours.check_in))
        if now <= start + timedelta(minutes=int(hours.grace_period or 0)):
            return NormalStrategy()
        return LateStrategy()

    def for_checkout(self, *, elapsed_hours: float, shift_hours: float) -> AttendanceStrategy:
        if elapsed_hours < shift_hours / 2:
            return HalfDayStrategy()
        return NormalStrategy()
