from __future__ import annotations

from datetime import datetime

from ...company.model import WorkingHours
from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class HalfDayStrategy(AttendanceStrategy):
    """Confirmed early check-out before half of the shift was worked."""

    def decide_checkin(self, *, now: datetime, hours: WorkingHours) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_checkout(self, *, elapsed_hours: float, shift_hours: float, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.HALF_DAY,
            note=f"Worked {elapsed_hours:.2f}h of a {shift_hours:.2f}h shift",
        )
