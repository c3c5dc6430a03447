from __future__ import annotations

from datetime import datetime

from ...company.model import WorkingHours
from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Check-in after the start time plus grace period."""

    def decide_checkin(self, *, now: datetime, hours: WorkingHours) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE, note=f"Checked in after {hours.check_in}")

    def decide_checkout(self, *, elapsed_hours: float, shift_hours: float, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)
