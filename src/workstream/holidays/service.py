from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date, year_bounds
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_HOLIDAY_TYPE
from ..core.exceptions import NotFoundError, ValidationError
from .model import Holiday
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


class HolidayService:
    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def create(self, data: dict) -> Holiday:
        name = require_non_empty(data.get("name"), "Holiday name")
        holiday_date = parse_iso_date(require_non_empty(data.get("date"), "Holiday date"))
        holiday_type = (data.get("type") or DEFAULT_HOLIDAY_TYPE).strip()

        holiday_id = self._holidays.create(name=name, holiday_date=holiday_date, holiday_type=holiday_type)
        logger.info("Holiday %s created for %s", holiday_id, holiday_date)
        return self._get(holiday_id)

    def list_holidays(self, *, year: Optional[int] = None) -> Sequence[Holiday]:
        if year is None:
            return self._holidays.list_between()
        return self._holidays.list_between(*year_bounds(year))

    def upcoming(self, *, today: Optional[date] = None, limit: int = 3) -> Sequence[Holiday]:
        today = today or date.today()
        return list(self._holidays.list_between(today, None))[: max(0, int(limit))]

    def update(self, holiday_id: int, data: dict, *, today: Optional[date] = None) -> Holiday:
        today = today or date.today()
        holiday = self._get(holiday_id)
        if holiday.holiday_date < today:
            raise ValidationError("Cannot edit past holidays.")

        name = (data.get("name") or "").strip() or holiday.name
        new_date = parse_iso_date(data["date"]) if data.get("date") else holiday.holiday_date
        holiday_type = (data.get("type") or "").strip() or holiday.holiday_type

        self._holidays.update(holiday_id, name=name, holiday_date=new_date, holiday_type=holiday_type)
        return self._get(holiday_id)

    def delete(self, holiday_id: int, *, today: Optional[date] = None) -> None:
        today = today or date.today()
        holiday = self._get(holiday_id)
        if holiday.holiday_date < today:
            raise ValidationError("Cannot delete past holidays.")
        self._holidays.delete_by_id(holiday_id)
        logger.info("Holiday %s removed", holiday_id)

    def _get(self, holiday_id: int) -> Holiday:
        holiday = self._holidays.get_by_id(holiday_id)
        if not holiday:
            raise NotFoundError("Holiday not found")
        return holiday
