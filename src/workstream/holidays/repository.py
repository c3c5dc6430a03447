from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    def get_by_id(self, holiday_id: int) -> Optional[Holiday]:
        raise NotImplementedError

    def list_between(self, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[Holiday]:
        """Holidays in [start, end] (either bound optional), sorted by date."""
        raise NotImplementedError

    def create(self, *, name: str, holiday_date: date, holiday_type: str) -> int:
        raise NotImplementedError

    def update(self, holiday_id: int, *, name: str, holiday_date: date, holiday_type: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, holiday_id: int) -> bool:
        raise NotImplementedError
