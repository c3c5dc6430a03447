from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Holiday:
    holiday_id: int
    name: str
    holiday_date: date
    holiday_type: str = "Public"

    def to_dict(self) -> dict:
        return {
            "_id": self.holiday_id,
            "name": self.name,
            "date": self.holiday_date,
            "type": self.holiday_type,
        }
