from __future__ import annotations

from typing import Optional, Protocol

from .model import CompanySettings


class CompanySettingsRepository(Protocol):
    def get(self) -> Optional[CompanySettings]:
        raise NotImplementedError

    def save(self, settings: CompanySettings) -> CompanySettings:
        """Insert when ``settings_id`` is None, otherwise update that row."""
        raise NotImplementedError
