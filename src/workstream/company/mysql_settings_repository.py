from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..core.constants import DEFAULT_WEEKEND
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, json_dump, json_load
from .model import CompanySettings, LeavePolicy, PayrollPolicy, WorkingHours
from .repository import CompanySettingsRepository


class MySQLCompanySettingsRepository(CompanySettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self) -> Optional[CompanySettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT settings_id, company_name, admin_email, company_logo,
                       working_hours, weekend_policy, leave_policy, payroll, updated_at
                FROM company_settings
                ORDER BY settings_id
                LIMIT 1
                """
            )
            row = fetchone(cur)
            if not row:
                return None
            return CompanySettings(
                settings_id=int(row["settings_id"]),
                company_name=row["company_name"],
                admin_email=row.get("admin_email"),
                company_logo=row.get("company_logo"),
                working_hours=WorkingHours.from_dict(json_load(row.get("working_hours"), {})),
                weekend_policy=tuple(json_load(row.get("weekend_policy"), list(DEFAULT_WEEKEND))),
                leave_policy=LeavePolicy.from_dict(json_load(row.get("leave_policy"), {})),
                payroll=PayrollPolicy.from_dict(json_load(row.get("payroll"), {})),
                updated_at=row.get("updated_at"),
            )

    def save(self, settings: CompanySettings) -> CompanySettings:
        params = (
            settings.company_name,
            settings.admin_email,
            settings.company_logo,
            json_dump(settings.working_hours.to_dict()),
            json_dump(list(settings.weekend_policy)),
            json_dump(settings.leave_policy.to_dict()),
            json_dump(settings.payroll.to_dict()),
        )
        with db_cursor(self._conn_factory) as (_, cur):
            if settings.settings_id is None:
                cur.execute(
                    """
                    INSERT INTO company_settings
                        (company_name, admin_email, company_logo, working_hours, weekend_policy, leave_policy, payroll)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    """,
                    params,
                )
                settings = replace(settings, settings_id=int(cur.lastrowid))
            else:
                cur.execute(
                    """
                    UPDATE company_settings
                    SET company_name=%s, admin_email=%s, company_logo=%s,
                        working_hours=%s, weekend_policy=%s, leave_policy=%s, payroll=%s
                    WHERE settings_id=%s
                    """,
                    params + (settings.settings_id,),
                )
        return settings
