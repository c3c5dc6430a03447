from __future__ import annotations

import pytest

from workstream.core.enums import LeaveType
from workstream.core.exceptions import ValidationError


def test_defaults_created_on_first_read(container, fakes):
    settings = container.settings_service.get_settings()

    assert settings.settings_id == 1
    assert settings.working_hours.check_in == "09:00"
    assert settings.shift_hours == 9
    assert settings.weekend_policy == ("Sat", "Sun")
    assert settings.quota_for(LeaveType.SICK) == 10
    assert fakes.settings.settings is not None


def test_update_merges_sections(container):
    updated = container.settings_service.update_settings(
        {
            "companyName": "Acme",
            "workingHours": {"checkIn": "08:30", "gracePeriod": 10, "checkOut": "17:00"},
            "weekendPolicy": ["friday", "Sat", "sat"],
            "leavePolicy": {"casualLeave": 8, "enableHalfDay": True},
            "payroll": {"monthlyBudget": 90000, "salaryDate": 25},
        }
    )

    assert updated.company_name == "Acme"
    assert updated.shift_hours == 8.5
    assert updated.weekend_policy == ("Fri", "Sat")
    assert updated.leave_policy.casual_leave == 8
    assert updated.leave_policy.sick_leave == 10
    assert updated.leave_policy.enable_half_day is True
    assert updated.payroll.salary_date == 25
    assert updated.to_dict()["payroll"] == {"monthlyBudget": 90000, "salaryDate": 25}


@pytest.mark.parametrize(
    "data",
    [
        {"workingHours": {"checkIn": "9am", "checkOut": "18:00"}},
        {"weekendPolicy": ["Funday"]},
        {"weekendPolicy": "Sat"},
        {"leavePolicy": {"sickLeave": -1}},
        {"payroll": {"monthlyBudget": 100, "salaryDate": 32}},
        {"payroll": {"monthlyBudget": -5}},
        {"workingHours": "09:00"},
    ],
)
def test_update_rejects_invalid_values(container, data):
    with pytest.raises(ValidationError):
        container.settings_service.update_settings(data)
