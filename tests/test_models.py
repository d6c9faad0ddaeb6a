"""Unit tests for records and their wire format."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from leave_engine.models import AppConfig, Employee, LeaveRequest, LeaveStatus, LeaveType, WorkShift, YearCloseMeta
from leave_engine.models.enums import BALANCE_CATEGORY_BY_TYPE, BalanceCategory


def test_employee_accepts_camel_case_and_numeric_id() -> None:
    employee = Employee.model_validate({"id": 7, "firstName": "Ana", "totalVacationDays": 15, "usedVacationDays": 3})
    assert employee.id == "7"
    assert employee.first_name == "Ana"
    assert employee.total_for(BalanceCategory.VACATION) == 15
    assert employee.used_for(BalanceCategory.VACATION) == 3


def test_employee_accepts_snake_case() -> None:
    employee = Employee(id="1", first_name="Ana", last_name="Pérez", total_admin_days=6)
    assert employee.full_name == "Ana Pérez"
    assert employee.total_for(BalanceCategory.ADMINISTRATIVE) == 6


def test_employee_rejects_negative_counters() -> None:
    with pytest.raises(ValidationError):
        Employee(id="1", used_admin_days=-1)


def test_records_are_frozen() -> None:
    employee = Employee(id="1")
    with pytest.raises(ValidationError):
        employee.used_admin_days = 3  # type: ignore[misc]


def test_to_wire_uses_camel_case() -> None:
    employee = Employee(id="1", total_sick_leave_days=30)
    wire = employee.to_wire()
    assert wire["totalSickLeaveDays"] == 30
    assert "total_sick_leave_days" not in wire


def test_leave_request_wire_values() -> None:
    request = LeaveRequest.model_validate(
        {
            "id": 101,
            "employeeId": 1,
            "type": "Permiso Administrativo",
            "startDate": "2026-01-06",
            "endDate": "2026-01-06",
            "daysCount": 0.5,
            "status": "Aprobado",
            "reason": "Solicitud Importada",
            "shift": "Jornada Mañana",
        }
    )
    assert request.id == "101"
    assert request.employee_id == "1"
    assert request.type is LeaveType.ADMINISTRATIVE
    assert request.shift is WorkShift.MORNING
    assert request.is_approved
    assert request.start == request.end


def test_leave_request_defaults() -> None:
    request = LeaveRequest(
        id="1", employee_id="1", type=LeaveType.SICK_LEAVE, start_date="2026-01-01", end_date="2026-01-02", days_count=2
    )
    assert request.status is LeaveStatus.PENDING
    assert request.shift is WorkShift.FULL_DAY


def test_leave_request_malformed_dates_parse_to_none() -> None:
    request = LeaveRequest(
        id="1", employee_id="1", type=LeaveType.SICK_LEAVE, start_date="2026-02-30", end_date="x", days_count=1
    )
    assert request.start is None
    assert request.end is None


def test_unrestricted_types_have_no_balance_category() -> None:
    assert LeaveType.WITHOUT_PAY not in BALANCE_CATEGORY_BY_TYPE
    assert LeaveType.PARENTAL not in BALANCE_CATEGORY_BY_TYPE


def test_app_config_defaults() -> None:
    config = AppConfig()
    assert config.default_vacation_days == 15
    assert config.default_admin_days == 6
    assert config.default_sick_leave_days == 30
    assert config.carryover_vacation_enabled is True
    assert config.admin_days_expire_at_year_end is True
    assert config.max_vacation_periods == 2
    assert config.reminder_days == 30
    assert config.grace_days == 31
    assert config.max_vacation_total == 30


def test_app_config_partial_wire_payload() -> None:
    config = AppConfig.model_validate({"defaultVacationDays": 20, "carryoverVacationEnabled": False})
    assert config.default_vacation_days == 20
    assert config.carryover_vacation_enabled is False
    assert config.default_admin_days == 6


@pytest.mark.parametrize(
    ("periods", "expected"),
    [(9, 5), (0, 1), (-3, 1), (3.7, 3), (math.nan, 2), (math.inf, 2)],
)
def test_max_vacation_periods_is_clamped(periods: float, expected: int) -> None:
    assert AppConfig(carryover_vacation_max_periods=periods).max_vacation_periods == expected


@pytest.mark.parametrize(("days", "expected"), [(200, 90), (0, 1), (45, 45), (math.nan, 30)])
def test_reminder_days_is_clamped(days: float, expected: int) -> None:
    assert AppConfig(year_close_reminder_days=days).reminder_days == expected


def test_grace_days_is_clamped() -> None:
    assert AppConfig(year_close_grace_days=40).grace_days == 31
    assert AppConfig(year_close_grace_days=-1).grace_days == 0


def test_year_close_meta_defaults() -> None:
    meta = YearCloseMeta.model_validate({"lastClosedYear": 2025})
    assert meta.last_closed_year == 2025
    assert meta.last_reminder_year == 0
    assert meta.version == 0
