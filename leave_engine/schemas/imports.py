"""Strict schemas for bulk-imported rows.

They add the structural invariants a stored record must satisfy on top of
the lenient domain records, so a row either validates completely or is
reported as malformed.
"""

from __future__ import annotations

import math
from typing import Any, Self

from pydantic import ConfigDict, Field, field_validator, model_validator

from leave_engine.models.base import CamelModel
from leave_engine.models.employee import Employee
from leave_engine.models.enums import LeaveStatus, WorkShift
from leave_engine.models.policy import AppConfig
from leave_engine.models.request import LeaveRequest
from leave_engine.services.calendar import HALF_DAY, parse_date

DAYS_TOLERANCE = 0.01


def nearly_equal(a: float, b: float, tolerance: float = DAYS_TOLERANCE) -> bool:
    return math.isclose(a, b, rel_tol=0, abs_tol=tolerance)


def _require_text(value: str) -> str:
    if not value.strip():
        msg = "must not be empty"
        raise ValueError(msg)
    return value


class ImportedEmployee(Employee):
    """Employee row as accepted by the importer.

    Every field must be present. Profile fields may be empty strings but
    names, id and email may not.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    first_name: str
    last_name: str
    email: str
    position: str
    department: str
    avatar_url: str
    total_vacation_days: float = Field(ge=0)
    used_vacation_days: float = Field(ge=0)
    total_admin_days: float = Field(ge=0)
    used_admin_days: float = Field(ge=0)
    total_sick_leave_days: float = Field(ge=0)
    used_sick_leave_days: float = Field(ge=0)

    @field_validator("id", "first_name", "last_name", "email")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        return _require_text(value)

    @model_validator(mode="after")
    def _validate_balances(self) -> Self:
        if "@" not in self.email:
            msg = "email must contain '@'"
            raise ValueError(msg)
        if self.used_vacation_days > self.total_vacation_days:
            msg = "used vacation days exceed total"
            raise ValueError(msg)
        if self.used_admin_days > self.total_admin_days:
            msg = "used administrative days exceed total"
            raise ValueError(msg)
        if self.used_sick_leave_days > self.total_sick_leave_days:
            msg = "used sick leave days exceed total"
            raise ValueError(msg)
        return self


class ImportedRequest(LeaveRequest):
    """Leave request row as accepted by the importer; status, shift and reason are required."""

    model_config = ConfigDict(allow_inf_nan=False)

    status: LeaveStatus
    shift: WorkShift
    reason: str

    @field_validator("id", "employee_id")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        return _require_text(value)

    @field_validator("start_date", "end_date")
    @classmethod
    def _calendar_date(cls, value: str) -> str:
        if parse_date(value) is None:
            msg = "must be a valid YYYY-MM-DD date"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def _validate_range(self) -> Self:
        start, end = self.start, self.end
        if start is not None and end is not None and end < start:
            msg = "end_date must not be before start_date"
            raise ValueError(msg)
        if self.days_count <= 0:
            msg = "days_count must be greater than zero"
            raise ValueError(msg)
        if self.shift != WorkShift.FULL_DAY:
            if self.start_date != self.end_date:
                msg = "half-day requests must start and end on the same day"
                raise ValueError(msg)
            if not nearly_equal(self.days_count, HALF_DAY):
                msg = "half-day requests must count 0.5 days"
                raise ValueError(msg)
        return self


class ImportedConfig(AppConfig):
    """Configuration block as accepted by the importer."""

    model_config = ConfigDict(allow_inf_nan=False)


class ImportPayload(CamelModel):
    """Raw import body; rows are validated individually by the importer."""

    employees: Any = None
    requests: Any = None
    config: Any = None


class ImportValidationResult(CamelModel):
    """Every problem found in an import payload."""

    valid: bool
    errors: list[str]
    warnings: list[str]
