# ruff: noqa: TC001
from __future__ import annotations

from pydantic import Field

from leave_engine.models.base import CamelModel
from leave_engine.models.employee import Employee
from leave_engine.models.enums import LeaveType
from leave_engine.models.policy import AppConfig
from leave_engine.models.request import LeaveRequest

# ---------------------------------------------------------------------------
# Verdicts
# ---------------------------------------------------------------------------


class BalanceVerdict(CamelModel):
    """Whether an employee can afford a number of days of a leave type."""

    valid: bool
    remaining_days: float | None  # None for unrestricted leave types
    message: str | None = None


class BalanceSummary(CamelModel):
    """Remaining days per leave type for one employee."""

    employee_id: str
    remaining: dict[LeaveType, float | None]


# ---------------------------------------------------------------------------
# API payloads
# ---------------------------------------------------------------------------


class RebuildPayload(CamelModel):
    """Request body for rebuilding used-day counters."""

    employees: list[Employee]
    requests: list[LeaveRequest]
    reference_year: int | None = Field(default=None, ge=1, le=9999)


class EmployeeListResponse(CamelModel):
    """A list of employee records."""

    items: list[Employee]
    total: int


class ValidateBalancePayload(CamelModel):
    """Request body for a balance check."""

    employee: Employee
    type: LeaveType
    days_count: float


class ApplyConfigPayload(CamelModel):
    """Request body for pushing configured totals to employees."""

    employees: list[Employee]
    config: AppConfig = Field(default_factory=AppConfig)
    employee_ids: list[str] | None = None
