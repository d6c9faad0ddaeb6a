# ruff: noqa: TC001
from __future__ import annotations

from pydantic import Field

from leave_engine.models.base import CamelModel
from leave_engine.models.employee import Employee
from leave_engine.models.enums import LeaveType, WorkShift
from leave_engine.models.request import LeaveRequest

# ---------------------------------------------------------------------------
# Drafts and verdicts
# ---------------------------------------------------------------------------


class RequestDraft(CamelModel):
    """A leave request as entered, before it is created."""

    employee_id: str
    type: LeaveType
    start_date: str
    end_date: str
    shift: WorkShift = WorkShift.FULL_DAY
    reason: str = ""


class RequestCheckResult(CamelModel):
    """Outcome of the pre-creation checks for a draft."""

    valid: bool
    days_count: float
    remaining_days: float | None = None
    message: str | None = None


# ---------------------------------------------------------------------------
# API payloads
# ---------------------------------------------------------------------------


class CountDaysPayload(CamelModel):
    """Request body for counting chargeable days."""

    start_date: str
    end_date: str
    type: LeaveType
    shift: WorkShift = WorkShift.FULL_DAY


class CountDaysResponse(CamelModel):
    """Chargeable days for a range."""

    days_count: float


class CheckRequestPayload(CamelModel):
    """Request body for checking a draft against an employee's history."""

    employee: Employee
    requests: list[LeaveRequest] = Field(default_factory=list)
    draft: RequestDraft
