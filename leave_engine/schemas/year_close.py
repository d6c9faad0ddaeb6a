# ruff: noqa: TC001, TC003
from __future__ import annotations

from datetime import date

from pydantic import Field

from leave_engine.models.base import CamelModel
from leave_engine.models.employee import Employee
from leave_engine.models.policy import AppConfig
from leave_engine.models.year_close import YearCloseMeta


class YearCloseResult(CamelModel):
    """Employees after the annual close plus what the close forfeited."""

    employees: list[Employee]
    admin_days_expired: float = 0
    vacation_days_capped: float = 0


# ---------------------------------------------------------------------------
# API payloads
# ---------------------------------------------------------------------------


class YearClosePayload(CamelModel):
    """Request body for previewing or running the annual close."""

    employees: list[Employee]
    config: AppConfig = Field(default_factory=AppConfig)
    today: date | None = None


class YearCloseRunResponse(CamelModel):
    """Result of a recorded annual close."""

    closed_year: int
    result: YearCloseResult
    meta: YearCloseMeta


class YearCloseStatusResponse(CamelModel):
    """Whether a close is due on a given day."""

    today: date
    target_year: int | None
    due: bool
    meta: YearCloseMeta


class ReminderResponse(CamelModel):
    """Pre-close reminder, if one should be shown."""

    message: str | None
    meta: YearCloseMeta
