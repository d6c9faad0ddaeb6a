# ruff: noqa: B008
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Query

from leave_engine.api.deps import MetaStoreDep
from leave_engine.exceptions import YearCloseNotDueError
from leave_engine.models.policy import AppConfig
from leave_engine.schemas.year_close import (
    ReminderResponse,
    YearClosePayload,
    YearCloseResult,
    YearCloseRunResponse,
    YearCloseStatusResponse,
)
from leave_engine.services import year_close as year_close_service

year_close_router = APIRouter(prefix="/year-close", tags=["year-close"])


@year_close_router.get("/status", response_model=YearCloseStatusResponse)
async def year_close_status(
    store: MetaStoreDep,
    today: date | None = Query(default=None),
    grace_days: int = Query(default=AppConfig().grace_days, ge=0, le=31),
) -> YearCloseStatusResponse:
    """Whether the annual close is due."""
    day = today or date.today()
    meta = await store.load()
    return YearCloseStatusResponse(
        today=day,
        target_year=year_close_service.target_year_to_close(day, grace_days),
        due=year_close_service.is_close_due(day, meta, grace_days),
        meta=meta,
    )


@year_close_router.post("/preview", response_model=YearCloseResult)
async def preview_year_close(payload: YearClosePayload) -> YearCloseResult:
    """Compute the close without recording it."""
    return year_close_service.apply_year_close(payload.employees, payload.config)


@year_close_router.post("/run", response_model=YearCloseRunResponse)
async def run_year_close(payload: YearClosePayload, store: MetaStoreDep) -> YearCloseRunResponse:
    """Apply and record the annual close if it is due."""
    outcome = await year_close_service.run_year_close(store, payload.employees, payload.config, payload.today)
    if outcome is None:
        raise YearCloseNotDueError("Year close is not due")
    closed_year, result, meta = outcome
    return YearCloseRunResponse(closed_year=closed_year, result=result, meta=meta)


@year_close_router.post("/reminder", response_model=ReminderResponse)
async def year_close_reminder(payload: YearClosePayload, store: MetaStoreDep) -> ReminderResponse:
    """Return the pre-close reminder once per year and record that it was shown."""
    message, meta = await year_close_service.acknowledge_reminder(
        store, payload.employees, payload.config, payload.today
    )
    return ReminderResponse(message=message, meta=meta)
