# ruff: noqa: B008
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Query

from leave_engine.api.deps import HolidaysDep
from leave_engine.exceptions import InvalidInputError
from leave_engine.schemas.holiday import HolidayListResponse, HolidayResponse
from leave_engine.schemas.request import CountDaysPayload, CountDaysResponse
from leave_engine.services.calendar import count_chargeable_days, is_valid_calendar_date
from leave_engine.services.holiday import holiday_name

calendar_router = APIRouter(prefix="/calendar", tags=["calendar"])


@calendar_router.post("/days", response_model=CountDaysResponse)
async def count_days(payload: CountDaysPayload, holidays: HolidaysDep) -> CountDaysResponse:
    """Chargeable days for a date range, leave type and shift.

    The counter itself treats a malformed date as costing 0 days so batch
    callers never fail. A client asking about one range gets a 400 instead,
    because a 0 here would be indistinguishable from a weekend-only range.
    """
    if not is_valid_calendar_date(payload.start_date) or not is_valid_calendar_date(payload.end_date):
        raise InvalidInputError("start_date and end_date must be valid YYYY-MM-DD dates")
    days = count_chargeable_days(payload.start_date, payload.end_date, payload.type, payload.shift, holidays)
    return CountDaysResponse(days_count=days)


@calendar_router.get("/holidays", response_model=HolidayListResponse)
async def list_holidays(
    holidays: HolidaysDep,
    year: int | None = Query(default=None, ge=1, le=9999),
) -> HolidayListResponse:
    """List national holidays, optionally for one year."""
    days: list[date] = list(holidays) if year is None else holidays.in_year(year)
    return HolidayListResponse(
        items=[HolidayResponse(date=d, name=holiday_name(d)) for d in days],
        total=len(days),
    )
