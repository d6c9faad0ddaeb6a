# ruff: noqa: TC003
from __future__ import annotations

import datetime

from leave_engine.models.base import CamelModel


class HolidayResponse(CamelModel):
    """A non-working day from the national calendar."""

    date: datetime.date
    name: str | None = None


class HolidayListResponse(CamelModel):
    """Holidays in date order."""

    items: list[HolidayResponse]
    total: int
