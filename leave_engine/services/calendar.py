"""Local calendar dates and the chargeable-day counter.

All dates are naive ``datetime.date`` values; no timezone ever enters the
computation, so a day never shifts across an offset boundary.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Literal

from leave_engine.models.enums import BUSINESS_DAY_TYPES, HALF_DAY_SHIFTS, LeaveType, WorkShift
from leave_engine.services.holiday import HolidaySet, get_default_holidays

_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

_MONTHS = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)
_MONTHS_SHORT = ("ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sept", "oct", "nov", "dic")
_WEEKDAYS = ("lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo")

HALF_DAY = 0.5


def is_valid_calendar_date(value: object) -> bool:
    """True iff ``value`` is a ``YYYY-MM-DD`` string naming a real date."""
    return parse_date(value) is not None


def parse_date(value: object) -> date | None:
    """Parse a ``YYYY-MM-DD`` string into a local date.

    Returns ``None`` for anything else, including impossible dates such as
    ``2026-02-30``.
    """
    if not isinstance(value, str) or _ISO_DATE_RE.fullmatch(value) is None:
        return None
    year, month, day = (int(part) for part in value.split("-"))
    try:
        return date(year, month, day)
    except ValueError:
        return None


def to_iso(day: date) -> str:
    return day.isoformat()


def format_date(value: str, style: Literal["short", "medium", "long"] = "short") -> str:
    """Render an ISO date in Chilean Spanish; ``""`` when invalid.

    short: ``09/02/2026``; medium: ``9 feb 2026``;
    long: ``lunes, 9 de febrero de 2026``.
    """
    day = parse_date(value)
    if day is None:
        return ""
    if style == "long":
        return f"{_WEEKDAYS[day.weekday()]}, {day.day} de {_MONTHS[day.month - 1]} de {day.year}"
    if style == "medium":
        return f"{day.day} {_MONTHS_SHORT[day.month - 1]} {day.year}"
    return f"{day.day:02d}/{day.month:02d}/{day.year}"


def shift_label(shift: WorkShift | None) -> str:
    """Human-readable name of a shift; a missing shift reads as full day."""
    return (shift or WorkShift.FULL_DAY).value


def is_business_day(day: date, holidays: HolidaySet | None = None) -> bool:
    """Monday to Friday and not a holiday."""
    if holidays is None:
        holidays = get_default_holidays()
    return day.weekday() < 5 and day not in holidays


def _coerce_date(value: str | date) -> date | None:
    if isinstance(value, date):
        return value
    return parse_date(value)


def count_chargeable_days(
    start: str | date,
    end: str | date,
    leave_type: LeaveType,
    shift: WorkShift,
    holidays: HolidaySet | None = None,
) -> float:
    """Number of days a leave of ``leave_type`` between ``start`` and ``end`` costs.

    - Invalid dates or ``end < start`` cost 0.
    - A single day taken as a half shift costs 0.5 whatever the type.
    - Legal holiday and administrative leave count business days only
      (weekends and ``holidays`` are free); other types count every
      calendar day in the inclusive range.
    """
    start_date = _coerce_date(start)
    end_date = _coerce_date(end)
    if start_date is None or end_date is None or end_date < start_date:
        return 0

    if start_date == end_date and shift in HALF_DAY_SHIFTS:
        return HALF_DAY

    if leave_type not in BUSINESS_DAY_TYPES:
        return (end_date - start_date).days + 1

    if holidays is None:
        holidays = get_default_holidays()

    count = 0
    current = start_date
    one_day = timedelta(days=1)
    while current <= end_date:
        if is_business_day(current, holidays):
            count += 1
        current += one_day
    return count
