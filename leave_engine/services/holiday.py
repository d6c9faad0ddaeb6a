"""National holiday calendar consulted by the business-day counter."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from leave_engine.config import get_settings

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

logger = logging.getLogger(__name__)

_iso_list_adapter: TypeAdapter[list[str]] = TypeAdapter(list[str])

# Chilean national holidays (YYYY-MM-DD -> name).
CHILEAN_HOLIDAYS: dict[str, str] = {
    # 2025
    "2025-01-01": "Año Nuevo",
    "2025-04-18": "Viernes Santo",
    "2025-04-19": "Sábado Santo",
    "2025-05-01": "Día del Trabajo",
    "2025-05-21": "Glorias Navales",
    "2025-06-20": "Día de los Pueblos Indígenas",
    "2025-06-29": "San Pedro y San Pablo",
    "2025-07-16": "Virgen del Carmen",
    "2025-08-15": "Asunción de la Virgen",
    "2025-09-18": "Independencia Nacional",
    "2025-09-19": "Glorias del Ejército",
    "2025-10-12": "Encuentro de Dos Mundos",
    "2025-10-31": "Día de las Iglesias Evangélicas",
    "2025-11-01": "Día de Todos los Santos",
    "2025-12-08": "Inmaculada Concepción",
    "2025-12-25": "Navidad",
    # 2026
    "2026-01-01": "Año Nuevo",
    "2026-04-03": "Viernes Santo",
    "2026-04-04": "Sábado Santo",
    "2026-05-01": "Día del Trabajo",
    "2026-05-21": "Glorias Navales",
    "2026-06-21": "Día de los Pueblos Indígenas",
    "2026-06-29": "San Pedro y San Pablo",
    "2026-07-16": "Virgen del Carmen",
    "2026-08-15": "Asunción de la Virgen",
    "2026-09-18": "Independencia Nacional",
    "2026-09-19": "Glorias del Ejército",
    "2026-10-12": "Encuentro de Dos Mundos",
    "2026-10-31": "Día de las Iglesias Evangélicas",
    "2026-11-01": "Día de Todos los Santos",
    "2026-12-08": "Inmaculada Concepción",
    "2026-12-25": "Navidad",
}


class HolidaySet:
    """Immutable set of non-working dates, iterated in date order."""

    __slots__ = ("_dates",)

    def __init__(self, dates: Iterable[date] = ()) -> None:
        self._dates: frozenset[date] = frozenset(dates)

    def __contains__(self, day: object) -> bool:
        return day in self._dates

    def __iter__(self) -> Iterator[date]:
        return iter(sorted(self._dates))

    def __len__(self) -> int:
        return len(self._dates)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HolidaySet):
            return NotImplemented
        return self._dates == other._dates

    def __hash__(self) -> int:
        return hash(self._dates)

    def __repr__(self) -> str:
        return f"HolidaySet({len(self._dates)} dates)"

    def union(self, other: Iterable[date]) -> HolidaySet:
        return HolidaySet(self._dates | frozenset(other))

    def in_year(self, year: int) -> list[date]:
        return [d for d in self if d.year == year]


def load_holiday_set(iso_dates: Iterable[str]) -> HolidaySet:
    """Build a HolidaySet from ISO strings, skipping malformed entries."""
    from leave_engine.services.calendar import parse_date

    dates: set[date] = set()
    for raw in iso_dates:
        parsed = parse_date(raw)
        if parsed is None:
            logger.warning("Ignoring invalid holiday date %r", raw)
            continue
        dates.add(parsed)
    return HolidaySet(dates)


def load_holidays_file(path: Path) -> HolidaySet:
    """Read a JSON array of ISO dates from ``path``."""
    try:
        raw = _iso_list_adapter.validate_json(path.read_bytes())
    except (OSError, ValidationError):
        logger.exception("Could not load holidays from %s", path)
        return HolidaySet()
    return load_holiday_set(raw)


_default_holidays: HolidaySet | None = None


def get_default_holidays() -> HolidaySet:
    """Return the built-in holidays merged with the configured holidays file."""
    global _default_holidays
    if _default_holidays is None:
        holidays = load_holiday_set(CHILEAN_HOLIDAYS)
        settings = get_settings()
        if settings.holidays_file is not None:
            extra = load_holidays_file(settings.holidays_file)
            logger.info("Loaded %d extra holidays from %s", len(extra), settings.holidays_file)
            holidays = holidays.union(extra)
        _default_holidays = holidays
    return _default_holidays


def set_default_holidays(holidays: HolidaySet | None) -> None:
    """Override the default set (``None`` reloads it on next access)."""
    global _default_holidays
    _default_holidays = holidays


def holiday_name(day: date) -> str | None:
    """Name of a built-in holiday, if ``day`` is one."""
    return CHILEAN_HOLIDAYS.get(day.isoformat())
