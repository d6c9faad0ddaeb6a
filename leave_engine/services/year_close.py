"""Annual close: carry over vacation, expire administrative days, reset counters.

The pure pieces (``is_close_due``, ``apply_year_close``, ``record_close``)
form a check / apply / record protocol. ``run_year_close`` executes that
protocol against a ``YearCloseMetaStore`` under a lock so one process
cannot apply the same close twice.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from leave_engine.models.policy import DEFAULT_GRACE_DAYS
from leave_engine.models.year_close import YearCloseMeta
from leave_engine.schemas.year_close import YearCloseResult

if TYPE_CHECKING:
    from collections.abc import Iterable

    from leave_engine.models.employee import Employee
    from leave_engine.models.policy import AppConfig

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Due check
# ---------------------------------------------------------------------------


def target_year_to_close(today: date, grace_days: int = DEFAULT_GRACE_DAYS) -> int | None:
    """Year a close run on ``today`` would close, if any.

    December 31 closes the current year. The first ``grace_days`` days of
    January close the previous year, catching up a missed Dec 31 run.
    """
    if today.month == 12 and today.day == 31:
        return today.year
    if today.month == 1 and today.day <= max(0, min(31, grace_days)):
        return today.year - 1
    return None


def is_close_due(today: date, meta: YearCloseMeta, grace_days: int = DEFAULT_GRACE_DAYS) -> bool:
    """True when ``today`` targets a year later than the last closed one."""
    target = target_year_to_close(today, grace_days)
    if target is None:
        return False
    return meta.last_closed_year < target


def record_close(meta: YearCloseMeta, year: int) -> YearCloseMeta:
    """Mark ``year`` as closed. Never moves the marker backwards."""
    if year <= meta.last_closed_year:
        return meta
    return meta.model_copy(update={"last_closed_year": year, "version": meta.version + 1})


def record_reminder(meta: YearCloseMeta, year: int) -> YearCloseMeta:
    """Mark the reminder for ``year`` as shown. Never moves the marker backwards."""
    if year <= meta.last_reminder_year:
        return meta
    return meta.model_copy(update={"last_reminder_year": year, "version": meta.version + 1})


# ---------------------------------------------------------------------------
# Apply
# ---------------------------------------------------------------------------


def apply_year_close(employees: Iterable[Employee], config: AppConfig) -> YearCloseResult:
    """Compute every employee's balances for the new year.

    Per employee:
    1. Vacation: the new allotment plus, if carry-over is enabled, what was
       left, capped at ``max_vacation_periods`` allotments. The clipped
       amount is reported as ``vacation_days_capped``.
    2. Administrative: when expiry is enabled, unused days are forfeited
       (reported as ``admin_days_expired``) and the total resets to the
       default; otherwise the total is kept.
    3. Sick leave: total resets to the default; nothing carries over.
    4. All used counters reset to 0.

    Pure: does not touch ``YearCloseMeta``; record the close afterwards.
    """
    carry_enabled = config.carryover_vacation_enabled
    expire_admin = config.admin_days_expire_at_year_end
    max_vacation_total = config.max_vacation_total

    admin_days_expired: float = 0
    vacation_days_capped: float = 0
    closed: list[Employee] = []

    for employee in employees:
        vacation_remaining = max(0, employee.total_vacation_days - employee.used_vacation_days)
        admin_remaining = max(0, employee.total_admin_days - employee.used_admin_days)

        raw_vacation_total = config.default_vacation_days
        if carry_enabled:
            raw_vacation_total += vacation_remaining
        vacation_total = min(max_vacation_total, raw_vacation_total)
        vacation_days_capped += max(0, raw_vacation_total - vacation_total)

        if expire_admin:
            admin_days_expired += admin_remaining

        closed.append(
            employee.model_copy(
                update={
                    "total_vacation_days": vacation_total,
                    "used_vacation_days": 0,
                    "total_admin_days": config.default_admin_days if expire_admin else employee.total_admin_days,
                    "used_admin_days": 0,
                    "total_sick_leave_days": config.default_sick_leave_days,
                    "used_sick_leave_days": 0,
                }
            )
        )

    return YearCloseResult(
        employees=closed,
        admin_days_expired=admin_days_expired,
        vacation_days_capped=vacation_days_capped,
    )


# ---------------------------------------------------------------------------
# Reminder
# ---------------------------------------------------------------------------


def admin_days_at_risk(employees: Iterable[Employee]) -> float:
    """Unused administrative days across the institution."""
    return sum(max(0, e.total_admin_days - e.used_admin_days) for e in employees)


def reminder_message(
    today: date,
    employees: Iterable[Employee],
    config: AppConfig,
    meta: YearCloseMeta,
) -> str | None:
    """Pre-close warning, shown once per year during December."""
    if today.month != 12:
        return None
    if meta.last_reminder_year >= today.year:
        return None

    days_left = (date(today.year, 12, 31) - today).days
    if days_left > config.reminder_days:
        return None

    at_risk = admin_days_at_risk(employees)
    return (
        f"Year-end close: {days_left} day(s) left until Dec 31. "
        f"{at_risk:g} unused administrative day(s) will expire."
    )


# ---------------------------------------------------------------------------
# Serialized protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class YearCloseMetaStore(Protocol):
    """Holder of the process-wide YearCloseMeta.

    Check-and-record sequences run while holding ``lock``.
    """

    lock: asyncio.Lock

    async def load(self) -> YearCloseMeta:
        """Return the current meta record."""
        ...

    async def save(self, meta: YearCloseMeta) -> None:
        """Replace the meta record."""
        ...


class InMemoryYearCloseMetaStore:
    """In-process store; the default for the HTTP service and tests."""

    def __init__(self, meta: YearCloseMeta | None = None) -> None:
        self._meta = meta or YearCloseMeta()
        self.lock = asyncio.Lock()

    async def load(self) -> YearCloseMeta:
        return self._meta

    async def save(self, meta: YearCloseMeta) -> None:
        self._meta = meta


async def run_year_close(
    store: YearCloseMetaStore,
    employees: Iterable[Employee],
    config: AppConfig,
    today: date | None = None,
) -> tuple[int, YearCloseResult, YearCloseMeta] | None:
    """Check, apply and record the close as one critical section.

    Returns ``None`` when no close is due, otherwise the closed year, the
    close result and the recorded meta.
    """
    if today is None:
        today = date.today()

    async with store.lock:
        meta = await store.load()
        target = target_year_to_close(today, config.grace_days)
        if target is None or meta.last_closed_year >= target:
            logger.info("Year close not due on %s (last closed %d)", today, meta.last_closed_year)
            return None

        result = apply_year_close(employees, config)
        meta = record_close(meta, target)
        await store.save(meta)

    logger.info(
        "Closed year %d: employees=%d admin_expired=%g vacation_capped=%g",
        target,
        len(result.employees),
        result.admin_days_expired,
        result.vacation_days_capped,
    )
    return target, result, meta


async def acknowledge_reminder(
    store: YearCloseMetaStore,
    employees: Iterable[Employee],
    config: AppConfig,
    today: date | None = None,
) -> tuple[str | None, YearCloseMeta]:
    """Produce the reminder, if due, and record it so it shows once."""
    if today is None:
        today = date.today()

    async with store.lock:
        meta = await store.load()
        message = reminder_message(today, employees, config, meta)
        if message is not None:
            meta = record_reminder(meta, today.year)
            await store.save(meta)
    return message, meta


_meta_store: YearCloseMetaStore = InMemoryYearCloseMetaStore()


def get_meta_store() -> YearCloseMetaStore:
    """FastAPI dependency for the year-close meta store."""
    return _meta_store


def set_meta_store(store: YearCloseMetaStore) -> None:
    """Override the store (for testing or production wiring)."""
    global _meta_store
    _meta_store = store
