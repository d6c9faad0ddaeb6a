"""Derived balance state.

Used-day counters are never patched in place: they are rebuilt from the
full approved request history for a reference year, so approving,
rejecting or re-approving a request in any order converges to the same
result.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from leave_engine.models.employee import Employee
from leave_engine.models.enums import BALANCE_CATEGORY_BY_TYPE, BalanceCategory, LeaveType
from leave_engine.services.calendar import count_chargeable_days

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from leave_engine.models.policy import AppConfig
    from leave_engine.models.request import LeaveRequest
    from leave_engine.services.holiday import HolidaySet

logger = logging.getLogger(__name__)


@dataclass
class UsageCounters:
    """Days consumed per balance category within one reference year."""

    by_category: dict[BalanceCategory, float] = field(default_factory=lambda: defaultdict(float))

    def add(self, category: BalanceCategory, days: float) -> None:
        self.by_category[category] += days

    def get(self, category: BalanceCategory) -> float:
        return self.by_category.get(category, 0)


# ---------------------------------------------------------------------------
# Rebuild
# ---------------------------------------------------------------------------


def _in_year_portion(request: LeaveRequest, year: int) -> tuple[date, date] | None:
    """Clip the request range to ``year``; ``None`` when malformed or disjoint."""
    start, end = request.start, request.end
    if start is None or end is None:
        logger.warning(
            "Skipping request %s with malformed dates %r..%r", request.id, request.start_date, request.end_date
        )
        return None

    period_start = date(year, 1, 1)
    period_end = date(year, 12, 31)
    if start > period_end or end < period_start:
        return None
    return max(start, period_start), min(end, period_end)


def collect_usage(
    requests: Iterable[LeaveRequest],
    reference_year: int,
    holidays: HolidaySet | None = None,
) -> dict[str, UsageCounters]:
    """Sum in-year chargeable days of approved requests per employee id."""
    usage: dict[str, UsageCounters] = defaultdict(UsageCounters)

    for request in requests:
        if not request.is_approved:
            continue

        category = BALANCE_CATEGORY_BY_TYPE.get(request.type)
        if category is None:
            continue  # unpaid / parental leave is not debited

        portion = _in_year_portion(request, reference_year)
        if portion is None:
            continue

        days = count_chargeable_days(portion[0], portion[1], request.type, request.shift, holidays)
        if days <= 0:
            continue
        usage[request.employee_id].add(category, days)

    return usage


def rebuild_usage(
    employees: Iterable[Employee],
    requests: Iterable[LeaveRequest],
    reference_year: int | None = None,
    holidays: HolidaySet | None = None,
) -> list[Employee]:
    """Return employees with ``used_*`` counters recomputed from ``requests``.

    Only approved requests count, and only the part of each request that
    falls inside ``reference_year`` (default: current year). Totals and all
    other fields pass through unchanged. Pure: the same inputs always give
    the same output.
    """
    if reference_year is None:
        reference_year = date.today().year

    usage = collect_usage(requests, reference_year, holidays)
    empty = UsageCounters()

    rebuilt: list[Employee] = []
    for employee in employees:
        counters = usage.get(employee.id, empty)
        rebuilt.append(
            employee.model_copy(
                update={
                    "used_vacation_days": counters.get(BalanceCategory.VACATION),
                    "used_admin_days": counters.get(BalanceCategory.ADMINISTRATIVE),
                    "used_sick_leave_days": counters.get(BalanceCategory.SICK),
                }
            )
        )
    return rebuilt


# ---------------------------------------------------------------------------
# Remaining balance
# ---------------------------------------------------------------------------


def remaining_days(employee: Employee, leave_type: LeaveType) -> float | None:
    """Days left for ``leave_type``, or ``None`` when the type is unrestricted."""
    category = BALANCE_CATEGORY_BY_TYPE.get(leave_type)
    if category is None:
        return None
    return max(0, employee.total_for(category) - employee.used_for(category))


def summarize_balances(employee: Employee) -> dict[LeaveType, float | None]:
    """Remaining days for every leave type."""
    return {leave_type: remaining_days(employee, leave_type) for leave_type in LeaveType}


# ---------------------------------------------------------------------------
# Totals from configuration
# ---------------------------------------------------------------------------


def new_employee(
    employee_id: str,
    config: AppConfig,
    *,
    first_name: str,
    last_name: str,
    email: str,
    position: str = "",
    department: str = "",
) -> Employee:
    """Create an employee with configured allotments and nothing used."""
    return Employee(
        id=employee_id,
        first_name=first_name,
        last_name=last_name,
        email=email,
        position=position,
        department=department,
        avatar_url=f"https://ui-avatars.com/api/?name={first_name}+{last_name}&background=random&color=fff",
        total_vacation_days=config.default_vacation_days,
        total_admin_days=config.default_admin_days,
        total_sick_leave_days=config.default_sick_leave_days,
    )


def apply_config_totals(
    employees: Iterable[Employee],
    config: AppConfig,
    employee_ids: Collection[str] | None = None,
) -> list[Employee]:
    """Reset annual totals to the configured defaults.

    Applies to every employee, or only to ``employee_ids`` when given. Used
    counters are left alone.
    """
    updated: list[Employee] = []
    for employee in employees:
        if employee_ids is not None and employee.id not in employee_ids:
            updated.append(employee)
            continue
        updated.append(
            employee.model_copy(
                update={
                    "total_vacation_days": config.default_vacation_days,
                    "total_admin_days": config.default_admin_days,
                    "total_sick_leave_days": config.default_sick_leave_days,
                }
            )
        )
    return updated
