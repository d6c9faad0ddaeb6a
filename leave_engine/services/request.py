"""Request-level policy checks: balance sufficiency and overlap."""

from __future__ import annotations

import logging
import math
import uuid
from typing import TYPE_CHECKING

from leave_engine.models.enums import BUSINESS_DAY_TYPES, LeaveStatus
from leave_engine.models.request import LeaveRequest
from leave_engine.schemas.balance import BalanceVerdict
from leave_engine.schemas.request import RequestCheckResult
from leave_engine.services.balance import remaining_days
from leave_engine.services.calendar import count_chargeable_days, parse_date

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date

    from leave_engine.models.employee import Employee
    from leave_engine.models.enums import LeaveType
    from leave_engine.schemas.request import RequestDraft
    from leave_engine.services.holiday import HolidaySet

logger = logging.getLogger(__name__)


def _fmt_days(value: float) -> str:
    return f"{value:g}"


# ---------------------------------------------------------------------------
# Balance
# ---------------------------------------------------------------------------


def validate_balance(employee: Employee, leave_type: LeaveType, requested_days: float) -> BalanceVerdict:
    """Check that ``employee`` has ``requested_days`` left for ``leave_type``."""
    if isinstance(requested_days, bool) or not isinstance(requested_days, int | float):
        return BalanceVerdict(valid=False, remaining_days=None, message="Day count must be a number.")
    if not math.isfinite(requested_days) or requested_days <= 0:
        return BalanceVerdict(valid=False, remaining_days=None, message="Day count must be greater than zero.")

    remaining = remaining_days(employee, leave_type)
    if remaining is None:
        return BalanceVerdict(valid=True, remaining_days=None)

    if requested_days > remaining:
        return BalanceVerdict(
            valid=False,
            remaining_days=remaining,
            message=(
                f"Insufficient balance. Available: {_fmt_days(remaining)} day(s). "
                f"Requested: {_fmt_days(requested_days)} day(s)."
            ),
        )

    return BalanceVerdict(valid=True, remaining_days=remaining)


# ---------------------------------------------------------------------------
# Overlap
# ---------------------------------------------------------------------------


def ranges_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Closed-interval intersection: sharing a single day is an overlap."""
    return a_start <= b_end and a_end >= b_start


def has_overlap(
    requests: Iterable[LeaveRequest],
    employee_id: str,
    start: str | date,
    end: str | date,
    exclude_request_id: str | None = None,
) -> bool:
    """True if an approved request of ``employee_id`` shares a day with ``[start, end]``.

    Pending and rejected requests never block. Unparseable input is
    reported as no overlap; date validity is checked separately.
    """
    start_date = parse_date(start) if isinstance(start, str) else start
    end_date = parse_date(end) if isinstance(end, str) else end
    if start_date is None or end_date is None:
        return False

    for request in requests:
        if request.employee_id != employee_id or not request.is_approved:
            continue
        if exclude_request_id is not None and request.id == exclude_request_id:
            continue
        other_start, other_end = request.start, request.end
        if other_start is None or other_end is None:
            continue
        if ranges_overlap(start_date, end_date, other_start, other_end):
            return True
    return False


# ---------------------------------------------------------------------------
# Request flow
# ---------------------------------------------------------------------------


def check_new_request(
    employee: Employee,
    requests: Iterable[LeaveRequest],
    draft: RequestDraft,
    holidays: HolidaySet | None = None,
) -> RequestCheckResult:
    """Run every check a draft must pass before it becomes a request.

    Checks, in order: valid dates, no overlap with an approved request,
    at least one business day for business-day types, sufficient balance.
    The first failure is reported.
    """
    start, end = parse_date(draft.start_date), parse_date(draft.end_date)
    if start is None or end is None:
        return RequestCheckResult(valid=False, days_count=0, message="Start and end must be valid YYYY-MM-DD dates.")
    if end < start:
        return RequestCheckResult(valid=False, days_count=0, message="End date cannot be before start date.")

    days = count_chargeable_days(start, end, draft.type, draft.shift, holidays)

    if has_overlap(requests, draft.employee_id, start, end):
        return RequestCheckResult(
            valid=False,
            days_count=days,
            message="The employee already has an approved request in this date range.",
        )

    if days == 0 and draft.type in BUSINESS_DAY_TYPES:
        return RequestCheckResult(valid=False, days_count=0, message="The selected range contains no business days.")

    verdict = validate_balance(employee, draft.type, days)
    if not verdict.valid:
        return RequestCheckResult(
            valid=False,
            days_count=days,
            remaining_days=verdict.remaining_days,
            message=verdict.message,
        )

    return RequestCheckResult(valid=True, days_count=days, remaining_days=verdict.remaining_days)


def create_request(draft: RequestDraft, days_count: float, request_id: str | None = None) -> LeaveRequest:
    """Materialize a checked draft as a pending request."""
    return LeaveRequest(
        id=request_id or uuid.uuid4().hex,
        employee_id=draft.employee_id,
        type=draft.type,
        start_date=draft.start_date,
        end_date=draft.end_date,
        days_count=days_count,
        status=LeaveStatus.PENDING,
        reason=draft.reason,
        shift=draft.shift,
    )


def set_request_status(
    requests: Iterable[LeaveRequest],
    request_id: str,
    status: LeaveStatus,
) -> list[LeaveRequest]:
    """Return the request list with ``request_id`` moved to ``status``.

    Balances are not touched here; rebuild them from the returned list.
    """
    updated: list[LeaveRequest] = []
    found = False
    for request in requests:
        if request.id == request_id:
            found = True
            if request.status != status:
                logger.info("Request %s: %s -> %s", request_id, request.status, status)
                request = request.model_copy(update={"status": status})
        updated.append(request)
    if not found:
        logger.warning("Status change for unknown request %s ignored", request_id)
    return updated
