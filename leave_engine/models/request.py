from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import Field

from leave_engine.models.base import RecordBase
from leave_engine.models.enums import LeaveStatus, LeaveType, WorkShift

if TYPE_CHECKING:
    from datetime import date


class LeaveRequest(RecordBase):
    """One leave event for one employee.

    Dates are kept as the ISO strings the host application sends; use
    ``start``/``end`` to obtain parsed dates (``None`` when malformed).
    """

    id: str
    employee_id: str
    type: LeaveType
    start_date: str
    end_date: str
    days_count: float = Field(ge=0)
    status: LeaveStatus = LeaveStatus.PENDING
    reason: str = ""
    shift: WorkShift = WorkShift.FULL_DAY

    @property
    def start(self) -> date | None:
        from leave_engine.services.calendar import parse_date

        return parse_date(self.start_date)

    @property
    def end(self) -> date | None:
        from leave_engine.services.calendar import parse_date

        return parse_date(self.end_date)

    @property
    def is_approved(self) -> bool:
        return self.status == LeaveStatus.APPROVED
