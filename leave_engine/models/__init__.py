from leave_engine.models.employee import Employee
from leave_engine.models.enums import BalanceCategory, LeaveStatus, LeaveType, WorkShift
from leave_engine.models.policy import AppConfig
from leave_engine.models.request import LeaveRequest
from leave_engine.models.year_close import YearCloseMeta

__all__ = [
    "AppConfig",
    "BalanceCategory",
    "Employee",
    "LeaveRequest",
    "LeaveStatus",
    "LeaveType",
    "WorkShift",
    "YearCloseMeta",
]
