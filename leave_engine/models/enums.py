from __future__ import annotations

import enum


class LeaveType(enum.StrEnum):
    """Category of a leave request.

    Legal holiday and administrative leave are charged in business days;
    every other type is charged in calendar days.
    """

    LEGAL_HOLIDAY = "Feriado Legal"
    ADMINISTRATIVE = "Permiso Administrativo"
    SICK_LEAVE = "Licencia Médica"
    WITHOUT_PAY = "Permiso Sin Goce de Sueldo"
    PARENTAL = "Permiso Post Natal Parental"


class LeaveStatus(enum.StrEnum):
    """State machine for leave requests: pending -> approved / rejected."""

    PENDING = "Pendiente"
    APPROVED = "Aprobado"
    REJECTED = "Rechazado"


class WorkShift(enum.StrEnum):
    """Part of the working day a request covers."""

    FULL_DAY = "Jornada Completa"
    MORNING = "Jornada Mañana"
    AFTERNOON = "Jornada Tarde"


class BalanceCategory(enum.StrEnum):
    """Per-employee balance bucket debited by a leave type."""

    VACATION = "vacation"
    ADMINISTRATIVE = "administrative"
    SICK = "sick"


BUSINESS_DAY_TYPES = frozenset({LeaveType.LEGAL_HOLIDAY, LeaveType.ADMINISTRATIVE})

HALF_DAY_SHIFTS = frozenset({WorkShift.MORNING, WorkShift.AFTERNOON})

# Leave types without an entry here are unrestricted.
BALANCE_CATEGORY_BY_TYPE: dict[LeaveType, BalanceCategory] = {
    LeaveType.LEGAL_HOLIDAY: BalanceCategory.VACATION,
    LeaveType.ADMINISTRATIVE: BalanceCategory.ADMINISTRATIVE,
    LeaveType.SICK_LEAVE: BalanceCategory.SICK,
}
