from __future__ import annotations

import math

from pydantic import Field

from leave_engine.models.base import RecordBase

DEFAULT_VACATION_DAYS = 15
DEFAULT_ADMIN_DAYS = 6
DEFAULT_SICK_LEAVE_DAYS = 30
DEFAULT_MAX_VACATION_PERIODS = 2
DEFAULT_REMINDER_DAYS = 30
DEFAULT_GRACE_DAYS = 31

DEFAULT_EMAIL_TEMPLATE = "- {NOMBRE} ({CARGO}): {TIPO} {JORNADA} desde el {DESDE} hasta el {HASTA}."


def _clamp_int(value: float, default: int, low: int, high: int) -> int:
    if not math.isfinite(value):
        return default
    return max(low, min(high, math.trunc(value)))


class AppConfig(RecordBase):
    """Institution-wide leave policy tunables.

    Every field has a default so a partial configuration is always usable.
    """

    default_vacation_days: float = Field(default=DEFAULT_VACATION_DAYS, ge=0)
    default_admin_days: float = Field(default=DEFAULT_ADMIN_DAYS, ge=0)
    default_sick_leave_days: float = Field(default=DEFAULT_SICK_LEAVE_DAYS, ge=0)
    notification_email: str = "rrhh@institucion.cl"
    email_template: str = DEFAULT_EMAIL_TEMPLATE
    template_legal_holiday: str | None = None
    template_administrative: str | None = None
    template_sick_leave: str | None = None
    carryover_vacation_enabled: bool = True
    carryover_vacation_max_periods: float = DEFAULT_MAX_VACATION_PERIODS
    admin_days_expire_at_year_end: bool = True
    year_close_reminder_days: float = DEFAULT_REMINDER_DAYS
    year_close_grace_days: float = DEFAULT_GRACE_DAYS

    @property
    def max_vacation_periods(self) -> int:
        """Accumulation cap in annual allotments, clamped to [1, 5]."""
        return _clamp_int(self.carryover_vacation_max_periods, DEFAULT_MAX_VACATION_PERIODS, 1, 5)

    @property
    def reminder_days(self) -> int:
        """Pre-close reminder window in days, clamped to [1, 90]."""
        return _clamp_int(self.year_close_reminder_days, DEFAULT_REMINDER_DAYS, 1, 90)

    @property
    def grace_days(self) -> int:
        """January catch-up window for a missed close, clamped to [0, 31]."""
        return _clamp_int(self.year_close_grace_days, DEFAULT_GRACE_DAYS, 0, 31)

    @property
    def max_vacation_total(self) -> float:
        return self.default_vacation_days * self.max_vacation_periods
