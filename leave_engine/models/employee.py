from __future__ import annotations

from pydantic import Field

from leave_engine.models.base import RecordBase
from leave_engine.models.enums import BalanceCategory


class Employee(RecordBase):
    """A staff member with independent balances per leave category."""

    id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    position: str = ""
    department: str = ""
    avatar_url: str = ""
    total_vacation_days: float = Field(default=0, ge=0)
    used_vacation_days: float = Field(default=0, ge=0)
    total_admin_days: float = Field(default=0, ge=0)
    used_admin_days: float = Field(default=0, ge=0)
    total_sick_leave_days: float = Field(default=0, ge=0)
    used_sick_leave_days: float = Field(default=0, ge=0)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def total_for(self, category: BalanceCategory) -> float:
        match category:
            case BalanceCategory.VACATION:
                return self.total_vacation_days
            case BalanceCategory.ADMINISTRATIVE:
                return self.total_admin_days
            case BalanceCategory.SICK:
                return self.total_sick_leave_days

    def used_for(self, category: BalanceCategory) -> float:
        match category:
            case BalanceCategory.VACATION:
                return self.used_vacation_days
            case BalanceCategory.ADMINISTRATIVE:
                return self.used_admin_days
            case BalanceCategory.SICK:
                return self.used_sick_leave_days
