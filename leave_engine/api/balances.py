from __future__ import annotations

from fastapi import APIRouter

from leave_engine.api.deps import HolidaysDep
from leave_engine.schemas.balance import (
    ApplyConfigPayload,
    BalanceVerdict,
    EmployeeListResponse,
    RebuildPayload,
    ValidateBalancePayload,
)
from leave_engine.services import balance as balance_service
from leave_engine.services import request as request_service

balances_router = APIRouter(prefix="/balances", tags=["balances"])


@balances_router.post("/rebuild", response_model=EmployeeListResponse)
async def rebuild_balances(payload: RebuildPayload, holidays: HolidaysDep) -> EmployeeListResponse:
    """Recompute used-day counters from the approved request history."""
    employees = balance_service.rebuild_usage(payload.employees, payload.requests, payload.reference_year, holidays)
    return EmployeeListResponse(items=employees, total=len(employees))


@balances_router.post("/validate", response_model=BalanceVerdict)
async def validate_balance(payload: ValidateBalancePayload) -> BalanceVerdict:
    """Check that an employee can afford the requested days."""
    return request_service.validate_balance(payload.employee, payload.type, payload.days_count)


@balances_router.post("/apply-config", response_model=EmployeeListResponse)
async def apply_config(payload: ApplyConfigPayload) -> EmployeeListResponse:
    """Reset annual totals to the configured defaults."""
    employee_ids = set(payload.employee_ids) if payload.employee_ids is not None else None
    employees = balance_service.apply_config_totals(payload.employees, payload.config, employee_ids)
    return EmployeeListResponse(items=employees, total=len(employees))
