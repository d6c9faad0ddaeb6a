from __future__ import annotations

from fastapi import APIRouter

from leave_engine.api.deps import HolidaysDep
from leave_engine.exceptions import InvalidInputError
from leave_engine.schemas.request import CheckRequestPayload, RequestCheckResult
from leave_engine.services import request as request_service

requests_router = APIRouter(prefix="/requests", tags=["requests"])


@requests_router.post("/check", response_model=RequestCheckResult)
async def check_request(payload: CheckRequestPayload, holidays: HolidaysDep) -> RequestCheckResult:
    """Run the pre-creation checks for a draft request."""
    if payload.draft.employee_id != payload.employee.id:
        raise InvalidInputError("Draft employee does not match the given employee")
    return request_service.check_new_request(payload.employee, payload.requests, payload.draft, holidays)
