from __future__ import annotations

from fastapi import APIRouter

from leave_engine.api.deps import HolidaysDep
from leave_engine.schemas.imports import ImportPayload, ImportValidationResult
from leave_engine.services.imports import validate_import_payload

imports_router = APIRouter(prefix="/imports", tags=["imports"])


@imports_router.post("/validate", response_model=ImportValidationResult)
async def validate_import(payload: ImportPayload, holidays: HolidaysDep) -> ImportValidationResult:
    """Validate a bulk data set; problems are reported in the body, never as errors."""
    return validate_import_payload(payload, holidays)
