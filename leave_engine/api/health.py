from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel

from leave_engine.config import get_settings
from leave_engine.services.holiday import get_default_holidays

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["ok", "degraded"]
    version: str
    environment: str


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Return the health status of the service.

    Degraded when no holiday calendar is loaded.
    """
    settings = get_settings()
    status: Literal["ok", "degraded"] = "ok" if len(get_default_holidays()) > 0 else "degraded"
    return HealthResponse(
        status=status,
        version=settings.app_version,
        environment=settings.environment,
    )
