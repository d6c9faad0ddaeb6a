from fastapi import APIRouter

from leave_engine.api.balances import balances_router
from leave_engine.api.calendar import calendar_router
from leave_engine.api.imports import imports_router
from leave_engine.api.requests import requests_router
from leave_engine.api.year_close import year_close_router

api_router = APIRouter()
api_router.include_router(calendar_router)
api_router.include_router(balances_router)
api_router.include_router(requests_router)
api_router.include_router(imports_router)
api_router.include_router(year_close_router)
