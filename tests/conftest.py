from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from leave_engine.main import app
from leave_engine.services.holiday import set_default_holidays
from leave_engine.services.year_close import InMemoryYearCloseMetaStore, set_meta_store

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator


@pytest.fixture(autouse=True)
def _fresh_process_state() -> Iterator[None]:
    """Give every test an empty year-close store and the built-in holidays."""
    set_meta_store(InMemoryYearCloseMetaStore())
    set_default_holidays(None)
    yield
    set_meta_store(InMemoryYearCloseMetaStore())
    set_default_holidays(None)


@pytest.fixture
async def async_client() -> AsyncIterator[AsyncClient]:
    """Async HTTP client bound to the application."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
