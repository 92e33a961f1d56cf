"""Fixtures for API tests: real temporary store, mocked integrations."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from second_brain.api.dependencies import (
    get_backup_service,
    get_calendar_bridge,
    get_pool,
    get_record_store,
)
from second_brain.api.main import app
from second_brain.core.entities import RemoteOutcome


@pytest.fixture
def mock_calendar():
    calendar = AsyncMock()
    calendar.enabled = True
    calendar.create_event.return_value = RemoteOutcome.succeeded("evt-1")
    calendar.delete_event.return_value = RemoteOutcome.succeeded()
    return calendar


@pytest.fixture
def mock_backup():
    backup = AsyncMock()
    backup.authorization_url = MagicMock(return_value="https://accounts.example/auth?x=1")
    backup.save_snapshot.return_value = "file-1"
    return backup


@pytest.fixture
async def api_client(
    store, pool, mock_calendar, mock_backup
) -> AsyncGenerator[AsyncClient, None]:
    """Async client with storage and integration overrides."""
    app.dependency_overrides[get_record_store] = lambda: store
    app.dependency_overrides[get_pool] = lambda: pool
    app.dependency_overrides[get_calendar_bridge] = lambda: mock_calendar
    app.dependency_overrides[get_backup_service] = lambda: mock_backup
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
