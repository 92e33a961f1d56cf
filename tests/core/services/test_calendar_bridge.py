"""Tests for CalendarBridge."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from second_brain.core.exceptions import ConfigurationError, RemoteCallFailedError
from second_brain.core.services import CalendarBridge


@pytest.fixture
def provider():
    provider = AsyncMock()
    provider.create_event.return_value = "evt-1"
    provider.delete_event.return_value = None
    return provider


class TestCreateEvent:
    async def test_end_is_one_hour_after_start(self, provider):
        bridge = CalendarBridge(provider)
        start = datetime(2025, 1, 1, 10, 0, tzinfo=UTC)

        outcome = await bridge.create_event("Call bank", "About the loan", start)

        assert outcome.ok is True
        assert outcome.value == "evt-1"
        provider.create_event.assert_awaited_once_with(
            summary="Call bank",
            start=start,
            end=datetime(2025, 1, 1, 11, 0, tzinfo=UTC),
            description="About the loan",
        )

    async def test_custom_duration(self, provider):
        bridge = CalendarBridge(provider, event_duration=timedelta(minutes=15))
        start = datetime(2025, 1, 1, 10, 0, tzinfo=UTC)

        await bridge.create_event("Stretch", None, start)

        assert provider.create_event.await_args.kwargs["end"] == start + timedelta(minutes=15)

    async def test_remote_failure_becomes_failed_outcome(self, provider):
        provider.create_event.side_effect = RemoteCallFailedError(
            "calendar", "create_event", "HTTP 500"
        )
        bridge = CalendarBridge(provider)

        outcome = await bridge.create_event("x", None, datetime(2025, 1, 1, tzinfo=UTC))

        assert outcome.ok is False
        assert outcome.value is None
        assert "HTTP 500" in outcome.reason

    async def test_missing_credentials_become_failed_outcome(self, provider):
        provider.create_event.side_effect = ConfigurationError("no calendar credentials")
        bridge = CalendarBridge(provider)

        outcome = await bridge.create_event("x", None, datetime(2025, 1, 1, tzinfo=UTC))

        assert outcome.ok is False
        assert outcome.reason == "no calendar credentials"

    async def test_disabled_bridge(self):
        bridge = CalendarBridge(None)

        outcome = await bridge.create_event("x", None, datetime(2025, 1, 1, tzinfo=UTC))

        assert bridge.enabled is False
        assert outcome.ok is False


class TestDeleteEvent:
    async def test_success(self, provider):
        outcome = await CalendarBridge(provider).delete_event("evt-1")

        assert outcome.ok is True
        provider.delete_event.assert_awaited_once_with("evt-1")

    async def test_failure_is_reported_not_raised(self, provider):
        provider.delete_event.side_effect = RemoteCallFailedError(
            "calendar", "delete_event", "timeout"
        )

        outcome = await CalendarBridge(provider).delete_event("evt-1")

        assert outcome.ok is False
        assert "timeout" in outcome.reason
