"""Unit tests for GoogleCalendarClient."""

from datetime import UTC, datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from second_brain.config.settings import CalendarSettings
from second_brain.core.exceptions import ConfigurationError, RemoteCallFailedError
from second_brain.core.interfaces import TokenSet
from second_brain.infrastructure.google import GoogleCalendarClient, to_rfc3339

HTTPX_CLIENT = "second_brain.infrastructure.google.calendar_api.httpx.AsyncClient"


def _mock_client(status_code: int = 200, payload: dict | None = None) -> AsyncMock:
    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.json.return_value = payload or {}
    mock_response.text = ""

    mock_client = AsyncMock()
    mock_client.request.return_value = mock_response
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


@pytest.fixture
def oauth():
    oauth = AsyncMock()
    oauth.refresh.return_value = TokenSet(access_token="refreshed", expires_in=3600)
    return oauth


@pytest.fixture
def client(oauth) -> GoogleCalendarClient:
    return GoogleCalendarClient(oauth, CalendarSettings(access_token="static"))


class TestToRfc3339:
    def test_utc(self):
        assert to_rfc3339(datetime(2025, 1, 1, 10, 0, tzinfo=UTC)) == "2025-01-01T10:00:00Z"

    def test_naive_is_utc(self):
        assert to_rfc3339(datetime(2025, 1, 1, 10, 0)) == "2025-01-01T10:00:00Z"

    def test_offset_is_converted(self):
        plus_two = timezone(timedelta(hours=2))
        assert to_rfc3339(datetime(2025, 1, 1, 12, 0, tzinfo=plus_two)) == "2025-01-01T10:00:00Z"


class TestCreateEvent:
    async def test_sends_rfc3339_window(self, client):
        mock_client = _mock_client(payload={"id": "evt-1"})
        start = datetime(2025, 1, 1, 10, 0, tzinfo=UTC)

        with patch(HTTPX_CLIENT, return_value=mock_client):
            event_id = await client.create_event(
                "Call bank", start, start + timedelta(hours=1), description="Loan"
            )

        assert event_id == "evt-1"
        method, url = mock_client.request.await_args.args
        kwargs = mock_client.request.await_args.kwargs
        assert method == "POST"
        assert url == "https://www.googleapis.com/calendar/v3/calendars/primary/events"
        assert kwargs["json"] == {
            "summary": "Call bank",
            "start": {"dateTime": "2025-01-01T10:00:00Z"},
            "end": {"dateTime": "2025-01-01T11:00:00Z"},
            "description": "Loan",
        }
        assert kwargs["headers"]["Authorization"] == "Bearer static"

    async def test_error_status(self, client):
        with patch(HTTPX_CLIENT, return_value=_mock_client(status_code=403)):
            with pytest.raises(RemoteCallFailedError):
                await client.create_event("x", datetime(2025, 1, 1), datetime(2025, 1, 1))

    async def test_timeout(self, client):
        mock_client = _mock_client()
        mock_client.request.side_effect = httpx.ReadTimeout("timed out")

        with patch(HTTPX_CLIENT, return_value=mock_client):
            with pytest.raises(RemoteCallFailedError):
                await client.create_event("x", datetime(2025, 1, 1), datetime(2025, 1, 1))

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="<html>proxy error</html>"),
            httpx.Response(200, json=[{"id": "evt-1"}]),
            httpx.Response(200, json={"id": 42}),
        ],
    )
    async def test_malformed_body(self, client, response):
        mock_client = _mock_client()
        mock_client.request.return_value = response

        with patch(HTTPX_CLIENT, return_value=mock_client):
            with pytest.raises(RemoteCallFailedError):
                await client.create_event("x", datetime(2025, 1, 1), datetime(2025, 1, 1))


class TestDeleteEvent:
    @pytest.mark.parametrize("status_code", [200, 204, 404, 410])
    async def test_success_and_already_gone(self, client, status_code):
        mock_client = _mock_client(status_code=status_code)

        with patch(HTTPX_CLIENT, return_value=mock_client):
            await client.delete_event("evt-1")

        method, url = mock_client.request.await_args.args
        assert method == "DELETE"
        assert url.endswith("/calendars/primary/events/evt-1")

    async def test_server_error(self, client):
        with patch(HTTPX_CLIENT, return_value=_mock_client(status_code=500)):
            with pytest.raises(RemoteCallFailedError):
                await client.delete_event("evt-1")


class TestCredentials:
    async def test_refresh_token_preferred_and_cached(self, oauth):
        client = GoogleCalendarClient(
            oauth, CalendarSettings(refresh_token="rt", access_token="static")
        )
        mock_client = _mock_client(payload={"id": "evt"})

        with patch(HTTPX_CLIENT, return_value=mock_client):
            await client.create_event("a", datetime(2025, 1, 1), datetime(2025, 1, 1))
            await client.create_event("b", datetime(2025, 1, 1), datetime(2025, 1, 1))

        oauth.refresh.assert_awaited_once_with("rt")
        headers = mock_client.request.await_args.kwargs["headers"]
        assert headers["Authorization"] == "Bearer refreshed"

    async def test_no_credentials(self, oauth):
        client = GoogleCalendarClient(oauth, CalendarSettings())

        with pytest.raises(ConfigurationError):
            await client.delete_event("evt-1")
