"""
Google Calendar REST client.

Creates and deletes events on a single configured calendar.
"""

import time
from datetime import UTC, datetime
from typing import Any
from urllib.parse import quote

import httpx

from second_brain.config import get_logger, get_settings
from second_brain.config.settings import CalendarSettings
from second_brain.core.exceptions import ConfigurationError, RemoteCallFailedError
from second_brain.core.interfaces import ICalendarProvider, IOAuthProvider
from second_brain.infrastructure.google.responses import json_object

logger = get_logger(__name__)


def to_rfc3339(value: datetime) -> str:
    """Format an instant as RFC 3339 UTC; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


class GoogleCalendarClient(ICalendarProvider):
    """
    Calendar events API client.

    Credentials come from settings: a refresh token is exchanged through
    the OAuth client and cached until shortly before expiry; otherwise a
    static access token is used as is.
    """

    def __init__(
        self,
        oauth: IOAuthProvider,
        settings: CalendarSettings | None = None,
    ):
        self.settings = settings or get_settings().calendar
        self.timeout = self.settings.timeout
        self._oauth = oauth
        self._cached_token: str | None = None
        self._token_expires_at: float = 0.0

    async def create_event(
        self,
        summary: str,
        start: datetime,
        end: datetime,
        description: str | None = None,
    ) -> str:
        """Create an event and return its external id."""
        body: dict[str, Any] = {
            "summary": summary,
            "start": {"dateTime": to_rfc3339(start)},
            "end": {"dateTime": to_rfc3339(end)},
        }
        if description:
            body["description"] = description

        response = await self._request("POST", "/events", "create_event", json=body)
        if response.status_code not in (200, 201):
            raise RemoteCallFailedError(
                "calendar",
                "create_event",
                f"HTTP {response.status_code}: {response.text[:200]}",
            )

        event_id = json_object(response, "calendar", "create_event").get("id")
        if not isinstance(event_id, str) or not event_id:
            raise RemoteCallFailedError("calendar", "create_event", "response has no event id")

        logger.info(
            "calendar_event_created",
            event_id=event_id,
            start=body["start"]["dateTime"],
            end=body["end"]["dateTime"],
        )
        return event_id

    async def delete_event(self, event_id: str) -> None:
        """Delete an event; an event that is already gone counts as deleted."""
        response = await self._request(
            "DELETE", f"/events/{quote(event_id, safe='')}", "delete_event"
        )
        if response.status_code in (404, 410):
            logger.info("calendar_event_already_gone", event_id=event_id)
            return
        if response.status_code not in (200, 204):
            raise RemoteCallFailedError(
                "calendar",
                "delete_event",
                f"HTTP {response.status_code}: {response.text[:200]}",
            )
        logger.info("calendar_event_deleted", event_id=event_id)

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Make an authorized request against the configured calendar."""
        token = await self._access_token()
        calendar_id = quote(self.settings.calendar_id, safe="")
        url = f"{self.settings.api_url}/calendars/{calendar_id}{path}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await client.request(
                    method,
                    url,
                    json=json,
                    headers={"Authorization": f"Bearer {token}"},
                )
        except httpx.HTTPError as e:
            raise RemoteCallFailedError(
                "calendar", operation, str(e) or e.__class__.__name__
            ) from e

    async def _access_token(self) -> str:
        if self.settings.refresh_token:
            if self._cached_token and time.time() < self._token_expires_at:
                return self._cached_token
            tokens = await self._oauth.refresh(self.settings.refresh_token)
            self._cached_token = tokens.access_token
            # Renew a minute early
            self._token_expires_at = time.time() + (tokens.expires_in or 3600) - 60
            return self._cached_token

        if self.settings.access_token:
            return self.settings.access_token

        raise ConfigurationError(
            "No calendar credentials configured (CALENDAR_REFRESH_TOKEN or CALENDAR_ACCESS_TOKEN)"
        )
