"""
Abstract interfaces for third-party integrations.

Defines contracts for the OAuth token endpoint, calendar events and the
remote file store used for backups.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class TokenSet:
    """OAuth token response."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int | None = None
    refresh_token: str | None = None
    scope: str | None = None
    id_token: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "TokenSet":
        return cls(
            access_token=data["access_token"],
            token_type=data.get("token_type", "Bearer"),
            expires_in=data.get("expires_in"),
            refresh_token=data.get("refresh_token"),
            scope=data.get("scope"),
            id_token=data.get("id_token"),
            raw=data,
        )


@dataclass
class RemoteFile:
    """File entry returned by a remote file search."""

    id: str
    name: str
    mime_type: str | None = None


class IOAuthProvider(ABC):
    """OAuth authorization-code flow."""

    @abstractmethod
    def authorization_url(self, state: str | None = None) -> str:
        """Build the consent screen URL."""
        pass

    @abstractmethod
    async def exchange_code(self, code: str) -> TokenSet:
        """Exchange an authorization code for tokens."""
        pass

    @abstractmethod
    async def refresh(self, refresh_token: str) -> TokenSet:
        """Exchange a refresh token for a fresh access token."""
        pass


class ICalendarProvider(ABC):
    """External calendar events."""

    @abstractmethod
    async def create_event(
        self,
        summary: str,
        start: datetime,
        end: datetime,
        description: str | None = None,
    ) -> str:
        """Create an event and return its external id."""
        pass

    @abstractmethod
    async def delete_event(self, event_id: str) -> None:
        """Delete an event by external id."""
        pass


class IFileStore(ABC):
    """Remote file store addressed by file name."""

    @abstractmethod
    async def find_by_name(self, access_token: str, name: str) -> list[RemoteFile]:
        """List non-trashed files with exactly this name."""
        pass

    @abstractmethod
    async def create_file(self, access_token: str, name: str, content: str) -> str:
        """Upload a new JSON file and return its id."""
        pass

    @abstractmethod
    async def update_file(
        self, access_token: str, file_id: str, name: str, content: str
    ) -> str:
        """Replace an existing file's content and return its id."""
        pass
