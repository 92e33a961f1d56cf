"""
Google OAuth 2.0 client.

Builds the consent URL and exchanges authorization codes and refresh
tokens at the token endpoint.
"""

from urllib.parse import urlencode

import httpx

from second_brain.config import get_logger, get_settings
from second_brain.config.settings import GoogleSettings
from second_brain.core.exceptions import ConfigurationError, RemoteCallFailedError
from second_brain.core.interfaces import IOAuthProvider, TokenSet
from second_brain.infrastructure.google.responses import json_object

logger = get_logger(__name__)


class GoogleOAuthClient(IOAuthProvider):
    """OAuth authorization-code flow against Google's endpoints."""

    def __init__(self, settings: GoogleSettings | None = None):
        self.settings = settings or get_settings().google
        self.timeout = self.settings.timeout

    def authorization_url(self, state: str | None = None) -> str:
        """Build the consent screen URL requesting offline access."""
        self._require_client(with_redirect=True)
        params = {
            "client_id": self.settings.client_id,
            "redirect_uri": self.settings.redirect_uri,
            "response_type": "code",
            "scope": " ".join(self.settings.scopes),
            "access_type": "offline",
            "prompt": "consent",
        }
        if state:
            params["state"] = state
        return f"{self.settings.auth_url}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> TokenSet:
        """Exchange an authorization code for tokens."""
        self._require_client(with_redirect=True)
        return await self._token_request(
            {
                "code": code,
                "client_id": self.settings.client_id,
                "client_secret": self.settings.client_secret,
                "redirect_uri": self.settings.redirect_uri,
                "grant_type": "authorization_code",
            },
            operation="exchange_code",
        )

    async def refresh(self, refresh_token: str) -> TokenSet:
        """Exchange a refresh token for a fresh access token."""
        self._require_client(with_redirect=False)
        return await self._token_request(
            {
                "refresh_token": refresh_token,
                "client_id": self.settings.client_id,
                "client_secret": self.settings.client_secret,
                "grant_type": "refresh_token",
            },
            operation="refresh",
        )

    async def _token_request(self, form: dict[str, str], operation: str) -> TokenSet:
        """POST a form to the token endpoint."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.settings.token_url, data=form)
        except httpx.HTTPError as e:
            raise RemoteCallFailedError("oauth", operation, str(e) or e.__class__.__name__) from e

        if response.status_code != 200:
            raise RemoteCallFailedError(
                "oauth", operation, f"HTTP {response.status_code}: {response.text[:200]}"
            )

        data = json_object(response, "oauth", operation)
        if "access_token" not in data:
            raise RemoteCallFailedError("oauth", operation, "response has no access_token")

        logger.info(
            "oauth_token_obtained",
            operation=operation,
            expires_in=data.get("expires_in"),
            has_refresh_token="refresh_token" in data,
        )
        return TokenSet.from_response(data)

    def _require_client(self, with_redirect: bool) -> None:
        if not (self.settings.client_id and self.settings.client_secret):
            raise ConfigurationError(
                "Google OAuth client is not configured (GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET)"
            )
        if with_redirect and not self.settings.redirect_uri:
            raise ConfigurationError("GOOGLE_REDIRECT_URI is not configured")
