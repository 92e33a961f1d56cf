"""Unit tests for GoogleOAuthClient."""

from unittest.mock import AsyncMock, MagicMock, patch
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from second_brain.config.settings import GoogleSettings
from second_brain.core.exceptions import ConfigurationError, RemoteCallFailedError
from second_brain.infrastructure.google import GoogleOAuthClient

HTTPX_CLIENT = "second_brain.infrastructure.google.oauth.httpx.AsyncClient"


@pytest.fixture
def settings() -> GoogleSettings:
    return GoogleSettings(
        client_id="client-id",
        client_secret="secret",
        redirect_uri="http://localhost:3000/callback",
    )


def _mock_client(status_code: int = 200, payload: dict | None = None) -> AsyncMock:
    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.json.return_value = payload or {}
    mock_response.text = str(payload)

    mock_client = AsyncMock()
    mock_client.post.return_value = mock_response
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


class TestAuthorizationUrl:
    def test_offline_consent_url(self, settings):
        url = GoogleOAuthClient(settings).authorization_url(state="abc")

        parsed = urlparse(url)
        params = parse_qs(parsed.query)
        assert parsed.netloc == "accounts.google.com"
        assert params["client_id"] == ["client-id"]
        assert params["access_type"] == ["offline"]
        assert params["prompt"] == ["consent"]
        assert params["state"] == ["abc"]
        assert "https://www.googleapis.com/auth/drive.file" in params["scope"][0].split()

    def test_requires_configuration(self):
        with pytest.raises(ConfigurationError):
            GoogleOAuthClient(GoogleSettings()).authorization_url()


class TestExchangeCode:
    async def test_success(self, settings):
        mock_client = _mock_client(payload={
            "access_token": "at",
            "refresh_token": "rt",
            "expires_in": 3599,
            "token_type": "Bearer",
        })

        with patch(HTTPX_CLIENT, return_value=mock_client):
            tokens = await GoogleOAuthClient(settings).exchange_code("code-1")

        assert tokens.access_token == "at"
        assert tokens.refresh_token == "rt"
        assert tokens.raw["expires_in"] == 3599
        form = mock_client.post.await_args.kwargs["data"]
        assert form["grant_type"] == "authorization_code"
        assert form["code"] == "code-1"

    async def test_error_status(self, settings):
        mock_client = _mock_client(status_code=400, payload={"error": "invalid_grant"})

        with patch(HTTPX_CLIENT, return_value=mock_client):
            with pytest.raises(RemoteCallFailedError) as exc_info:
                await GoogleOAuthClient(settings).exchange_code("bad")

        assert "400" in exc_info.value.message

    async def test_network_error(self, settings):
        mock_client = _mock_client()
        mock_client.post.side_effect = httpx.ConnectError("Connection refused")

        with patch(HTTPX_CLIENT, return_value=mock_client):
            with pytest.raises(RemoteCallFailedError):
                await GoogleOAuthClient(settings).exchange_code("code-1")

    async def test_missing_access_token(self, settings):
        with patch(HTTPX_CLIENT, return_value=_mock_client(payload={"scope": "x"})):
            with pytest.raises(RemoteCallFailedError):
                await GoogleOAuthClient(settings).exchange_code("code-1")

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="<html>sign in</html>"),
            httpx.Response(200, json=["access_token"]),
        ],
    )
    async def test_malformed_body(self, settings, response):
        mock_client = _mock_client()
        mock_client.post.return_value = response

        with patch(HTTPX_CLIENT, return_value=mock_client):
            with pytest.raises(RemoteCallFailedError):
                await GoogleOAuthClient(settings).exchange_code("code-1")


class TestRefresh:
    async def test_refresh_does_not_need_redirect(self):
        settings = GoogleSettings(client_id="id", client_secret="secret")
        mock_client = _mock_client(payload={"access_token": "fresh", "expires_in": 3600})

        with patch(HTTPX_CLIENT, return_value=mock_client):
            tokens = await GoogleOAuthClient(settings).refresh("rt")

        assert tokens.access_token == "fresh"
        assert mock_client.post.await_args.kwargs["data"]["grant_type"] == "refresh_token"
