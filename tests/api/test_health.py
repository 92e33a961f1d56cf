"""API tests for health endpoints."""

from httpx import AsyncClient


class TestHealthAPI:
    async def test_api_health(self, api_client: AsyncClient):
        response = await api_client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"]["available"] is True

    async def test_root_health(self, api_client: AsyncClient):
        response = await api_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_unknown_route_uses_error_body(self, api_client: AsyncClient):
        response = await api_client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    async def test_request_id_header(self, api_client: AsyncClient):
        response = await api_client.get("/health")

        assert "X-Request-ID" in response.headers
