"""
Integration Tests for Request Context Middleware.

Tests that request context is properly propagated through the API.
"""

from httpx import AsyncClient


class TestRequestIdHeader:
    """Tests for X-Request-ID header handling."""

    async def test_generates_request_id(self, client: AsyncClient):
        """Should generate X-Request-ID when not provided."""
        response = await client.get("/health")

        assert response.status_code == 200
        # UUID format: 8-4-4-4-12 = 36 characters
        assert len(response.headers["X-Request-ID"]) == 36

    async def test_propagates_provided_request_id(self, client: AsyncClient):
        custom_id = "my-custom-request-id-12345"

        response = await client.get("/health", headers={"X-Request-ID": custom_id})

        assert response.headers["X-Request-ID"] == custom_id

    async def test_request_id_on_every_surface(self, client: AsyncClient):
        """JSON API, plain-text share responses and health all carry it."""
        endpoints = ["/health", "/api/v1/boards/tech/entries", "/s/unknown"]

        for endpoint in endpoints:
            response = await client.get(endpoint)
            assert len(response.headers["X-Request-ID"]) == 36, endpoint


class TestResponseTimeHeader:
    """Tests for X-Response-Time header."""

    async def test_response_time_is_numeric(self, client: AsyncClient):
        response = await client.get("/health")

        time_header = response.headers["X-Response-Time"]
        assert time_header.endswith("ms")
        assert time_header.removesuffix("ms").isdigit()

    async def test_response_time_on_error(self, client: AsyncClient):
        """Should include response time even on error responses."""
        response = await client.get("/api/v1/boards/tech/entries/nonexistent-id")

        assert response.status_code == 404
        assert "X-Response-Time" in response.headers


class TestRequestContextInErrors:
    """Tests for request context in error responses."""

    async def test_error_response_includes_request_id(self, client: AsyncClient):
        custom_id = "error-test-request-id"

        response = await client.get(
            "/api/v1/boards/tech/entries/nonexistent",
            headers={"X-Request-ID": custom_id},
        )

        assert response.status_code == 404
        assert response.json()["metadata"]["request_id"] == custom_id

    async def test_validation_error_includes_request_id(self, client: AsyncClient):
        custom_id = "validation-error-request-id"

        response = await client.post(
            "/api/v1/boards/tech/entries",
            json={},  # Missing required 'text' field
            headers={"X-Request-ID": custom_id},
        )

        assert response.status_code == 422
        assert response.json()["metadata"]["request_id"] == custom_id
