"""
Integration Test Fixtures.

Fixtures for integration tests: the real application over ASGI, backed by
the in-memory database from the root conftest.py.
"""

from collections.abc import AsyncGenerator, Generator
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from wallboard.backend.core.database import get_db_session
from wallboard.backend.main import create_app


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def app(db_session: AsyncSession) -> Generator[FastAPI, None, None]:
    """
    Application with the database session dependency overridden.

    Every request shares the test session and keeps the production
    transaction semantics: commit on success, roll back on error.
    """
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    application = create_app()
    application.dependency_overrides[get_db_session] = override_get_db_session
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Test client for the application. Requests carry Host: test.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> dict[str, Any]:
        """
        Assert API response is successful.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is True, f"Response not successful: {data}"
        return data

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is an error in the standard envelope.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("error") is not None, f"Missing error details: {data}"

        if expected_code:
            actual_code = data["error"].get("code")
            assert actual_code == expected_code, (
                f"Expected error code {expected_code}, got {actual_code}"
            )

        return data

    @staticmethod
    def assert_validation_error(
        response: Any,
        field: str | None = None,
    ) -> dict[str, Any]:
        """Assert API response is a request validation error (422)."""
        data = ApiAssertions.assert_error(response, 422, "VAL_REQUEST_INVALID")

        if field:
            errors = data["error"].get("details", {}).get("validation_errors", [])
            fields = [e.get("field", "") for e in errors]
            assert any(field in f for f in fields), (
                f"Expected validation error for field '{field}', "
                f"got errors for: {fields}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()


# =============================================================================
# Credential Fixtures
# =============================================================================


@pytest.fixture
def wall_headers(wall_password: str) -> dict[str, str]:
    """
    Headers carrying the wall password.

    Usage:
        async def test_pin(client: AsyncClient, wall_headers: dict):
            response = await client.post("/api/v1/boards/tech/pins", json=..., headers=wall_headers)
    """
    return {"X-Wall-Password": wall_password}


@pytest.fixture
def wrong_headers() -> dict[str, str]:
    return {"X-Wall-Password": "not-the-password"}


@pytest.fixture
def post_entry(client: AsyncClient, wall_headers: dict[str, str]) -> Any:
    """
    Create an entry through the API and return its JSON.

    Usage:
        entry = await post_entry("tech", text="hello")
    """
    async def _post(board: str, **body: Any) -> dict[str, Any]:
        body.setdefault("text", "a note")
        response = await client.post(
            f"/api/v1/boards/{board}/entries",
            json=body,
            headers=wall_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _post
