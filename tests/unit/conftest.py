"""
Unit Test Fixtures.

Unit tests exercise one module at a time. Service tests run against the
in-memory database from the root conftest; outbound HTTP is replaced with
httpx.MockTransport.
"""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from wallboard.backend.core.config import get_app_config


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for tests that must not touch a database.

    Usage:
        def test_repository(mock_db_session: AsyncMock):
            repo = WallRepository(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    return session


@pytest.fixture
def sharing_config() -> Any:
    return get_app_config().sharing


@pytest.fixture
def moderation_config() -> Any:
    return get_app_config().moderation


@pytest.fixture
def json_transport() -> Callable[..., httpx.MockTransport]:
    """
    Build an httpx.MockTransport that answers every request with one JSON body
    and records the requests it saw.

    Usage:
        transport = json_transport({"link": "https://bit.ly/x"})
        ...
        assert transport.requests[0].url.host == "api-ssl.bitly.com"
    """
    def _make(payload: Any, status_code: int = 200) -> httpx.MockTransport:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(status_code, json=payload)

        transport = httpx.MockTransport(handler)
        transport.requests = seen  # type: ignore[attr-defined]
        return transport

    return _make


@pytest.fixture
def failing_transport() -> httpx.MockTransport:
    """Transport whose every request fails with a connection error."""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)
