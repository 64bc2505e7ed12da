"""Unit tests for wallboard.backend.core.resilience."""

from datetime import timedelta
from unittest.mock import MagicMock, patch

import aiobreaker
import httpx
import pytest

from wallboard.backend.core.resilience import (
    ResilienceLogger,
    call_with_resilience,
    create_circuit_breaker,
    get_circuit_breaker,
    log_retry,
    reset_circuit_breakers,
)


class TestResilienceLogger:
    def test_state_change_open(self):
        """Opening the circuit should log at error level."""
        rl = ResilienceLogger("moderation")
        mock_cb = MagicMock()
        mock_cb.fail_counter = 5

        with patch("wallboard.backend.core.resilience.logger") as mock_logger:
            rl.state_change(mock_cb, "closed", "open")
            mock_logger.error.assert_called_once()
            assert "circuit_breaker_opened" in str(mock_logger.error.call_args)

    def test_state_change_half_open(self):
        rl = ResilienceLogger("shortener_bitly")
        mock_cb = MagicMock()
        mock_cb.fail_counter = 3

        with patch("wallboard.backend.core.resilience.logger") as mock_logger:
            rl.state_change(mock_cb, "open", "half-open")
            mock_logger.info.assert_called_once()
            assert "circuit_breaker_half_open" in str(mock_logger.info.call_args)

    def test_failure(self):
        rl = ResilienceLogger("moderation")
        mock_cb = MagicMock()
        mock_cb.fail_counter = 2

        with patch("wallboard.backend.core.resilience.logger") as mock_logger:
            rl.failure(mock_cb, ConnectionError("timeout"))
            mock_logger.warning.assert_called_once()
            assert "circuit_breaker_failure" in str(mock_logger.warning.call_args)


class TestLogRetry:
    def test_emits_structured_event(self):
        mock_state = MagicMock()
        mock_state.attempt_number = 2
        mock_state.fn.__name__ = "classify"
        mock_state.outcome_timestamp = 1000.5
        mock_state.start_time = 1000.0
        mock_state.outcome.failed = True
        mock_state.outcome.exception.return_value = ConnectionError("fail")

        with patch("wallboard.backend.core.resilience.logger") as mock_logger:
            log_retry(mock_state)
            call_args = mock_logger.warning.call_args
            assert "classify" in call_args[0][0]
            assert call_args[1]["extra"]["resilience_event"] == "retry_attempt"
            assert call_args[1]["extra"]["duration_ms"] == 500

    def test_handles_no_outcome(self):
        mock_state = MagicMock()
        mock_state.attempt_number = 1
        mock_state.outcome_timestamp = None
        mock_state.start_time = None
        mock_state.outcome = None

        with patch("wallboard.backend.core.resilience.logger") as mock_logger:
            log_retry(mock_state)
            extra = mock_logger.warning.call_args[1]["extra"]
            assert extra["duration_ms"] is None
            assert extra["error"] is None


class TestCircuitBreakers:
    def test_create_returns_configured_breaker(self):
        cb = create_circuit_breaker("moderation", fail_max=3, timeout_duration=15)
        assert cb.fail_max == 3
        assert cb.timeout_duration == timedelta(seconds=15)
        assert isinstance(cb.listeners[0], ResilienceLogger)
        assert cb.listeners[0].dependency == "moderation"

    def test_get_returns_same_breaker_per_dependency(self):
        first = get_circuit_breaker("moderation")
        assert get_circuit_breaker("moderation") is first
        assert get_circuit_breaker("shortener_bitly") is not first

    def test_reset_drops_breakers(self):
        first = get_circuit_breaker("moderation")
        reset_circuit_breakers()
        assert get_circuit_breaker("moderation") is not first


class TestCallWithResilience:
    async def test_returns_result(self):
        breaker = create_circuit_breaker("test")

        async def call():
            return {"ok": True}

        assert await call_with_resilience(breaker, call, timeout_seconds=1) == {"ok": True}

    async def test_retries_transport_errors(self):
        breaker = create_circuit_breaker("test")
        calls = []

        async def call():
            calls.append(1)
            if len(calls) == 1:
                raise httpx.ConnectError("refused")
            return "second time lucky"

        result = await call_with_resilience(breaker, call, timeout_seconds=1, attempts=2)
        assert result == "second time lucky"
        assert len(calls) == 2

    async def test_does_not_retry_other_errors(self):
        breaker = create_circuit_breaker("test")
        calls = []

        async def call():
            calls.append(1)
            raise ValueError("bad payload")

        with pytest.raises(ValueError):
            await call_with_resilience(breaker, call, timeout_seconds=1, attempts=3)
        assert len(calls) == 1

    async def test_open_breaker_rejects_without_calling(self):
        breaker = create_circuit_breaker("test", fail_max=1)
        calls = []

        async def call():
            calls.append(1)
            raise ValueError("down")

        with pytest.raises((ValueError, aiobreaker.CircuitBreakerError)):
            await call_with_resilience(breaker, call, timeout_seconds=1)
        with pytest.raises(aiobreaker.CircuitBreakerError):
            await call_with_resilience(breaker, call, timeout_seconds=1)
        assert len(calls) == 1
