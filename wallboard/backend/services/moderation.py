"""
Content Moderation.

Friend posts are screened by an external classifier before they are
stored. The classifier's own verdict is combined with stricter
per-category score thresholds from moderation.yaml.

Moderation fails open: a missing API key, a disabled feature flag, an
open circuit breaker, any transport or protocol error, or a reply of an
unexpected shape lets the post through and is logged.
"""

from dataclasses import dataclass, field
from typing import Any

import aiobreaker
import httpx

from wallboard.backend.core.config_schema import ModerationSchema
from wallboard.backend.core.logging import get_logger
from wallboard.backend.core.resilience import call_with_resilience, get_circuit_breaker

logger = get_logger(__name__)

MODERATION_DEPENDENCY = "moderation"


@dataclass
class ModerationResult:
    """Verdict for one moderated input."""

    input: str
    flagged: bool
    tripped: list[str] = field(default_factory=list)
    scores: dict[str, float] = field(default_factory=dict)

    @property
    def blocked(self) -> bool:
        return self.flagged or bool(self.tripped)

    def as_dict(self) -> dict[str, Any]:
        return {
            "input": self.input,
            "flagged": self.flagged,
            "tripped": self.tripped,
            "scores": self.scores,
        }


def _is_score(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def evaluate(label: str, result: dict[str, Any], thresholds: dict[str, float]) -> ModerationResult:
    """Apply thresholds to one classifier result. Non-numeric scores are ignored."""
    raw_scores = result.get("category_scores")
    if not isinstance(raw_scores, dict):
        raw_scores = {}
    scores = {k: float(v) for k, v in raw_scores.items() if _is_score(v)}
    tripped = [
        category
        for category, threshold in thresholds.items()
        if scores.get(category, 0.0) > threshold
    ]
    return ModerationResult(
        input=label,
        flagged=result.get("flagged") is True,
        tripped=tripped,
        scores=scores,
    )


def _results_of(payload: Any) -> list[dict[str, Any]] | None:
    """The per-input results of a reply, or None when the reply has another shape."""
    if not isinstance(payload, dict):
        return None
    results = payload.get("results") or []
    if not isinstance(results, list) or not all(isinstance(r, dict) for r in results):
        return None
    return results


class ContentModerator:
    """
    Client for the moderation endpoint.

    Usage:
        moderator = get_moderator()
        results = await moderator.moderate({"name": name, "text": text})
        if any(r.blocked for r in results):
            ...
    """

    def __init__(
        self,
        config: ModerationSchema,
        api_key: str | None,
        enabled: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._api_key = api_key
        self._enabled = enabled
        self._transport = transport

    @property
    def active(self) -> bool:
        return self._enabled and bool(self._api_key)

    @property
    def thresholds(self) -> dict[str, float]:
        return dict(self.config.thresholds)

    async def _classify(self, texts: list[str]) -> Any:
        async with httpx.AsyncClient(
            timeout=self.config.timeout_seconds,
            transport=self._transport,
        ) as client:
            response = await client.post(
                self.config.endpoint,
                json={"model": self.config.model, "input": texts},
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
            response.raise_for_status()
            return response.json()

    async def moderate(self, inputs: dict[str, str]) -> list[ModerationResult]:
        """
        Classify labelled inputs. Returns an empty list when moderation is
        inactive or unavailable.
        """
        if not self.active:
            logger.debug("Moderation inactive; skipping")
            return []

        labels = list(inputs)
        texts = [inputs[label] for label in labels]
        breaker = get_circuit_breaker(
            MODERATION_DEPENDENCY,
            fail_max=self.config.circuit_breaker.fail_max,
            timeout_duration=self.config.circuit_breaker.timeout_duration,
        )

        try:
            payload = await call_with_resilience(
                breaker,
                lambda: self._classify(texts),
                timeout_seconds=self.config.timeout_seconds,
            )
        except (httpx.HTTPError, aiobreaker.CircuitBreakerError, TimeoutError, ValueError) as e:
            logger.warning(
                "Moderation unavailable; allowing content",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            return []

        results = _results_of(payload)
        if results is None:
            logger.warning(
                "Moderation reply malformed; allowing content",
                extra={"reply_type": type(payload).__name__},
            )
            return []

        verdicts = [
            evaluate(labels[idx] if idx < len(labels) else str(idx), result, self.config.thresholds)
            for idx, result in enumerate(results)
        ]
        if any(v.blocked for v in verdicts):
            logger.info(
                "Content blocked by moderation",
                extra={"tripped": {v.input: v.tripped for v in verdicts if v.blocked}},
            )
        return verdicts


def get_moderator() -> ContentModerator:
    """Build a moderator from moderation.yaml, features.yaml and secrets."""
    from wallboard.backend.core.config import get_app_config, get_settings

    app_config = get_app_config()
    return ContentModerator(
        config=app_config.moderation,
        api_key=get_settings().openai_api_key,
        enabled=app_config.features.moderation_enabled,
    )
