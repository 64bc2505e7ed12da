"""
External URL Shortener.

Optionally wraps internal share URLs with a third-party shortener
(Bitly or Short.io). A provider failure yields None; whether that is
acceptable is decided by share_url_for(), which enforces the external
URL whenever a provider is configured and the request did not come from
a local development host.
"""

import re
from typing import Any

import aiobreaker
import httpx

from wallboard.backend.core.exceptions import ExternalServiceError
from wallboard.backend.core.logging import get_logger
from wallboard.backend.core.resilience import call_with_resilience, get_circuit_breaker

logger = get_logger(__name__)

BITLY_ENDPOINT = "https://api-ssl.bitly.com/v4/shorten"
SHORTIO_ENDPOINT = "https://api.short.io/links"

PROVIDERS = ("bitly", "shortio")

_LOCAL_HOST = re.compile(r"^(localhost:\d+|127\.0\.0\.1(:\d+)?)")


def is_local_host(host: str | None) -> bool:
    """True for localhost:<port> and 127.0.0.1[:<port>]."""
    return bool(host) and _LOCAL_HOST.match(host) is not None


def normalize_provider(provider: str | None) -> str:
    value = (provider or "").strip().lower()
    return "shortio" if value == "short.io" else value


class ExternalShortener:
    """Client for the configured shortener provider."""

    def __init__(
        self,
        provider: str | None,
        bitly_token: str | None = None,
        shortio_api_key: str | None = None,
        shortio_domain: str = "",
        timeout_seconds: float = 5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.provider = normalize_provider(provider)
        self._bitly_token = (bitly_token or "").strip()
        self._shortio_api_key = (shortio_api_key or "").strip()
        self._shortio_domain = shortio_domain.strip()
        self._timeout = timeout_seconds
        self._transport = transport

    @property
    def configured(self) -> bool:
        return self.provider in PROVIDERS

    def _request(self, long_url: str) -> tuple[str, dict[str, str], dict[str, Any]]:
        if self.provider == "bitly":
            if not self._bitly_token:
                raise ValueError("Missing BITLY_TOKEN")
            return (
                BITLY_ENDPOINT,
                {"Authorization": f"Bearer {self._bitly_token}"},
                {"long_url": long_url},
            )
        if not self._shortio_api_key or not self._shortio_domain:
            raise ValueError("Missing SHORTIO_API_KEY or shortio_domain")
        return (
            SHORTIO_ENDPOINT,
            {"Authorization": self._shortio_api_key},
            {"originalURL": long_url, "domain": self._shortio_domain},
        )

    @staticmethod
    def _extract(provider: str, data: Any) -> str | None:
        if not isinstance(data, dict):
            return None
        if provider == "bitly":
            link = data.get("link")
        else:
            link = data.get("shortURL") or data.get("secureShortURL")
        return link if isinstance(link, str) and link else None

    async def _post(self, url: str, headers: dict[str, str], body: dict[str, Any]) -> Any:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(url, json=body, headers=headers)
            response.raise_for_status()
            return response.json()

    async def shorten(self, long_url: str) -> str | None:
        """Shorten a URL with the configured provider, or None on any failure."""
        if not self.configured:
            return None
        try:
            url, headers, body = self._request(long_url)
            data = await call_with_resilience(
                get_circuit_breaker(f"shortener_{self.provider}"),
                lambda: self._post(url, headers, body),
                timeout_seconds=self._timeout,
            )
        except (httpx.HTTPError, aiobreaker.CircuitBreakerError, TimeoutError, ValueError) as e:
            logger.warning(
                "External shortener failed",
                extra={"provider": self.provider, "error": str(e)},
            )
            return None

        link = self._extract(self.provider, data)
        if link is None:
            logger.warning("External shortener returned no link", extra={"provider": self.provider})
        return link


async def share_url_for(
    shortener: ExternalShortener,
    internal_url: str,
    host: str | None,
) -> tuple[str, bool]:
    """
    Pick the URL to hand out for a short link.

    Returns (url, external). Only absolute internal URLs are sent to the
    provider.

    Raises:
        ExternalServiceError: provider configured, request not local, and
            no external URL was produced
    """
    enforce = shortener.configured and not is_local_host(host)
    external = None
    if shortener.configured and internal_url.startswith(("http://", "https://")):
        external = await shortener.shorten(internal_url)

    if external:
        return external, True
    if enforce:
        raise ExternalServiceError("External shortener failed")
    return internal_url, False


def get_shortener() -> ExternalShortener:
    """Build the shortener from sharing.yaml, features.yaml and secrets."""
    from wallboard.backend.core.config import get_app_config, get_settings

    app_config = get_app_config()
    settings = get_settings()
    ext = app_config.sharing.external_shortener
    provider = ext.provider if app_config.features.external_shortener_enabled else ""
    return ExternalShortener(
        provider=provider,
        bitly_token=settings.bitly_token,
        shortio_api_key=settings.shortio_api_key,
        shortio_domain=ext.shortio_domain,
        timeout_seconds=ext.timeout_seconds,
    )
