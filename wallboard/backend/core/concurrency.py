"""
Concurrency Infrastructure.

Named semaphores for outbound calls and named locks for read-modify-write
sequences that must not interleave inside one process.

Semaphores:
    Created per-dependency to limit concurrent access to external services.
    Sizing is configured in config/settings/concurrency.yaml.

Locks:
    Created per key (e.g. one per pin scope). They serialize coroutines in
    this process only; separate worker processes still race.

Usage:
    from wallboard.backend.core.concurrency import get_semaphore, get_lock

    async with get_semaphore("external_api"):
        result = await client.post(url)

    async with get_lock("pins:wall:main"):
        ...
"""

import asyncio

from wallboard.backend.core.logging import get_logger

logger = get_logger(__name__)

_DEFAULT_SEMAPHORE_CAPACITY = 20

_semaphores: dict[str, asyncio.Semaphore] = {}
_semaphore_capacities: dict[str, int] = {}
_locks: dict[str, asyncio.Lock] = {}


def get_semaphore(name: str) -> asyncio.Semaphore:
    """Get a named semaphore for concurrency-limiting external calls.

    Semaphores are created lazily. The capacity is read from concurrency.yaml
    under `semaphores.<name>`. If the name is not configured, defaults to 20.
    """
    if name not in _semaphores:
        from wallboard.backend.core.config import get_app_config
        semaphore_config = get_app_config().concurrency.semaphores
        capacity = getattr(semaphore_config, name, _DEFAULT_SEMAPHORE_CAPACITY)
        _semaphores[name] = asyncio.Semaphore(capacity)
        _semaphore_capacities[name] = capacity
        logger.debug("Semaphore created", extra={"name": name, "capacity": capacity})
    return _semaphores[name]


def get_lock(key: str) -> asyncio.Lock:
    """Get the process-wide lock for a key, creating it on first use."""
    lock = _locks.get(key)
    if lock is None:
        lock = _locks[key] = asyncio.Lock()
    return lock


def reset() -> None:
    """Drop all semaphores and locks. Called during application shutdown."""
    _semaphores.clear()
    _semaphore_capacities.clear()
    _locks.clear()
    logger.debug("Concurrency primitives cleared")
