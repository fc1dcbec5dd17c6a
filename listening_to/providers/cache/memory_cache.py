"""Single-slot in-memory TTL cache backed by ``cachetools.TTLCache``.

Holds the one resolved track of a plugin instance.  The cache is owned by
the plugin and passed to whoever needs it; there is no module-level
instance.  There is no locking either: two callers that miss at the same
time will both resolve and both write, the last write winning.
"""

from __future__ import annotations

import time
from typing import Callable, Generic, TypeVar

import structlog
from cachetools import TTLCache

from listening_to.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)

_T = TypeVar("_T")

_SLOT = "value"


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class TrackCache(ICacheProvider[_T], Generic[_T]):
    """One value, one timestamp, one fixed TTL.

    ``TTLCache`` keeps the entry valid while ``timer() < stored_at + ttl``
    and only checks on access, which is exactly the lazy expiry we want.

    Parameters
    ----------
    ttl_ms:
        Time-to-live in milliseconds.
    timer:
        Clock returning milliseconds.  Defaults to a monotonic clock; tests
        inject a fake one.
    """

    def __init__(self, ttl_ms: int, timer: Callable[[], float] | None = None) -> None:
        if ttl_ms < 0:
            raise ValueError("ttl_ms must be >= 0")
        self._ttl_ms = ttl_ms
        self._cache: TTLCache[str, _T] = TTLCache(
            maxsize=1, ttl=ttl_ms, timer=timer or _monotonic_ms
        )

    @property
    def ttl_ms(self) -> int:
        return self._ttl_ms

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    def get(self) -> _T | None:
        """Return the cached value, or ``None`` if missing/expired."""
        value = self._cache.get(_SLOT)
        if value is not None:
            logger.debug("cache_hit")
        else:
            logger.debug("cache_miss")
        return value

    def set(self, value: _T) -> None:
        """Store *value*, replacing whatever was there and restarting the TTL."""
        self._cache[_SLOT] = value
        logger.debug("cache_set", ttl_ms=self._ttl_ms)

    def clear(self) -> None:
        """Remove the cached value (no-op if already empty)."""
        self._cache.clear()
        logger.debug("cache_clear")
