"""
CacheManager - Process-local async cache with per-entry TTL.

Features:
- Memory-based cache keyed by string
- TTL measured from write time (no sliding expiration)
- Lazy eviction of expired entries on access
- Enable/disable toggle: a disabled cache always misses and ignores writes
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Generic, TypeVar

from loguru import logger

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    """A single cache entry with metadata."""

    data: T
    timestamp: datetime
    ttl: timedelta

    @property
    def expires_at(self) -> datetime:
        return self.timestamp + self.ttl

    def is_expired(self, now: datetime) -> bool:
        """Check if entry is past its TTL."""
        return now >= self.expires_at


@dataclass
class CacheResult(Generic[T]):
    """Result from cache lookup."""

    data: T
    expires_at: datetime


class CacheManager:
    """
    Async-compatible cache manager with TTL.

    get/set never await while touching the store, so concurrent lookups on
    the event loop never see a half-written entry. Same-key writes: last
    write wins.

    Usage:
        cache = CacheManager(default_ttl=timedelta(minutes=5))

        # Try to get from cache
        result = await cache.get("my_key")
        if result:
            return result.data

        # Fetch fresh data and cache it
        data = await fetch_data()
        await cache.set("my_key", data, ttl=timedelta(minutes=5))
    """

    def __init__(
        self,
        enabled: bool = True,
        default_ttl: timedelta = timedelta(minutes=5),
        clock: Callable[[], datetime] = datetime.now,
        debug: bool = False,
    ):
        self._memory: dict[str, CacheEntry[Any]] = {}
        self._enabled = enabled
        self._default_ttl = default_ttl
        self._clock = clock
        self._debug = debug
        self._stats = CacheStats()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def default_ttl(self) -> timedelta:
        return self._default_ttl

    async def get(self, key: str) -> CacheResult[Any] | None:
        """
        Get value from cache.

        Returns CacheResult if found and not expired, None otherwise.
        """
        if not self._enabled:
            self._stats.misses += 1
            return None

        entry = self._memory.get(key)
        if entry is None:
            self._stats.misses += 1
            self._log(f"MISS: {key}")
            return None

        if entry.is_expired(self._clock()):
            del self._memory[key]
            self._stats.misses += 1
            self._stats.expirations += 1
            self._log(f"EXPIRED: {key}")
            return None

        self._stats.hits += 1
        self._log(f"HIT: {key}")
        return CacheResult(data=entry.data, expires_at=entry.expires_at)

    async def set(self, key: str, data: Any, ttl: timedelta | None = None) -> None:
        """
        Set value in cache.

        Args:
            key: Cache key
            data: Data to cache
            ttl: Time to live (uses default if not specified)
        """
        if not self._enabled:
            return

        ttl = self._default_ttl if ttl is None else ttl
        self._memory[key] = CacheEntry(data=data, timestamp=self._clock(), ttl=ttl)
        self._log(f"SET: {key} (TTL: {ttl.total_seconds()}s)")

    def _purge_expired(self) -> int:
        """Remove all expired entries. Returns count of removed entries."""
        now = self._clock()
        expired_keys = [k for k, v in self._memory.items() if v.is_expired(now)]
        for key in expired_keys:
            del self._memory[key]

        if expired_keys:
            self._stats.expirations += len(expired_keys)
            self._log(f"CLEANUP: {len(expired_keys)} expired entries removed")

        return len(expired_keys)

    def get_stats(self) -> "CacheStats":
        """Get cache statistics. Expired entries are purged so size counts live ones."""
        self._purge_expired()
        self._stats.size = len(self._memory)
        return self._stats

    def _log(self, message: str) -> None:
        """Log debug message if debug mode is enabled."""
        if self._debug:
            logger.debug(f"[CacheManager] {message}")


@dataclass
class CacheStats:
    """Cache statistics."""

    hits: int = 0
    misses: int = 0
    expirations: int = 0
    size: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "expirations": self.expirations,
            "size": self.size,
            "hit_rate": f"{self.hit_rate:.2%}",
        }
