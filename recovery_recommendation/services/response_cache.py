"""LLM response cache

In-memory TTL cache keyed by a fingerprint of the request fields that affect
the answer. Lives for the lifetime of the process; nothing is persisted.
"""

import asyncio
import hashlib
import json
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """Cached value with its absolute expiry (clock seconds)"""
    key: str
    value: Any
    expires_at: float


def compute_key(params: Dict[str, Any]) -> str:
    """Fingerprint of the semantically relevant request fields

    Keys are sorted before hashing, so two requests that differ only in field
    order share a fingerprint. Callers pass only the fields that change the
    response; timestamps and other volatile fields stay out.
    """
    canonical = json.dumps(params, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.md5(canonical.encode("utf-8")).hexdigest()


class ResponseCache:
    """TTL cache for recommendation responses

    Usage:
        cache = ResponseCache(default_ttl=24 * 3600)
        key = compute_key({"userId": 1, "function": "plan"})
        cache.set(key, plan, ttl=3600)
        cache.get(key)
    """

    def __init__(
        self,
        default_ttl: float = 24 * 60 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            default_ttl: TTL used when set() gets none (seconds)
            clock: time source in seconds
        """
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        """Return the stored value, or None if absent or expired"""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() >= entry.expires_at:
                del self._entries[key]
                return None
        logger.debug("Cache hit for: %s", key)
        return entry.value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store or overwrite a value"""
        ttl = self.default_ttl if ttl is None else ttl
        with self._lock:
            self._entries[key] = CacheEntry(
                key=key, value=value, expires_at=self._clock() + ttl
            )
        logger.debug("Cached response for: %s (ttl=%ss)", key, ttl)

    def clear_expired(self) -> int:
        """Drop every expired entry

        Returns:
            number of entries removed
        """
        with self._lock:
            now = self._clock()
            expired = [k for k, e in self._entries.items() if e.expires_at <= now]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        """Empty the cache"""
        with self._lock:
            self._entries.clear()

    def stats(self) -> Dict[str, int]:
        """Cache stats"""
        with self._lock:
            return {"size": len(self._entries)}

    def __len__(self) -> int:
        return self.stats()["size"]


class CacheSweeper:
    """Runs ResponseCache.clear_expired() on a fixed interval

    Started and stopped by the app lifespan; independent of request traffic.
    """

    def __init__(self, cache: ResponseCache, interval_seconds: float = 60 * 60):
        self._cache = cache
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            removed = self._cache.clear_expired()
            if removed:
                logger.info("Cache sweep removed %d expired entries", removed)
