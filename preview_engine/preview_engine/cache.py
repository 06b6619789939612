"""In-process TTL cache for the latest snapshot and summary per project.

Cache writes are opportunistic: nothing reads the cache for correctness,
the project actor's in-memory snapshot is the source of truth.

* Keys are ``(kind, project_id)`` pairs, e.g. ``("summary", "p1")``.
* Expired entries are evicted lazily on access.
* At capacity the oldest entry is evicted first.
* Thread-safe via a lock, because host services may call in from worker
  threads.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

SNAPSHOT = "snapshot"
SUMMARY = "summary"


@dataclass(slots=True)
class _CacheEntry:
    value: Any
    expires_at: float
    created_at: float = field(default_factory=time.monotonic)


class ProjectCache:
    """TTL cache keyed by ``(kind, project_id)``.

    Parameters
    ----------
    ttl_seconds:
        Lifetime of each entry.
    max_entries:
        Capacity before oldest-first eviction.
    enabled:
        When ``False`` every call is a no-op and ``get`` always misses.
    """

    def __init__(self, *, ttl_seconds: int = 300, max_entries: int = 1_000, enabled: bool = True) -> None:
        self._store: dict[tuple[str, str], _CacheEntry] = {}
        self._lock = threading.Lock()
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._enabled = enabled
        self._hits = 0
        self._misses = 0

    def get(self, kind: str, project_id: str) -> Any | None:
        if not self._enabled:
            return None
        key = (kind, project_id)
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
                return None
            if time.monotonic() > entry.expires_at:
                del self._store[key]
                self._misses += 1
                return None
            self._hits += 1
            return entry.value

    def put(self, kind: str, project_id: str, value: Any) -> None:
        if not self._enabled:
            return
        key = (kind, project_id)
        now = time.monotonic()
        with self._lock:
            if len(self._store) >= self._max_entries and key not in self._store:
                oldest = min(self._store, key=lambda k: self._store[k].created_at)
                del self._store[oldest]
            self._store[key] = _CacheEntry(value=value, expires_at=now + self._ttl, created_at=now)
        logger.debug("Cache put: %s/%s entries=%d", kind, project_id, len(self._store))

    def invalidate_project(self, project_id: str) -> int:
        """Drop every entry for *project_id*.  Returns count removed."""
        with self._lock:
            keys = [k for k in self._store if k[1] == project_id]
            for k in keys:
                del self._store[k]
        return len(keys)

    def stats(self) -> dict[str, Any]:
        with self._lock:
            total = self._hits + self._misses
            return {
                "enabled": self._enabled,
                "entries": len(self._store),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / total, 4) if total else 0.0,
            }
