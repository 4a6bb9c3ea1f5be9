"""Bounded in-memory cache of small whole files, keyed by request path."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100  # entries


class SmallFileCache:
    """Least-recently-used cache of immutable file contents.

    There is no invalidation: an entry lives until it is pushed out by
    capacity pressure or the process exits, so a file changed on disk can be
    served stale. Callers decide what is small enough to ``put``.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._entries: OrderedDict[str, bytes] = OrderedDict()
        self._total_bytes = 0
        self._hits = 0
        self._misses = 0
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> bytes | None:
        with self._lock:
            content = self._entries.get(key)
            if content is None:
                self._misses += 1
                return None
            self._entries.move_to_end(key)
            self._hits += 1
            return content

    def put(self, key: str, content: bytes) -> None:
        """Insert or replace ``key``; the last writer wins."""
        content = bytes(content)
        with self._lock:
            previous = self._entries.pop(key, None)
            if previous is not None:
                self._total_bytes -= len(previous)
            self._entries[key] = content
            self._total_bytes += len(content)

            while len(self._entries) > self._capacity:
                evicted_key, evicted = self._entries.popitem(last=False)
                self._total_bytes -= len(evicted)
                logger.debug("Cache evicted %s (%d bytes)", evicted_key, len(evicted))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._total_bytes = 0

    def stats(self) -> dict:
        with self._lock:
            lookups = self._hits + self._misses
            return {
                "entries": len(self._entries),
                "capacity": self._capacity,
                "total_bytes": self._total_bytes,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate_percent": round(self._hits / lookups * 100, 1) if lookups else None,
            }
