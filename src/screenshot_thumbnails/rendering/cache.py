"""
Frame Cache
===========

Per-call cache of encoded thumbnails, keyed by analyzed-frame index.

Consecutive slots often resolve to the same source frame. The cache
makes sure such a frame is scaled and encoded once, even when slots
are rendered on several threads.

Design Rules:
    - Scoped to one audit call; never shared between calls
    - At most one computation per key (per-key lock)
    - A failed computation stores nothing and propagates
"""

import logging
import threading
from typing import Callable, Dict, Optional


logger = logging.getLogger(__name__)


class FrameCache:
    """
    Thread-safe mapping from frame index to base64 thumbnail data.

    Example:
        cache = FrameCache()
        data = cache.get_or_compute(3, lambda: encode_frame(frames[3]))
    """

    def __init__(self) -> None:
        self._entries: Dict[int, str] = {}
        self._key_locks: Dict[int, threading.Lock] = {}
        self._lock = threading.Lock()
        self._hits: int = 0
        self._misses: int = 0

    def get(self, key: int) -> Optional[str]:
        """Cached value for ``key``, or None."""
        with self._lock:
            return self._entries.get(key)

    def get_or_compute(self, key: int, compute: Callable[[], str]) -> str:
        """
        Return the cached value for ``key``, computing it on first use.

        Concurrent callers with the same key wait for the first
        computation instead of repeating it.
        """
        with self._lock:
            if key in self._entries:
                self._hits += 1
                logger.debug(f"Thumbnail cache hit for frame {key}")
                return self._entries[key]
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            with self._lock:
                if key in self._entries:
                    self._hits += 1
                    logger.debug(f"Thumbnail cache hit for frame {key}")
                    return self._entries[key]

            value = compute()

            with self._lock:
                self._entries[key] = value
                self._misses += 1
            return value

    def __contains__(self, key: int) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def hits(self) -> int:
        """Lookups served from the cache."""
        return self._hits

    @property
    def misses(self) -> int:
        """Lookups that had to compute."""
        return self._misses

    def metrics(self) -> dict:
        """
        Get cache metrics for observability.

        Returns:
            Dict with size, hits, misses
        """
        with self._lock:
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
            }
