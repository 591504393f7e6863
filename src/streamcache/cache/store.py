"""
TTL-checked store of cached stream metadata.

Reads take no lock. Writes are serialised on a single lock so concurrent
inserts never lose an update or corrupt the mapping; the last writer for a
given stream wins. Entries are replaced, never removed.
"""

from __future__ import annotations

import threading
from typing import Any

from streamcache.types import CacheEntry, StreamIdentity


class CacheStore:
    """Mapping from stream identity to its most recently fetched metadata."""

    def __init__(self, ttl_ms: int) -> None:
        self._ttl_ms = ttl_ms
        self._entries: dict[StreamIdentity, CacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def ttl_ms(self) -> int:
        """Maximum age (in milliseconds) of a usable entry."""
        return self._ttl_ms

    def lookup(self, identity: StreamIdentity, now_ms: int) -> Any | None:
        """Get cached metadata if it is still fresh.

        Args:
            identity: Stream to look up.
            now_ms: Time to judge freshness against.

        Returns:
            The cached metadata, or None if the stream was never cached or
            its entry is older than the TTL.
        """
        entry = self._entries.get(identity)
        if entry is None or not entry.is_fresh(now_ms, self._ttl_ms):
            return None
        return entry.metadata

    def insert(self, identity: StreamIdentity, metadata: Any, now_ms: int) -> None:
        """Cache metadata for a stream, stamped with the fetch time."""
        entry = CacheEntry(metadata=metadata, last_refresh_ms=now_ms)
        with self._lock:
            self._entries[identity] = entry

    def get_entry(self, identity: StreamIdentity) -> CacheEntry | None:
        """Get the raw entry for a stream regardless of freshness."""
        return self._entries.get(identity)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identity: object) -> bool:
        return identity in self._entries
