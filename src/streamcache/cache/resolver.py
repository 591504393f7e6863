"""
Batched, cached stream metadata lookups.

Caches calls to backend metadata fetches for a short while (by default
5 seconds), so that many metadata requests can be made in quick succession
without hammering the backends. This matters during task startup, when many
tasks independently fetch offsets for overlapping streams.

Each lookup either returns metadata for every requested stream or raises;
partial results are never returned.
"""

from __future__ import annotations

import threading
from collections import defaultdict
from dataclasses import replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from streamcache.backends.base import Backend
from streamcache.cache.store import CacheStore
from streamcache.clock import Clock, SystemClock
from streamcache.exceptions import (
    ConfigurationError,
    IncompleteResultError,
    UnknownBackendError,
)
from streamcache.logging import get_logger, log_context
from streamcache.types import CacheStats, StreamIdentity, generate_id

if TYPE_CHECKING:
    from streamcache.config import Settings

logger = get_logger(__name__)

DEFAULT_TTL_MS = 5000


class StreamMetadataCache:
    """Short-TTL cache in front of a fixed set of metadata backends.

    Misses are grouped by backend so each backend receives a single bulk
    fetch per lookup, however many of its streams were requested.
    """

    def __init__(
        self,
        backends: Mapping[str, Backend],
        ttl_ms: int = DEFAULT_TTL_MS,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            backends: Backend name to backend used to load metadata on a miss.
            ttl_ms: Maximum age (in milliseconds) of a cache entry.
            clock: Time source for expiry decisions. Defaults to wall clock.

        Raises:
            ConfigurationError: If ttl_ms is negative or a registry value is
                not a backend.
        """
        if ttl_ms < 0:
            raise ConfigurationError(
                "Cache TTL must not be negative", context={"ttl_ms": ttl_ms}
            )
        for name, backend in backends.items():
            if not isinstance(backend, Backend):
                raise ConfigurationError(
                    "Registry value does not implement fetch_metadata",
                    context={"backend": name, "type": type(backend).__name__},
                )

        self._backends: Mapping[str, Backend] = MappingProxyType(dict(backends))
        self._clock: Clock = clock or SystemClock()
        self._store = CacheStore(ttl_ms)
        self._stats = CacheStats()
        self._stats_lock = threading.Lock()

    @classmethod
    def from_settings(
        cls,
        backends: Mapping[str, Backend],
        settings: Settings | None = None,
        clock: Clock | None = None,
    ) -> StreamMetadataCache:
        """Build a cache using the TTL from settings."""
        if settings is None:
            from streamcache.config import get_settings

            settings = get_settings()
        return cls(backends, ttl_ms=settings.ttl_ms, clock=clock)

    @property
    def ttl_ms(self) -> int:
        return self._store.ttl_ms

    @property
    def backends(self) -> Mapping[str, Backend]:
        """Read-only view of the backend registry."""
        return self._backends

    @property
    def store(self) -> CacheStore:
        return self._store

    @property
    def stats(self) -> CacheStats:
        """Snapshot of the cache counters."""
        return self._stats

    def get_stream_metadata(
        self, streams: Iterable[StreamIdentity]
    ) -> dict[StreamIdentity, Any]:
        """Get metadata for each of the given streams.

        Fresh entries are served from the cache; the rest are fetched from
        their backends, one call per backend, and cached.

        Args:
            streams: Streams to get metadata for.

        Returns:
            Mapping from every requested stream to its metadata, plus any
            extra streams a backend returned unasked.

        Raises:
            UnknownBackendError: If a stream to fetch names an unregistered backend.
            IncompleteResultError: If any stream is still unresolved after fetching.
        """
        requested = frozenset(streams)
        now = self._clock.now_ms()

        with log_context(batch_id=generate_id("batch")):
            hits: dict[StreamIdentity, Any] = {}
            misses_by_backend: dict[str, set[str]] = defaultdict(set)
            for identity in requested:
                metadata = self._store.lookup(identity, now)
                if metadata is None:
                    misses_by_backend[identity.backend].add(identity.stream)
                else:
                    hits[identity] = metadata

            miss_count = len(requested) - len(hits)
            self._record(requests=1, hits=len(hits), misses=miss_count)
            logger.debug(
                "Partitioned metadata request",
                requested=len(requested),
                hits=len(hits),
                misses=miss_count,
                backends=sorted(misses_by_backend),
            )

            for backend_name in sorted(misses_by_backend):
                if backend_name not in self._backends:
                    self._record(failures=1)
                    logger.warning("Unknown backend requested", backend_name=backend_name)
                    raise UnknownBackendError(backend_name)

            fetched: dict[StreamIdentity, Any] = {}
            for backend_name in sorted(misses_by_backend):
                fetched.update(
                    self._fetch(backend_name, frozenset(misses_by_backend[backend_name]))
                )

            all_results = {**hits, **fetched}
            missing = requested.difference(all_results)
            if missing:
                self._record(failures=1)
                logger.warning(
                    "Metadata unavailable for requested streams",
                    missing=sorted(str(identity) for identity in missing),
                )
                raise IncompleteResultError(missing)

            for identity, metadata in fetched.items():
                self._store.insert(identity, metadata, now)

            return all_results

    def _fetch(self, backend_name: str, stream_names: frozenset[str]) -> dict[StreamIdentity, Any]:
        """Call one backend for its miss group and key the results by identity."""
        backend = self._backends[backend_name]
        self._record(backend_calls=1)

        with log_context(backend=backend_name):
            logger.debug("Fetching metadata from backend", streams=len(stream_names))
            try:
                response = backend.fetch_metadata(stream_names)
            except Exception as e:
                self._record(failures=1)
                logger.warning(
                    "Backend metadata fetch failed",
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise

            results: dict[StreamIdentity, Any] = {}
            for stream_name, metadata in response.items():
                if stream_name not in stream_names:
                    logger.debug("Caching unrequested stream", stream=stream_name)
                if metadata is not None:
                    results[StreamIdentity(backend_name, stream_name)] = metadata
            return results

    def _record(self, **increments: int) -> None:
        with self._stats_lock:
            self._stats = replace(
                self._stats,
                **{
                    name: getattr(self._stats, name) + value
                    for name, value in increments.items()
                },
            )
