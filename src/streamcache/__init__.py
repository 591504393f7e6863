"""
Short-TTL cache for stream metadata lookups.

Shields stream metadata backends from bursts of overlapping requests by
serving recently fetched answers and batching misses per backend.
"""

from streamcache.backends import Backend, InMemoryBackend
from streamcache.cache import CacheStore, StreamMetadataCache
from streamcache.clock import Clock, ManualClock, SystemClock
from streamcache.exceptions import (
    ConfigurationError,
    IncompleteResultError,
    StreamCacheError,
    UnknownBackendError,
)
from streamcache.types import (
    CacheEntry,
    CacheStats,
    PartitionMetadata,
    StreamIdentity,
    StreamMetadata,
)

__version__ = "0.1.0"

__all__ = [
    "Backend",
    "CacheEntry",
    "CacheStats",
    "CacheStore",
    "Clock",
    "ConfigurationError",
    "InMemoryBackend",
    "IncompleteResultError",
    "ManualClock",
    "PartitionMetadata",
    "StreamCacheError",
    "StreamIdentity",
    "StreamMetadata",
    "StreamMetadataCache",
    "SystemClock",
    "UnknownBackendError",
]
