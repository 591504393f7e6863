"""
Core types for the stream metadata cache.

This module defines the fundamental data structures used throughout the system:
- StreamIdentity: the (backend, stream) cache key
- PartitionMetadata / StreamMetadata: an offset model backends may return
- CacheEntry: a cached value with its fetch timestamp
- CacheStats: a snapshot of cache counters
- Helper functions for ID generation
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from uuid6 import uuid7


def generate_id(prefix: str = "") -> str:
    """Generate a time-ordered unique ID using UUID7.

    Args:
        prefix: Optional prefix for the ID (e.g., "batch").

    Returns:
        A unique ID string, optionally prefixed.
    """
    uid = str(uuid7())
    return f"{prefix}_{uid}" if prefix else uid


@dataclass(frozen=True, order=True)
class StreamIdentity:
    """A logical stream, identified by its backend name and stream name."""

    backend: str
    stream: str

    def __str__(self) -> str:
        return f"{self.backend}.{self.stream}"


@dataclass(frozen=True)
class PartitionMetadata:
    """Offsets for a single partition of a stream.

    An empty partition has no oldest or newest offset, only the offset the
    next message will be written at.
    """

    oldest_offset: str | None
    newest_offset: str | None
    upcoming_offset: str | None


@dataclass(frozen=True)
class StreamMetadata:
    """Offset metadata for every partition of a stream.

    The cache treats metadata as opaque; this type is provided for backends
    that have no model of their own.
    """

    stream_name: str
    partitions: Mapping[int, PartitionMetadata] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "partitions", MappingProxyType(dict(self.partitions)))

    @property
    def partition_count(self) -> int:
        """Number of partitions in the stream."""
        return len(self.partitions)

    def get_partition(self, partition: int) -> PartitionMetadata | None:
        """Get metadata for one partition, or None if the stream lacks it."""
        return self.partitions.get(partition)


@dataclass(frozen=True)
class CacheEntry:
    """Immutable cached metadata plus the time it was fetched from a backend."""

    metadata: Any
    last_refresh_ms: int

    def age_ms(self, now_ms: int) -> int:
        """Milliseconds elapsed since the entry was fetched."""
        return now_ms - self.last_refresh_ms

    def is_fresh(self, now_ms: int, ttl_ms: int) -> bool:
        """Whether the entry is still within its time-to-live at now_ms."""
        return self.age_ms(now_ms) <= ttl_ms


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time snapshot of cache counters."""

    requests: int = 0
    hits: int = 0
    misses: int = 0
    backend_calls: int = 0
    failures: int = 0

    @property
    def hit_ratio(self) -> float:
        """Fraction of looked-up streams served from the cache."""
        total = self.hits + self.misses
        return self.hits / total if total else 0.0

    def to_dict(self) -> dict[str, int | float]:
        """Convert to dictionary for logging."""
        return {
            "requests": self.requests,
            "hits": self.hits,
            "misses": self.misses,
            "backend_calls": self.backend_calls,
            "failures": self.failures,
            "hit_ratio": self.hit_ratio,
        }
