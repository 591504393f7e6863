"""
Tests for core types.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from streamcache.types import (
    CacheEntry,
    CacheStats,
    PartitionMetadata,
    StreamIdentity,
    StreamMetadata,
    generate_id,
)


class TestStreamIdentity:
    """Test the stream cache key."""

    def test_value_equality(self) -> None:
        """Test that identities compare and hash by value."""
        a = StreamIdentity("kafka", "orders")
        b = StreamIdentity("kafka", "orders")

        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1
        assert a != StreamIdentity("hdfs", "orders")

    def test_str(self) -> None:
        assert str(StreamIdentity("kafka", "orders")) == "kafka.orders"

    def test_immutable(self) -> None:
        identity = StreamIdentity("kafka", "orders")
        with pytest.raises(FrozenInstanceError):
            identity.stream = "other"  # type: ignore[misc]


class TestStreamMetadata:
    """Test the partition offset model."""

    def test_partitions(self) -> None:
        """Test partition helpers."""
        p0 = PartitionMetadata("0", "9", "10")
        empty = PartitionMetadata(None, None, "0")
        metadata = StreamMetadata("orders", {0: p0, 1: empty})

        assert metadata.partition_count == 2
        assert metadata.get_partition(0) == p0
        assert metadata.get_partition(1).oldest_offset is None
        assert metadata.get_partition(2) is None

    def test_partitions_are_read_only(self) -> None:
        """Test that the partition mapping is detached and frozen."""
        source = {0: PartitionMetadata("0", "1", "2")}
        metadata = StreamMetadata("orders", source)
        source[1] = PartitionMetadata("0", "0", "1")

        assert metadata.partition_count == 1
        with pytest.raises(TypeError):
            metadata.partitions[5] = PartitionMetadata(None, None, None)  # type: ignore[index]


class TestCacheEntry:
    """Test cache entry freshness."""

    def test_freshness_boundary(self) -> None:
        entry = CacheEntry(metadata="m", last_refresh_ms=100)

        assert entry.age_ms(150) == 50
        assert entry.is_fresh(200, ttl_ms=100)
        assert not entry.is_fresh(201, ttl_ms=100)


class TestCacheStats:
    """Test the stats snapshot."""

    def test_hit_ratio_empty(self) -> None:
        assert CacheStats().hit_ratio == 0.0

    def test_to_dict(self) -> None:
        stats = CacheStats(requests=2, hits=3, misses=1, backend_calls=1)
        data = stats.to_dict()

        assert data["hits"] == 3
        assert data["hit_ratio"] == pytest.approx(0.75)


def test_generate_id_prefix() -> None:
    """Test that generated IDs are prefixed and unique."""
    first = generate_id("batch")
    second = generate_id("batch")

    assert first.startswith("batch_")
    assert first != second
    assert "_" not in generate_id()
