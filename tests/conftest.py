"""
Pytest configuration and fixtures for stream metadata cache tests.
"""

from __future__ import annotations

import os
from typing import Generator
from unittest.mock import patch

import pytest

from streamcache.backends import InMemoryBackend
from streamcache.cache import StreamMetadataCache
from streamcache.clock import ManualClock
from streamcache.config import clear_settings_cache
from streamcache.types import PartitionMetadata, StreamMetadata

START_MS = 1_000_000


def make_metadata(stream_name: str, newest: int = 10) -> StreamMetadata:
    """Build single-partition metadata for a stream."""
    return StreamMetadata(
        stream_name=stream_name,
        partitions={
            0: PartitionMetadata(
                oldest_offset="0",
                newest_offset=str(newest),
                upcoming_offset=str(newest + 1),
            )
        },
    )


@pytest.fixture
def clock() -> ManualClock:
    """Provide a manual clock starting at a fixed time."""
    return ManualClock(START_MS)


@pytest.fixture
def kafka() -> InMemoryBackend:
    """Provide a backend serving three streams."""
    return InMemoryBackend({name: make_metadata(name) for name in ("orders", "payments", "clicks")})


@pytest.fixture
def hdfs() -> InMemoryBackend:
    """Provide a backend serving two streams."""
    return InMemoryBackend({name: make_metadata(name) for name in ("events", "audit")})


@pytest.fixture
def cache(
    kafka: InMemoryBackend, hdfs: InMemoryBackend, clock: ManualClock
) -> StreamMetadataCache:
    """Provide a cache over both backends with a 5 second TTL."""
    return StreamMetadataCache({"kafka": kafka, "hdfs": hdfs}, ttl_ms=5000, clock=clock)


@pytest.fixture
def mock_env_vars() -> Generator[dict[str, str], None, None]:
    """Provide mock environment variables for testing."""
    env_vars = {
        "STREAM_METADATA_CACHE_TTL_MS": "2500",
        "LOG_LEVEL": "DEBUG",
    }

    with patch.dict(os.environ, env_vars, clear=False):
        clear_settings_cache()
        yield env_vars


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Automatically reset settings cache before and after each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
