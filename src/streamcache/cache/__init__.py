"""
Cache package for stream metadata.

This package provides:
- CacheStore (store.py): TTL-checked mapping from stream to cached metadata
- StreamMetadataCache (resolver.py): batched, all-or-nothing metadata lookups
"""

from streamcache.cache.resolver import StreamMetadataCache
from streamcache.cache.store import CacheStore

__all__ = [
    "CacheStore",
    "StreamMetadataCache",
]
