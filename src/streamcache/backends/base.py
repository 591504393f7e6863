"""
Interface for stream metadata backends.

This module defines:
- Backend: Protocol for anything that can fetch metadata for its own streams
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class Backend(Protocol):
    """Protocol for stream metadata backends.

    Implementations are synchronous and may block on network I/O. The cache
    calls each backend at most once per lookup batch.
    """

    def fetch_metadata(self, stream_names: frozenset[str]) -> Mapping[str, Any]:
        """Fetch metadata for a set of streams owned by this backend.

        Args:
            stream_names: Names of the streams to fetch, without backend prefix.

        Returns:
            Mapping from stream name to metadata. Streams the backend has no
            metadata for may be omitted.

        Raises:
            Any backend-specific error. The cache propagates it unchanged.
        """
        ...
