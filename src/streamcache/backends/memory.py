"""In-memory backend serving a fixed set of stream metadata."""

from __future__ import annotations

import threading
from typing import Any, Mapping

from streamcache.logging import get_logger

logger = get_logger(__name__)


class InMemoryBackend:
    """Backend backed by a dictionary.

    Every call records the set of stream names it was asked for, so callers
    can check how often and with what the backend was hit.
    """

    def __init__(
        self,
        metadata: Mapping[str, Any] | None = None,
        error: Exception | None = None,
    ) -> None:
        """Initialize the backend.

        Args:
            metadata: Stream name to metadata served by this backend.
            error: If set, every fetch raises this error after being recorded.
        """
        self._metadata: dict[str, Any] = dict(metadata or {})
        self._error = error
        self._calls: list[frozenset[str]] = []
        self._lock = threading.Lock()

    @property
    def calls(self) -> list[frozenset[str]]:
        """Stream-name sets of every fetch so far, oldest first."""
        with self._lock:
            return list(self._calls)

    @property
    def call_count(self) -> int:
        with self._lock:
            return len(self._calls)

    def update(self, stream_name: str, metadata: Any) -> None:
        """Replace the metadata served for one stream."""
        with self._lock:
            self._metadata[stream_name] = metadata

    def remove(self, stream_name: str) -> None:
        """Stop serving metadata for one stream."""
        with self._lock:
            self._metadata.pop(stream_name, None)

    def fetch_metadata(self, stream_names: frozenset[str]) -> dict[str, Any]:
        with self._lock:
            self._calls.append(frozenset(stream_names))
            if self._error is not None:
                raise self._error
            found = {
                name: self._metadata[name]
                for name in stream_names
                if name in self._metadata
            }

        if len(found) < len(stream_names):
            logger.debug(
                "Backend has no metadata for some streams",
                requested=len(stream_names),
                found=len(found),
            )
        return found
