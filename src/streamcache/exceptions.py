"""
Custom exception hierarchy for the stream metadata cache.

All exceptions inherit from StreamCacheError, which provides optional context
for structured error handling and logging. Errors raised by backends are not
part of this hierarchy; they propagate to the caller unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from streamcache.types import StreamIdentity


class StreamCacheError(Exception):
    """Base exception for all stream metadata cache errors.

    Attributes:
        message: Human-readable error message.
        context: Optional structured context for logging/debugging.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"


class ConfigurationError(StreamCacheError):
    """Raised when cache construction parameters are invalid.

    Examples:
        - Negative TTL
        - A registry value that is not a backend
    """

    pass


class UnknownBackendError(StreamCacheError):
    """Raised when a requested stream names a backend with no registry entry.

    Attributes:
        backend: The backend name that could not be resolved.
    """

    def __init__(self, backend: str) -> None:
        super().__init__(f"Cannot get metadata for unknown backend: {backend}")
        self.backend = backend


class IncompleteResultError(StreamCacheError):
    """Raised when one or more requested streams could not be resolved.

    Attributes:
        missing: Every requested identity that has no metadata.
    """

    def __init__(self, missing: Iterable[StreamIdentity]) -> None:
        self.missing = frozenset(missing)
        names = ", ".join(str(identity) for identity in sorted(self.missing))
        super().__init__(
            f"Cannot get metadata for unknown streams: {names}",
            context={"missing_count": len(self.missing)},
        )
