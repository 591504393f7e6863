"""Time sources used to decide cache entry expiry."""

from __future__ import annotations

import threading
import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Protocol for time sources.

    Returns milliseconds since an arbitrary fixed epoch. Values must not
    go backwards for practical purposes.
    """

    def now_ms(self) -> int:
        """Current time in milliseconds."""
        ...


class SystemClock:
    """Wall-clock time source."""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000


class ManualClock:
    """Clock that only moves when told to.

    Useful for deterministic tests of expiry behaviour.
    """

    def __init__(self, start_ms: int = 0) -> None:
        self._now_ms = start_ms
        self._lock = threading.Lock()

    def now_ms(self) -> int:
        return self._now_ms

    def set(self, now_ms: int) -> None:
        """Jump to an absolute time."""
        with self._lock:
            self._now_ms = now_ms

    def advance(self, delta_ms: int) -> int:
        """Move the clock forward and return the new time."""
        if delta_ms < 0:
            raise ValueError("ManualClock cannot move backwards")
        with self._lock:
            self._now_ms += delta_ms
            return self._now_ms
