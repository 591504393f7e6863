"""
Backend package.

A backend answers bulk metadata queries for the streams it owns:
- Backend: protocol every backend implements
- InMemoryBackend: serves a fixed mapping and records its calls
"""

from streamcache.backends.base import Backend
from streamcache.backends.memory import InMemoryBackend

__all__ = [
    "Backend",
    "InMemoryBackend",
]
