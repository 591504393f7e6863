"""
Tests for the in-memory backend.
"""

from __future__ import annotations

import pytest

from streamcache.backends import Backend, InMemoryBackend


class TestInMemoryBackend:
    """Test the reference backend."""

    def test_returns_only_known_streams(self) -> None:
        backend = InMemoryBackend({"a": 1, "b": 2})

        result = backend.fetch_metadata(frozenset({"a", "missing"}))

        assert result == {"a": 1}
        assert backend.calls == [frozenset({"a", "missing"})]

    def test_update_and_remove(self) -> None:
        backend = InMemoryBackend({"a": 1})
        backend.update("a", 10)
        backend.update("b", 20)
        backend.remove("a")

        assert backend.fetch_metadata(frozenset({"a", "b"})) == {"b": 20}

    def test_error_is_raised_and_recorded(self) -> None:
        backend = InMemoryBackend({"a": 1}, error=RuntimeError("down"))

        with pytest.raises(RuntimeError, match="down"):
            backend.fetch_metadata(frozenset({"a"}))
        assert backend.call_count == 1

    def test_satisfies_protocol(self) -> None:
        assert isinstance(InMemoryBackend(), Backend)
