"""Tests for tern.history — HistoryAdapter protocol and MemoryHistory."""

import pytest

from tern.errors import HistoryError
from tern.history import HistoryAdapter, MemoryHistory


class TestMemoryHistory:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(MemoryHistory(), HistoryAdapter)

    def test_initial_path(self) -> None:
        assert MemoryHistory().get_current_path() == "/"
        assert MemoryHistory("/books/1").get_current_path() == "/books/1"

    def test_push_does_not_notify(self) -> None:
        history = MemoryHistory()
        seen: list[str] = []
        history.listen(seen.append)
        history.push("/a")
        history.replace("/b")
        assert seen == []
        assert history.get_current_path() == "/b"
        assert history.entries == ["/", "/b"]

    def test_back_and_forward_notify(self) -> None:
        history = MemoryHistory()
        seen: list[str] = []
        history.listen(seen.append)
        history.push("/a")
        history.push("/b")
        history.back()
        history.back()
        history.forward()
        assert seen == ["/a", "/", "/a"]
        assert history.index == 1

    def test_push_drops_forward_entries(self) -> None:
        history = MemoryHistory()
        history.push("/a")
        history.push("/b")
        history.back()
        history.push("/c")
        assert history.entries == ["/", "/a", "/c"]

    def test_back_past_start(self) -> None:
        with pytest.raises(HistoryError, match="Cannot go -1"):
            MemoryHistory().back()

    def test_forward_past_end(self) -> None:
        with pytest.raises(HistoryError):
            MemoryHistory().forward()

    def test_go(self) -> None:
        history = MemoryHistory()
        for path in ("/a", "/b", "/c"):
            history.push(path)
        history.go(-3)
        assert history.get_current_path() == "/"

    def test_unsubscribe(self) -> None:
        history = MemoryHistory()
        seen: list[str] = []
        unsubscribe = history.listen(seen.append)
        history.push("/a")
        unsubscribe()
        unsubscribe()
        history.back()
        assert seen == []

    def test_failing_listener_does_not_skip_others(self) -> None:
        history = MemoryHistory()
        history.push("/a")
        seen: list[str] = []

        def failing(path: str) -> None:
            raise RuntimeError(path)

        history.listen(failing)
        history.listen(seen.append)

        with pytest.raises(RuntimeError, match="^/$"):
            history.back()
        assert seen == ["/"]

    def test_failing_listener_restores_cursor(self) -> None:
        history = MemoryHistory()
        history.push("/a")

        def failing(path: str) -> None:
            raise RuntimeError(path)

        history.listen(failing)

        with pytest.raises(RuntimeError):
            history.back()
        assert history.index == 1
        assert history.get_current_path() == "/a"
