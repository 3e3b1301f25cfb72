"""Tests for tern._internal.invoke — uniform sync/async calls."""

import pytest

from tern._internal.invoke import invoke


@pytest.mark.anyio
class TestInvoke:
    async def test_sync_callable(self) -> None:
        assert await invoke(lambda a, b=0: a + b, 1, b=2) == 3

    async def test_async_callable(self) -> None:
        async def add(a, b):
            return a + b

        assert await invoke(add, 1, 2) == 3

    async def test_sync_returning_awaitable(self) -> None:
        async def later():
            return "done"

        assert await invoke(lambda: later()) == "done"
