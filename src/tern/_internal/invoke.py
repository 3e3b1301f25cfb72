"""Invoke helpers — call sync or async user callables uniformly.

Route callbacks, before-hooks and path-change listeners can be ``def``
or ``async def``. Any code that calls one of them must handle both
cases. This module provides a single helper so the sync/async check
lives in exactly one place.

Usage::

    from tern._internal.invoke import invoke

    await invoke(route.callback, name, params, query)
"""

import inspect
from typing import Any


async def invoke(callback: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *callback* and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync — returns immediately, no await needed
        def show_book(name, params, query):
            view.render(params["id"])

        # async — returns coroutine, awaited automatically
        async def show_book(name, params, query):
            book = await api.fetch(params["id"])
            view.render(book)
    """
    result = callback(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
