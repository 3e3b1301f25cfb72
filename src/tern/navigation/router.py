"""Navigation orchestrator — named routes over a Pointer, driven by history.

The router is a two-state machine::

    Idle ──on_change_path──▶ Navigating ──cycle done, queue empty──▶ Idle
                               │     ▲
                               └─────┘ cycle done: pop the oldest queued path

At most one change cycle (match, listeners, before-hook, callback) runs at
a time. Paths requested while Navigating are queued FIFO and drained by
the running loop before it returns, so requests complete in the order
they were issued and none are dropped.

Preconditions: routes are added during setup and removed only by
``destroy()``. Mutating the route table while a navigation is in flight
is unsupported.
"""

import logging
from collections import deque
from collections.abc import Callable, Mapping
from contextlib import AsyncExitStack
from dataclasses import dataclass
from types import TracebackType

import anyio
from anyio.abc import TaskGroup

from tern._internal.invoke import invoke
from tern._internal.types import (
    BeforeHook,
    ChangeListener,
    NotFoundListener,
    RedirectHandle,
    RouteCallback,
    Unsubscribe,
)
from tern.config import RouterConfig
from tern.errors import (
    DuplicateRoute,
    MultipleRedirectError,
    ResolveError,
    RouteNotFound,
    RouterNotRunning,
)
from tern.history.base import HistoryAdapter
from tern.http.query import QueryParams, encode_query
from tern.routing.pointer import Pointer
from tern.routing.route import Route, sanitize

logger = logging.getLogger("tern.router")


@dataclass(frozen=True, slots=True)
class NamedRoute:
    """A route registered on a Router.

    ``path`` is the sanitized template the route is stored under in the
    router's Pointer.
    """

    name: str
    path: str
    callback: RouteCallback
    on_before: BeforeHook | None = None


@dataclass(frozen=True, slots=True)
class Transition:
    """A matched navigation, as seen by a before-hook."""

    name: str
    path: str
    template: str
    params: dict[str, str]
    query: QueryParams


class Router:
    """Named-route navigation over a history adapter.

    Usage::

        history = MemoryHistory("/books/100")
        router = Router(history)

        @router.route("/books/{id:[0-9]+}", name="book")
        async def show_book(name, params, query):
            ...

        async with router:                      # subscribes, navigates to "/books/100"
            await router.push_state("book", {"id": "7"}, {"tab": "reviews"})

    Callbacks, listeners and before-hooks may be sync or async.
    """

    def __init__(self, history: HistoryAdapter, config: RouterConfig | None = None) -> None:
        self.config = config or RouterConfig()
        self.pointer = Pointer(default_pattern=self.config.default_pattern)
        self._history = history
        self._routes: dict[str, NamedRoute] = {}
        # First route name registered for each template
        self._names_by_template: dict[str, str] = {}
        self._listeners: list[ChangeListener] = []
        self._not_found_listeners: list[NotFoundListener] = []
        self._queue: deque[str] = deque()
        self._pending: str | None = None
        self._settled: anyio.Event | None = None
        self._unsubscribe: Unsubscribe | None = None
        self._task_group: TaskGroup | None = None
        self._exit_stack: AsyncExitStack | None = None

    # -- Lifecycle --

    async def __aenter__(self) -> "Router":
        async with AsyncExitStack() as stack:
            self._task_group = await stack.enter_async_context(anyio.create_task_group())
            await self.init()
            self._exit_stack = stack.pop_all()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool | None:
        if exc_type is None:
            await self.settled()
        self.destroy()
        stack, self._exit_stack = self._exit_stack, None
        self._task_group = None
        if stack is None:
            return None
        return await stack.__aexit__(exc_type, exc, tb)

    async def init(self) -> None:
        """Subscribe to the history adapter and navigate to its current path.

        Returns once that navigation (and anything it queued) completes.
        """
        if self._unsubscribe is None:
            self._unsubscribe = self._history.listen(self._on_history_change)
        await self.on_change_path(self._history.get_current_path())

    def destroy(self) -> None:
        """Unsubscribe from history and clear all route and listener state."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._queue.clear()
        self._routes.clear()
        self._names_by_template.clear()
        self._listeners.clear()
        self._not_found_listeners.clear()
        self.pointer.clear()

    @property
    def navigating(self) -> bool:
        return self._pending is not None

    async def settled(self) -> None:
        """Wait until the router is Idle and its queue is drained.

        Must not be awaited from inside a route callback or hook, which
        run as part of the navigation being waited on.
        """
        while self._pending is not None and self._settled is not None:
            await self._settled.wait()

    # -- Route table --

    def add_route(
        self,
        path: str | Route,
        callback: RouteCallback,
        *,
        name: str | None = None,
        on_before: BeforeHook | None = None,
    ) -> NamedRoute:
        """Register a named route. ``name`` defaults to *path*.

        Raises ``DuplicateRoute`` if the name is taken and
        ``MalformedTemplate``/``DuplicateParam`` if the template is invalid.
        """
        if isinstance(path, Route):
            template = path.original
            name = name if name is not None else template
        else:
            template = sanitize(path)
            name = name if name is not None else path

        if name in self._routes:
            raise DuplicateRoute(name)
        if template not in self.pointer:
            self.pointer.add(path)

        route = NamedRoute(name=name, path=template, callback=callback, on_before=on_before)
        self._routes[name] = route
        self._names_by_template.setdefault(template, name)
        return route

    def route(
        self, path: str, *, name: str | None = None, on_before: BeforeHook | None = None
    ) -> Callable[[RouteCallback], RouteCallback]:
        """Decorator form of ``add_route``."""

        def _register(callback: RouteCallback) -> RouteCallback:
            self.add_route(path, callback, name=name, on_before=on_before)
            return callback

        return _register

    @property
    def routes(self) -> list[NamedRoute]:
        return list(self._routes.values())

    def get_route(self, name: str) -> NamedRoute | None:
        return self._routes.get(name)

    def resolve(
        self,
        name: str,
        params: Mapping[str, object] | None = None,
        query: Mapping[str, object] | None = None,
    ) -> str:
        """Build the path for a named route, with ``?query`` when non-empty.

        Raises ``RouteNotFound`` for an unknown name and ``ResolveError``
        when *params* do not satisfy the template.
        """
        route = self._routes.get(name)
        if route is None:
            raise RouteNotFound(name)
        path = self.pointer.resolve(route.path, params)
        if path is None:
            raise ResolveError(name, params)
        if query:
            path = f"{path}?{encode_query(query)}"
        return path

    # -- Observers --

    def listen(self, callback: ChangeListener) -> ChangeListener:
        """Call *callback(name, params, query)* on every matched navigation.

        Listeners run before the before-hook and the route callback.
        """
        self._listeners.append(callback)
        return callback

    def remove_listener(self, callback: ChangeListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def on_not_found(self, callback: NotFoundListener) -> NotFoundListener:
        """Call *callback(pathname)* whenever no route matches."""
        self._not_found_listeners.append(callback)
        return callback

    def remove_not_found_listener(self, callback: NotFoundListener) -> None:
        if callback in self._not_found_listeners:
            self._not_found_listeners.remove(callback)

    # -- Navigation --

    async def push_state(
        self,
        name: str,
        params: Mapping[str, object] | None = None,
        query: Mapping[str, object] | None = None,
    ) -> None:
        """Resolve a named route, push it onto history and navigate to it."""
        path = self.resolve(name, params, query)
        self._history.push(path)
        await self.on_change_path(path)

    async def replace_state(
        self,
        name: str,
        params: Mapping[str, object] | None = None,
        query: Mapping[str, object] | None = None,
    ) -> None:
        """Resolve a named route, replace the current history entry and navigate to it."""
        path = self.resolve(name, params, query)
        self._history.replace(path)
        await self.on_change_path(path)

    async def on_change_path(self, path: str) -> None:
        """Navigate to *path*, or queue it if a navigation is in flight.

        When Idle, returns after this path and everything queued behind it
        has been processed. When Navigating, returns immediately.
        """
        if self._pending is not None:
            logger.debug("Queued %r behind %r", path, self._pending)
            self._queue.append(path)
            return
        self._begin(path)
        await self._drain(path)

    def _on_history_change(self, path: str) -> None:
        if self._pending is not None:
            logger.debug("Queued %r behind %r", path, self._pending)
            self._queue.append(path)
            return
        if self._task_group is None:
            msg = (
                f"History changed to {path!r} but the router is not running. "
                "Use 'async with router:' to handle back/forward navigation."
            )
            raise RouterNotRunning(msg)
        self._begin(path)
        self._task_group.start_soon(self._drain, path)

    def _begin(self, path: str) -> None:
        self._pending = path
        self._settled = anyio.Event()

    async def _drain(self, path: str) -> None:
        next_path: str | None = path
        try:
            while next_path is not None:
                self._pending = next_path
                try:
                    await self.change_path(next_path)
                except Exception:
                    logger.exception("Navigation to %r failed", next_path)
                next_path = self._queue.popleft() if self._queue else None
        finally:
            self._pending = None
            if self._settled is not None:
                self._settled.set()

    async def change_path(self, path: str) -> bool:
        """Run a single change cycle for *path*.

        Returns True if the matched route's callback ran, False when no
        route matched or a before-hook redirected. Exceptions from
        listeners, hooks and callbacks propagate.
        """
        pathname, query = self._split(path)
        match = self.pointer.match(pathname)
        if match is None:
            if self.config.log_not_found:
                logger.debug("No route matches %r", pathname)
            for listener in list(self._not_found_listeners):
                await invoke(listener, pathname)
            return False

        name = self._names_by_template.get(match.template)
        if name is None:
            raise RouteNotFound(match.template)
        route = self._routes[name]
        logger.debug("Matched %r -> %r %r", pathname, route.name, match.params)

        for listener in list(self._listeners):
            await invoke(listener, route.name, match.params, query)

        if route.on_before is not None:
            transition = Transition(
                name=route.name,
                path=pathname,
                template=match.template,
                params=match.params,
                query=query,
            )
            if await self.execute_on_before(route, transition):
                return False

        await invoke(route.callback, route.name, match.params, query)
        return True

    async def execute_on_before(self, route: NamedRoute, transition: Transition) -> bool:
        """Run *route*'s before-hook. Returns True if it redirected.

        The hook receives ``(transition, replace, push)``. Calling either
        handle records the target in history and cancels the current
        callback; calling one a second time raises
        ``MultipleRedirectError`` and the second target is never reached.
        The redirect target is navigated to before the outer
        ``on_change_path`` returns.
        """
        if route.on_before is None:
            return False

        targets: list[str] = []

        def _handle(record: Callable[[str], None]) -> RedirectHandle:
            def redirect(
                name: str,
                params: Mapping[str, object] | None = None,
                query: Mapping[str, object] | None = None,
            ) -> None:
                if targets:
                    raise MultipleRedirectError(route.name)
                target = self.resolve(name, params, query)
                targets.append(target)
                record(target)
                logger.debug("Before-hook of %r redirected to %r", route.name, target)

            return redirect

        try:
            await invoke(
                route.on_before,
                transition,
                _handle(self._history.replace),
                _handle(self._history.push),
            )
        except Exception:
            if targets:
                await self.on_change_path(targets[0])
            raise

        if targets:
            await self.on_change_path(targets[0])
            return True
        return False

    def _split(self, path: str) -> tuple[str, QueryParams]:
        path = path.split("#", 1)[0]
        pathname, _, query_string = path.partition("?")
        query = QueryParams(query_string, keep_blank_values=self.config.keep_blank_values)
        return sanitize(pathname), query
