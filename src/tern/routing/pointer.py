"""Route registry with first-registered-wins matching.

Templates are compiled into ``Route`` objects when added. Matching walks
them in insertion order and stops at the first route whose ``parse``
succeeds; overlapping templates are never ranked by specificity.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from tern.config import DEFAULT_PATTERN
from tern.errors import RouteNotFound
from tern.routing.route import Route, sanitize


@dataclass(frozen=True, slots=True)
class PointerMatch:
    """Result of a successful match."""

    route: Route
    params: dict[str, str]
    path: str

    @property
    def template(self) -> str:
        """The sanitized template that matched (e.g. ``/users/{id:[a-z]+}``)."""
        return self.route.original


class Pointer:
    """Ordered collection of compiled routes keyed by template.

    Usage::

        pointer = Pointer()
        pointer.add("/books/{id:[0-9]+}")
        pointer.add(Route("/books/new"))
        match = pointer.match("/books/100")
        match.params  # {"id": "100"}
    """

    __slots__ = ("_default_pattern", "_routes")

    def __init__(
        self, routes: Iterable[str | Route] = (), *, default_pattern: str = DEFAULT_PATTERN
    ) -> None:
        self._routes: dict[str, Route] = {}
        self._default_pattern = default_pattern
        for route in routes:
            self.add(route)

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes.values())

    def __contains__(self, template: object) -> bool:
        return isinstance(template, str) and sanitize(template) in self._routes

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in match priority order."""
        return list(self._routes.values())

    def add(self, route: str | Route) -> Route:
        """Register a template or a precompiled route.

        Re-adding a template replaces the stored route but keeps its
        original match priority.
        """
        if isinstance(route, str):
            route = Route(route, self._default_pattern)
        self._routes[route.original] = route
        return route

    def get(self, template: str) -> Route | None:
        return self._routes.get(sanitize(template))

    def get_or_fail(self, template: str) -> Route:
        """Return the route for *template*. Raises ``RouteNotFound`` if missing."""
        route = self.get(template)
        if route is None:
            raise RouteNotFound(template)
        return route

    def resolve(self, template: str, params: Mapping[str, object] | None = None) -> str | None:
        """Resolve *params* into a path using the route stored under *template*.

        Raises ``RouteNotFound`` for an unknown template; returns ``None``
        if the params do not satisfy it.
        """
        return self.get_or_fail(template).resolve(params)

    def match(self, path: str) -> PointerMatch | None:
        """Return the first registered route that parses *path*, or ``None``."""
        for route in self._routes.values():
            params = route.parse(path)
            if params is not None:
                return PointerMatch(route=route, params=params, path=path)
        return None

    def matches(self, path: str) -> list[PointerMatch]:
        """Return every route that parses *path*, in match priority order."""
        results: list[PointerMatch] = []
        for route in self._routes.values():
            params = route.parse(path)
            if params is not None:
                results.append(PointerMatch(route=route, params=params, path=path))
        return results

    def test(self, path: str) -> bool:
        return self.match(path) is not None

    def clear(self) -> None:
        self._routes.clear()
