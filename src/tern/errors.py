"""Tern exception hierarchy.

Shared across Route, Pointer, Router and the history adapters so every
module raises and catches the same types.

Match-time misses are not exceptions: ``Route.parse``, ``Route.resolve``
and ``Pointer.match`` return ``None`` so callers can try the next
candidate.
"""

from collections.abc import Mapping


class TernError(Exception):
    """Base for all tern-specific errors."""


class ConfigurationError(TernError):
    """Raised when a route table is authored incorrectly.

    Surfaced immediately, at ``Route(...)`` or ``Router.add_route()`` time.
    """


class MalformedTemplate(ConfigurationError):
    """A template could not be compiled (e.g. an unterminated ``{``)."""

    def __init__(self, template: str, offset: int, detail: str) -> None:
        self.template = template
        self.offset = offset
        self.detail = detail
        super().__init__(f"{detail} at offset {offset}: {template}")


class DuplicateParam(ConfigurationError):
    """The same parameter name appears twice in one template."""

    def __init__(self, template: str, name: str) -> None:
        self.template = template
        self.name = name
        super().__init__(f"Found repeated param {name!r} on route {template!r}")


class DuplicateRoute(ConfigurationError):
    """A route name was registered twice on the same router."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Duplicate route name {name!r}. Route names must be unique.")


class RouteNotFound(TernError, LookupError):
    """No route is registered under the given name or template."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Could not find route {name!r}")


class ResolveError(TernError):
    """Parameters did not satisfy a named route's templates while resolving."""

    def __init__(self, name: str, params: Mapping[str, object] | None) -> None:
        self.name = name
        self.params = dict(params or {})
        super().__init__(
            f"Missing or invalid params for route {name!r}: {self.params!r}"
        )


class MultipleRedirectError(TernError):
    """A before-hook called ``push``/``replace`` more than once."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            "You can only execute `push` or `replace` once while inside "
            f"`on_before` (route {name!r})"
        )


class RouterNotRunning(TernError, RuntimeError):
    """A history change arrived while the router has no task group to run it in.

    Use the router as an async context manager::

        async with Router(history) as router:
            ...
    """


class HistoryError(TernError):
    """Misuse of a history adapter, such as going back past the first entry."""
