"""Tern — route templates and single-flight navigation for client-side apps.

Compiles path templates such as ``/users/{id:[0-9]+}`` into matchers and
resolvers, and serializes navigation through cancellable before-hooks.

Basic usage::

    from tern import MemoryHistory, Router

    router = Router(MemoryHistory("/books/100"))

    @router.route("/books/{id:[0-9]+}", name="book")
    def show_book(name, params, query):
        print(params["id"])

    async with router:
        await router.push_state("book", {"id": "7"})
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "DuplicateParam",
    "DuplicateRoute",
    "HistoryAdapter",
    "HistoryError",
    "MalformedTemplate",
    "MemoryHistory",
    "MultipleRedirectError",
    "NamedRoute",
    "Pointer",
    "PointerMatch",
    "QueryParams",
    "ResolveError",
    "Route",
    "RouteNotFound",
    "Router",
    "RouterConfig",
    "RouterNotRunning",
    "TernError",
    "Transition",
    "sanitize",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import tern`` fast while providing a clean top-level API.
    """
    if name in ("Route", "sanitize"):
        from tern.routing import route as _route

        return getattr(_route, name)

    if name in ("Pointer", "PointerMatch"):
        from tern.routing import pointer as _pointer

        return getattr(_pointer, name)

    if name in ("Router", "NamedRoute", "Transition"):
        from tern.navigation import router as _router

        return getattr(_router, name)

    if name in ("HistoryAdapter", "MemoryHistory"):
        from tern import history as _history

        return getattr(_history, name)

    if name == "QueryParams":
        from tern.http.query import QueryParams

        return QueryParams

    if name == "RouterConfig":
        from tern.config import RouterConfig

        return RouterConfig

    if name in (
        "ConfigurationError",
        "DuplicateParam",
        "DuplicateRoute",
        "HistoryError",
        "MalformedTemplate",
        "MultipleRedirectError",
        "ResolveError",
        "RouteNotFound",
        "RouterNotRunning",
        "TernError",
    ):
        from tern import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
