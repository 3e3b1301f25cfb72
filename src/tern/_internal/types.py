"""Shared type aliases used across tern modules."""

from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

# Route callback — receives (name, params, query); may be sync or async
RouteCallback: TypeAlias = Callable[[str, dict[str, str], Mapping[str, str]], Any]

# Path-change listener — same triple as RouteCallback, called before dispatch
ChangeListener: TypeAlias = Callable[[str, dict[str, str], Mapping[str, str]], Any]

# Not-found listener — receives the unmatched pathname
NotFoundListener: TypeAlias = Callable[[str], Any]

# Redirect handle given to before-hooks — (name, params?, query?) -> None
RedirectHandle: TypeAlias = Callable[..., None]

# Before-hook — receives (transition, replace, push); may be sync or async
BeforeHook: TypeAlias = Callable[[Any, RedirectHandle, RedirectHandle], Any]

# History listener — receives the new path
HistoryListener: TypeAlias = Callable[[str], None]

# Returned by HistoryAdapter.listen(); call it to stop listening
Unsubscribe: TypeAlias = Callable[[], None]
