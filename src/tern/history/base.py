"""HistoryAdapter protocol — the only view of history the Router has.

A structural protocol so the Router can drive a browser bridge, an
in-memory stack or a server-side stub without coupling to any of them.
"""

from typing import Protocol, runtime_checkable

from tern._internal.types import HistoryListener, Unsubscribe


@runtime_checkable
class HistoryAdapter(Protocol):
    """Source of the current path and sink for path changes.

    ``listen`` callbacks fire for changes the Router did not initiate
    (back/forward traversal). ``push`` and ``replace`` only record the new
    path; the Router navigates to it itself.
    """

    def get_current_path(self) -> str: ...
    def listen(self, on_change: HistoryListener) -> Unsubscribe: ...
    def push(self, path: str) -> None: ...
    def replace(self, path: str) -> None: ...
