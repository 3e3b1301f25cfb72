"""In-memory history stack.

Behaves like the browser History API: ``push`` and ``replace`` update the
stack silently, while ``back``/``forward``/``go`` move through it and
notify listeners, as a ``popstate`` would.
"""

import logging

from tern._internal.types import HistoryListener, Unsubscribe
from tern.errors import HistoryError

logger = logging.getLogger("tern.history")


class MemoryHistory:
    """A list of paths and a cursor into it.

    Usage::

        history = MemoryHistory("/books/1")
        history.push("/books/2")
        history.back()             # listeners receive "/books/1"
        history.entries            # ["/books/1", "/books/2"]
    """

    __slots__ = ("_entries", "_index", "_listeners")

    def __init__(self, initial_path: str = "/") -> None:
        self._entries: list[str] = [initial_path]
        self._index = 0
        self._listeners: list[HistoryListener] = []

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def index(self) -> int:
        return self._index

    def get_current_path(self) -> str:
        return self._entries[self._index]

    def listen(self, on_change: HistoryListener) -> Unsubscribe:
        self._listeners.append(on_change)

        def unsubscribe() -> None:
            if on_change in self._listeners:
                self._listeners.remove(on_change)

        return unsubscribe

    def push(self, path: str) -> None:
        """Add *path* after the current entry, dropping any forward entries."""
        del self._entries[self._index + 1 :]
        self._entries.append(path)
        self._index += 1
        logger.debug("push %s", path)

    def replace(self, path: str) -> None:
        self._entries[self._index] = path
        logger.debug("replace %s", path)

    def go(self, delta: int) -> None:
        """Move *delta* entries through the stack and notify listeners.

        Raises ``HistoryError`` if the target is outside the stack. Every
        listener is called even if an earlier one raises; the first error
        is re-raised afterwards and the cursor returns to where it was.
        """
        target = self._index + delta
        if not 0 <= target < len(self._entries):
            msg = f"Cannot go {delta:+d} from entry {self._index} of {len(self._entries)}"
            raise HistoryError(msg)
        previous = self._index
        self._index = target
        path = self._entries[target]
        logger.debug("go %+d -> %s", delta, path)

        error: Exception | None = None
        for listener in list(self._listeners):
            try:
                listener(path)
            except Exception as exc:
                if error is None:
                    error = exc
                else:
                    logger.debug("Listener also failed for %s: %r", path, exc)
        if error is not None:
            self._index = previous
            raise error

    def back(self) -> None:
        self.go(-1)

    def forward(self) -> None:
        self.go(1)
