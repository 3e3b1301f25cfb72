"""History adapters — the capability set the Router navigates through.

``HistoryAdapter`` is a structural protocol; ``MemoryHistory`` is the
in-memory implementation used for tests and server-side rendering.
"""

from tern.history.base import HistoryAdapter
from tern.history.memory import MemoryHistory

__all__ = ["HistoryAdapter", "MemoryHistory"]
