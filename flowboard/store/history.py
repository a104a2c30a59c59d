"""Undo/redo over graph snapshots.

history always holds at least one entry (the initial empty graph); future
holds the snapshots available for redo, head first.
"""

from collections.abc import Callable

from flowboard.models.graph import GraphSnapshot


class HistoryManager:
    """Reversible edit history for a graph store.

    Args:
        snapshot: returns a deep copy of the live graph
        restore: replaces the live graph with a snapshot
    """

    def __init__(
        self,
        snapshot: Callable[[], GraphSnapshot],
        restore: Callable[[GraphSnapshot], None],
    ) -> None:
        self._snapshot = snapshot
        self._restore = restore
        self.history: list[GraphSnapshot] = [GraphSnapshot()]
        self.future: list[GraphSnapshot] = []

    @property
    def can_undo(self) -> bool:
        return len(self.history) > 1

    @property
    def can_redo(self) -> bool:
        return bool(self.future)

    def commit(self) -> None:
        """Record the live graph after a structural edit."""
        self.history.append(self._snapshot())
        self.future.clear()

    def undo(self) -> bool:
        """Step back one commit. Returns False when there is nothing to undo."""
        if not self.can_undo:
            return False
        self.future.insert(0, self._snapshot())
        self.history.pop()
        self._restore(self.history[-1])
        return True

    def redo(self) -> bool:
        """Re-apply the most recently undone state."""
        if not self.can_redo:
            return False
        target = self.future.pop(0)
        self.history.append(self._snapshot())
        self._restore(target)
        return True
