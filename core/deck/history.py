"""Undo/redo history built on before/after snapshots."""

import logging
from collections import deque
from typing import Callable, Protocol

from core.deck.state import Snapshot

logger = logging.getLogger(__name__)


class Restorable(Protocol):
    """Anything whose whole state can be captured and restored."""

    def snapshot(self) -> Snapshot: ...

    def restore(self, snapshot: Snapshot) -> None: ...


class SnapshotCommand:
    """
    A reversible transition recorded as a pair of snapshots.

    The command never reaches into its target: it only hands one of its two
    snapshots back through ``restore``.
    """

    def __init__(self, target: Restorable, before: Snapshot, after: Snapshot) -> None:
        self._target = target
        self.before = before
        self.after = after

    def execute(self) -> None:
        """Re-apply the transition."""
        self._target.restore(self.after)

    def undo(self) -> None:
        """Revert to the state before the transition."""
        self._target.restore(self.before)

    def __repr__(self) -> str:
        return (
            f"SnapshotCommand(before={self.before.total_cards} cards, "
            f"after={self.after.total_cards} cards)"
        )


class CommandHistory:
    """
    Undo and redo stacks of snapshot commands.

    History is unbounded unless ``max_depth`` is given, in which case the
    oldest undo entries are dropped once the cap is exceeded.
    """

    def __init__(self, target: Restorable, max_depth: int | None = None) -> None:
        """
        Initialize an empty history.

        Args:
            target: Object whose state the commands capture and restore
            max_depth: Maximum number of undoable commands, None for unbounded
        """
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth must be at least 1")

        self._target = target
        self._max_depth = max_depth
        self._undo_stack: deque[SnapshotCommand] = deque(maxlen=max_depth)
        self._redo_stack: list[SnapshotCommand] = []

    def run(self, action: Callable[[], None]) -> SnapshotCommand:
        """
        Run a mutation and record it as an undoable command.

        Args:
            action: Callable performing exactly one mutation of the target

        Returns:
            The recorded command
        """
        before = self._target.snapshot()
        action()
        after = self._target.snapshot()

        command = SnapshotCommand(self._target, before, after)
        self._undo_stack.append(command)
        self._redo_stack.clear()
        return command

    def undo(self) -> None:
        """Undo the most recent command, if any."""
        if not self._undo_stack:
            return
        command = self._undo_stack.pop()
        command.undo()
        self._redo_stack.append(command)
        logger.debug("Undo: %d undoable, %d redoable", len(self._undo_stack), len(self._redo_stack))

    def redo(self) -> None:
        """Redo the most recently undone command, if any."""
        if not self._redo_stack:
            return
        command = self._redo_stack.pop()
        command.execute()
        self._undo_stack.append(command)
        logger.debug("Redo: %d undoable, %d redoable", len(self._undo_stack), len(self._redo_stack))

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def clear(self) -> None:
        """Drop both stacks."""
        self._undo_stack.clear()
        self._redo_stack.clear()

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    @property
    def max_depth(self) -> int | None:
        return self._max_depth
