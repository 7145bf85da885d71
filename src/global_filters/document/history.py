"""Versioned state slices with undo/redo.

The filter store never mutates its list in place: every change is a commit
of a new immutable value for a named slice. Commits made inside a
``transaction()`` form a single undo step, which is how a label edit and the
formula rewrites it triggers are undone together.

Usage:
    history = SnapshotHistory()
    history.load("global_filters", ())          # initial state, not undoable

    with history.transaction():
        history.commit("global_filters", (f1,))
        history.commit("cells/sheet1", {...})

    history.undo()   # reverts both commits
    history.redo()
"""

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass
from typing import Any, Protocol

from global_filters.core.logging import get_logger

logger = get_logger(__name__)

_MISSING = object()


class StateHistory(Protocol):
    """Transactional state container the core commits through."""

    def get(self, key: str, default: Any = None) -> Any:
        """Current value of a slice."""
        ...

    def commit(self, key: str, value: Any) -> None:
        """Replace a slice with a new value, recording it for undo."""
        ...

    def load(self, key: str, value: Any) -> None:
        """Set a slice without recording an undo step (imports)."""
        ...

    def transaction(self) -> AbstractContextManager[None]:
        """Group every commit made inside into one undo step."""
        ...


@dataclass(frozen=True)
class _Change:
    key: str
    before: Any
    after: Any


class SnapshotHistory:
    """In-memory StateHistory with linear undo/redo."""

    def __init__(self) -> None:
        self._state: dict[str, Any] = {}
        self._undo_stack: list[list[_Change]] = []
        self._redo_stack: list[list[_Change]] = []
        self._pending: list[_Change] | None = None
        self._version = 0

    @property
    def version(self) -> int:
        """Incremented on every commit, undo and redo."""
        return self._version

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def get(self, key: str, default: Any = None) -> Any:
        return self._state.get(key, default)

    def load(self, key: str, value: Any) -> None:
        self._state[key] = value

    def commit(self, key: str, value: Any) -> None:
        change = _Change(key=key, before=self._state.get(key, _MISSING), after=value)
        self._state[key] = value
        self._version += 1
        if self._pending is not None:
            self._pending.append(change)
        else:
            self._record([change])

    @contextmanager
    def transaction(self) -> Iterator[None]:
        # Nested transactions join the outermost one
        if self._pending is not None:
            yield
            return

        self._pending = []
        try:
            yield
        finally:
            step, self._pending = self._pending, None
            # Commits already made stay recorded even if the block raised
            if step:
                self._record(step)

    def undo(self) -> bool:
        """Revert the last step. Returns False when there is nothing to undo."""
        if not self._undo_stack:
            return False
        step = self._undo_stack.pop()
        for change in reversed(step):
            self._restore(change.key, change.before)
        self._redo_stack.append(step)
        self._version += 1
        logger.debug("history_undo", changes=len(step))
        return True

    def redo(self) -> bool:
        """Re-apply the last undone step. Returns False when there is nothing to redo."""
        if not self._redo_stack:
            return False
        step = self._redo_stack.pop()
        for change in step:
            self._restore(change.key, change.after)
        self._undo_stack.append(step)
        self._version += 1
        logger.debug("history_redo", changes=len(step))
        return True

    def _record(self, step: list[_Change]) -> None:
        self._undo_stack.append(step)
        self._redo_stack.clear()

    def _restore(self, key: str, value: Any) -> None:
        if value is _MISSING:
            self._state.pop(key, None)
        else:
            self._state[key] = value
