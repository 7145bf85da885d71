"""Host document collaborators: versioned state and cells."""

from global_filters.document.cells import (
    Cell,
    CellPosition,
    Document,
    InMemoryDocument,
    UpdateCell,
    to_cartesian,
    to_xc,
)
from global_filters.document.history import SnapshotHistory, StateHistory

__all__ = [
    # History
    "SnapshotHistory",
    "StateHistory",
    # Cells
    "Cell",
    "CellPosition",
    "Document",
    "InMemoryDocument",
    "UpdateCell",
    "to_cartesian",
    "to_xc",
]
