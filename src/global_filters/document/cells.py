"""Cells of the host document.

The filter core only needs a narrow view of the document it lives in: the
sheet ids, the cells of each sheet, where a cell sits, and a way to update
one cell. ``Document`` is that view; ``InMemoryDocument`` implements it on
top of a StateHistory so that cell updates share undo steps with filter
edits.
"""

import re
from collections.abc import Mapping
from typing import Any, Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field

from global_filters.core.models.base import CommandResult
from global_filters.document.history import SnapshotHistory, StateHistory

_XC_PATTERN = re.compile(r"^\$?([A-Za-z]+)\$?(\d+)$")


def number_to_letters(n: int) -> str:
    """Zero-based column index to letters (0 -> A, 26 -> AA)."""
    if n < 0:
        raise ValueError(f"Column index must be >= 0, got {n}")
    letters = ""
    n += 1
    while n:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def letters_to_number(letters: str) -> int:
    """Column letters to zero-based index (A -> 0, AA -> 26)."""
    n = 0
    for char in letters.upper():
        n = n * 26 + (ord(char) - ord("A") + 1)
    return n - 1


def to_xc(col: int, row: int) -> str:
    """Convert zero-based (col, row) to an A1 reference."""
    return f"{number_to_letters(col)}{row + 1}"


def to_cartesian(xc: str) -> tuple[int, int]:
    """Convert an A1 reference to zero-based (col, row)."""
    match = _XC_PATTERN.match(xc.strip())
    if not match:
        raise ValueError(f"Invalid cell reference: {xc!r}")
    letters, digits = match.groups()
    return letters_to_number(letters), int(digits) - 1


class CellPosition(BaseModel):
    """Zero-based position of a cell within its sheet."""

    model_config = ConfigDict(frozen=True)

    col: int
    row: int

    @property
    def xc(self) -> str:
        return to_xc(self.col, self.row)


class Cell(BaseModel):
    """A cell as seen by the filter core."""

    model_config = ConfigDict(frozen=True)

    id: str
    content: str

    @property
    def is_formula(self) -> bool:
        return self.content.startswith("=")


class UpdateCell(BaseModel):
    """Command replacing the content of a single cell."""

    type: Literal["UPDATE_CELL"] = "UPDATE_CELL"
    sheet_id: str = Field(..., description="Sheet holding the cell")
    col: int
    row: int
    content: str = Field(..., description="New content, empty to clear the cell")


class Document(Protocol):
    """Cell accessor and update entry point of the host document."""

    history: StateHistory

    def get_sheet_ids(self) -> list[str]: ...

    def get_cells(self, sheet_id: str) -> dict[str, Cell]: ...

    def get_cell_position(self, cell_id: str) -> CellPosition: ...

    def dispatch(self, command: UpdateCell) -> CommandResult: ...


class InMemoryDocument:
    """Document made of sheets of cells, stored as history slices.

    Each sheet is one slice (``cells/<sheet_id>``) holding a mapping from
    (col, row) to content. Slices are replaced on every update, never
    mutated.
    """

    def __init__(self, history: StateHistory | None = None):
        self.history: StateHistory = history if history is not None else SnapshotHistory()
        self._sheets: dict[str, str] = {}  # id -> name

    @classmethod
    def from_data(
        cls, data: Mapping[str, Any], history: StateHistory | None = None
    ) -> "InMemoryDocument":
        """Build a document from its persisted form.

        Args:
            data: ``{"sheets": [{"id": ..., "name": ..., "cells": {"A1": ...}}]}``
            history: History to store cells in (a new one if omitted)
        """
        document = cls(history)
        for sheet in data.get("sheets", []):
            cells = {
                to_cartesian(xc): str(content) for xc, content in sheet.get("cells", {}).items()
            }
            document.add_sheet(sheet["id"], name=sheet.get("name"), cells=cells)
        return document

    def to_data(self) -> dict[str, Any]:
        """Serialize sheets and cells to the persisted form."""
        return {
            "sheets": [
                {
                    "id": sheet_id,
                    "name": name,
                    "cells": {
                        to_xc(col, row): content
                        for (col, row), content in self._contents(sheet_id).items()
                    },
                }
                for sheet_id, name in self._sheets.items()
            ]
        }

    def add_sheet(
        self,
        sheet_id: str,
        name: str | None = None,
        cells: Mapping[tuple[int, int], str] | None = None,
    ) -> None:
        """Register a sheet with optional initial contents (not undoable)."""
        if sheet_id in self._sheets:
            raise ValueError(f"Sheet '{sheet_id}' already exists")
        self._sheets[sheet_id] = name or sheet_id
        self.history.load(self._key(sheet_id), dict(cells or {}))

    def get_sheet_ids(self) -> list[str]:
        return list(self._sheets)

    def get_cells(self, sheet_id: str) -> dict[str, Cell]:
        return {
            self._cell_id(sheet_id, col, row): Cell(
                id=self._cell_id(sheet_id, col, row), content=content
            )
            for (col, row), content in self._contents(sheet_id).items()
        }

    def get_cell_position(self, cell_id: str) -> CellPosition:
        _, xc = cell_id.rsplit("!", 1)
        col, row = to_cartesian(xc)
        return CellPosition(col=col, row=row)

    def get_cell_content(self, sheet_id: str, xc: str) -> str:
        """Content of a cell by A1 reference, "" when empty."""
        return self._contents(sheet_id).get(to_cartesian(xc), "")

    def set_cell_content(self, sheet_id: str, xc: str, content: str) -> CommandResult:
        """Convenience wrapper dispatching UPDATE_CELL for an A1 reference."""
        col, row = to_cartesian(xc)
        return self.dispatch(UpdateCell(sheet_id=sheet_id, col=col, row=row, content=content))

    def dispatch(self, command: UpdateCell) -> CommandResult:
        if command.sheet_id not in self._sheets:
            return CommandResult.INVALID_SHEET_ID

        contents = dict(self._contents(command.sheet_id))
        if command.content:
            contents[(command.col, command.row)] = command.content
        else:
            contents.pop((command.col, command.row), None)
        self.history.commit(self._key(command.sheet_id), contents)
        return CommandResult.SUCCESS

    def _contents(self, sheet_id: str) -> Mapping[tuple[int, int], str]:
        return self.history.get(self._key(sheet_id), {})

    @staticmethod
    def _key(sheet_id: str) -> str:
        return f"cells/{sheet_id}"

    @staticmethod
    def _cell_id(sheet_id: str, col: int, row: int) -> str:
        return f"{sheet_id}!{to_xc(col, row)}"
