"""Label rename propagation.

Formulas reference a global filter by label, e.g. ``=FILTER.VALUE("Year")``.
When a filter is renamed every such reference in the document is rewritten
so that formulas keep pointing at the same filter.

The rewrite is best-effort, not a transaction: cells are updated one at a
time, and if the document refuses an update the cells already rewritten are
kept. The returned RewriteReport lists both so callers can surface the gap.
"""

import re

from pydantic import BaseModel, Field

from global_filters.core.logging import get_logger
from global_filters.core.models.base import CommandResult
from global_filters.document.cells import Document, UpdateCell

logger = get_logger(__name__)


class CellRewrite(BaseModel):
    """A formula cell the rename touched."""

    sheet_id: str
    col: int
    row: int
    content: str = Field(..., description="Rewritten formula")


class RejectedCellRewrite(CellRewrite):
    """A rewrite the document refused."""

    reason: CommandResult


class RewriteReport(BaseModel):
    """Outcome of propagating one label rename."""

    old_label: str
    new_label: str
    updated: list[CellRewrite] = Field(default_factory=list)
    rejected: list[RejectedCellRewrite] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """True when every matching formula was rewritten."""
        return not self.rejected


class LabelRenamePropagator:
    """Rewrites filter-by-label references across a document."""

    def __init__(self, document: Document, function_name: str = "FILTER.VALUE"):
        self.document = document
        self.function_name = function_name

    def reference_pattern(self, label: str) -> re.Pattern[str]:
        """Pattern matching a call whose sole string argument is exactly ``label``."""
        return re.compile(
            rf'{re.escape(self.function_name)}\(\s*"{re.escape(label)}"\s*\)'
        )

    def rewrite(self, content: str, old_label: str, new_label: str) -> str:
        """Return ``content`` with references to ``old_label`` pointing at ``new_label``."""
        replacement = f'{self.function_name}("{new_label}")'
        return self.reference_pattern(old_label).sub(lambda _: replacement, content)

    def propagate(self, old_label: str, new_label: str) -> RewriteReport:
        """Rewrite every formula referencing ``old_label``.

        Only cells whose content actually changes get an UPDATE_CELL.

        Args:
            old_label: Label before the edit
            new_label: Label after the edit

        Returns:
            RewriteReport listing updated and refused cells
        """
        report = RewriteReport(old_label=old_label, new_label=new_label)

        for sheet_id in self.document.get_sheet_ids():
            for cell in self.document.get_cells(sheet_id).values():
                if not cell.is_formula:
                    continue
                new_content = self.rewrite(cell.content, old_label, new_label)
                if new_content == cell.content:
                    continue

                position = self.document.get_cell_position(cell.id)
                reason = self.document.dispatch(
                    UpdateCell(
                        sheet_id=sheet_id,
                        col=position.col,
                        row=position.row,
                        content=new_content,
                    )
                )
                if reason.is_success:
                    report.updated.append(
                        CellRewrite(
                            sheet_id=sheet_id,
                            col=position.col,
                            row=position.row,
                            content=new_content,
                        )
                    )
                else:
                    logger.warning(
                        "formula_rewrite_rejected",
                        sheet_id=sheet_id,
                        cell=position.xc,
                        reason=reason.value,
                    )
                    report.rejected.append(
                        RejectedCellRewrite(
                            sheet_id=sheet_id,
                            col=position.col,
                            row=position.row,
                            content=new_content,
                            reason=reason,
                        )
                    )

        logger.info(
            "formulas_rewritten",
            old_label=old_label,
            new_label=new_label,
            updated=len(report.updated),
            rejected=len(report.rejected),
        )
        return report
