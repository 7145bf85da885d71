"""Rename command - relabel a global filter and rewrite the formulas using it."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from global_filters.cli.common import (
    DocumentArg,
    VerboseOption,
    console,
    open_workbook,
    setup_logging,
)
from global_filters.document.cells import to_xc
from global_filters.filters.commands import EditGlobalFilter
from global_filters.filters.persistence import save_workbook


def rename(
    document: DocumentArg,
    old_label: Annotated[str, typer.Argument(help="Current label of the filter")],
    new_label: Annotated[str, typer.Argument(help="New label")],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the result here instead of overwriting the document",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    verbose: VerboseOption = 0,
) -> None:
    """Rename a global filter and update every formula referencing it.

    Formula rewrites are best-effort: cells the document refuses to update
    are listed and the command exits with status 2, the other rewrites are
    kept.

    Examples:

        global-filters rename dashboard.json "Year" "Fiscal year"

        global-filters rename dashboard.yaml "Year" "Fiscal year" -o renamed.yaml
    """
    setup_logging(verbose)
    workbook = open_workbook(document)

    global_filter = workbook.store.get_global_filter_by_label(old_label)
    if global_filter is None:
        console.print(f"[red]No global filter labelled '{escape(old_label)}'[/red]")
        raise typer.Exit(1)

    result = workbook.store.dispatch(EditGlobalFilter(filter=global_filter.with_label(new_label)))
    if not result.is_successful:
        console.print(f"[red]Rename refused: {result.reason.value}[/red]")
        raise typer.Exit(1)

    save_workbook(output or document, workbook)
    console.print(f"Renamed '{escape(old_label)}' to '{escape(new_label)}'")

    report = result.rewrite
    if report is None:
        return
    for cell in report.updated:
        console.print(f"  [green]updated[/green] {cell.sheet_id}!{to_xc(cell.col, cell.row)}")
    for cell in report.rejected:
        position = f"{cell.sheet_id}!{to_xc(cell.col, cell.row)}"
        console.print(f"  [red]refused[/red] {position} ({cell.reason.value})")
    if not report.is_complete:
        raise typer.Exit(2)
