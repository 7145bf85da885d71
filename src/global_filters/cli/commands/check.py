"""Check command - validate the global filters stored in a document file."""

from __future__ import annotations

import typer
from rich.markup import escape

from global_filters.cli.common import DocumentArg, VerboseOption, console, setup_logging
from global_filters.filters.persistence import DocumentLoadError, read_document, verify_filters


def check(
    document: DocumentArg,
    verbose: VerboseOption = 0,
) -> None:
    """Check that every stored filter would be accepted by the store.

    Replays the filters in order and reports duplicated ids or labels and
    default values that do not fit the filter type. Exits with status 1 if
    any filter is refused.

    Examples:

        global-filters check dashboard.json
    """
    setup_logging(verbose)
    try:
        data = read_document(document)
    except DocumentLoadError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    result = verify_filters(data)
    if not result.success:
        console.print(f"[red]{escape(result.error or 'Invalid document')}[/red]")
        raise typer.Exit(1)

    accepted = result.unwrap()
    if result.warnings:
        console.print(f"[yellow]{len(result.warnings)} filter(s) refused:[/yellow]")
        for warning in result.warnings:
            console.print(f"  - {escape(warning)}")
        raise typer.Exit(1)

    console.print(f"[green]OK[/green] {len(accepted)} global filter(s)")
