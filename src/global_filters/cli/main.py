"""Main CLI application entry point."""

from __future__ import annotations

import typer

from global_filters.cli.commands import check, list_filters, rename

app = typer.Typer(
    name="global-filters",
    help="Inspect and edit the global filters of spreadsheet documents.",
    no_args_is_help=True,
)

# Register commands
app.command(name="list")(list_filters.list_filters)
app.command()(check.check)
app.command()(rename.rename)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
