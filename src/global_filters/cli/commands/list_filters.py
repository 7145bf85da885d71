"""List command - show the global filters of a document."""

from __future__ import annotations

import json
from typing import Any

from rich.markup import escape
from rich.table import Table as RichTable

from global_filters.cli.common import (
    DocumentArg,
    JsonFlag,
    VerboseOption,
    console,
    open_workbook,
    setup_logging,
)


def list_filters(
    document: DocumentArg,
    json_output: JsonFlag = False,
    verbose: VerboseOption = 0,
) -> None:
    """List the global filters of a document, in order.

    Examples:

        global-filters list dashboard.json

        global-filters list dashboard.yaml --json
    """
    setup_logging(verbose)
    workbook = open_workbook(document)
    data: dict[str, Any] = {}
    workbook.store.export_data(data)

    if json_output:
        console.print(
            json.dumps(data["globalFilters"], indent=2, ensure_ascii=False),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        return

    filters = workbook.store.get_global_filters()
    if not filters:
        console.print("[dim]No global filters[/dim]")
        return

    table = RichTable(title=f"Global filters ({len(filters)})")
    table.add_column("#", justify="right")
    table.add_column("ID")
    table.add_column("Label", style="bold")
    table.add_column("Type")
    table.add_column("Default")

    for position, global_filter in enumerate(filters):
        kind = global_filter.type.value
        if global_filter.range_type:
            kind = f"{kind} ({global_filter.range_type.value})"
        elif global_filter.model_name:
            kind = f"{kind} ({global_filter.model_name})"
        default = (
            "" if global_filter.default_value is None else json.dumps(global_filter.default_value)
        )
        table.add_row(
            str(position),
            escape(global_filter.id),
            escape(global_filter.label),
            kind,
            escape(default),
        )

    console.print(table)
