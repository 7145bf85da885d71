"""Shared CLI utilities and constants."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from global_filters.core.config import get_settings
from global_filters.core.logging import configure_logging

if TYPE_CHECKING:
    from global_filters.filters.persistence import Workbook

# Load .env file from current directory (GLOBAL_FILTERS_* settings)
load_dotenv()

# Shared console instance
console = Console()

DocumentArg = Annotated[
    Path,
    typer.Argument(
        help="Document file (JSON, or YAML with a .yaml/.yml suffix)",
        exists=True,
        dir_okay=False,
        file_okay=True,
        resolve_path=True,
    ),
]

JsonFlag = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Output as JSON for scripting",
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-v=INFO, -vv=DEBUG)",
    ),
]


def setup_logging(verbosity: int = 0) -> None:
    """Configure structured logging from settings and the verbosity level.

    ``GLOBAL_FILTERS_LOG_FORMAT`` selects the renderer. Without ``-v`` the
    level is ``GLOBAL_FILTERS_LOG_LEVEL`` when set, WARNING otherwise.

    Args:
        verbosity: 0=settings or WARNING, 1=INFO, 2+=DEBUG
    """
    settings = get_settings()
    if verbosity >= 2:
        level = "DEBUG"
    elif verbosity >= 1:
        level = "INFO"
    elif "log_level" in settings.model_fields_set:
        level = settings.log_level
    else:
        level = "WARNING"

    configure_logging(
        log_level=level,
        log_format=settings.log_format,
        show_timestamps=verbosity >= 1 or settings.log_format == "json",
        color=settings.log_format == "console",
    )


def open_workbook(path: Path) -> Workbook:
    """Load a document file, exiting with an error message if it is invalid."""
    from global_filters.filters.localization import TranslationLoadError
    from global_filters.filters.persistence import DocumentLoadError, load_workbook

    try:
        return load_workbook(path)
    except (DocumentLoadError, TranslationLoadError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1) from e
