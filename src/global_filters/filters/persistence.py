"""Loading and saving document files.

A document file holds the sheets of a document and its global filters:

    sheets:
      - id: sheet1
        cells:
          A1: '=FILTER.VALUE("Year")'
    globalFilters:
      - id: f1
        label: Year
        type: date
        rangeType: relative
        defaultValue: last_month

Files ending in .yaml/.yml are read as YAML, anything else as JSON. The
filter list is imported and exported verbatim, in order.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from global_filters.core.config import Settings, get_settings
from global_filters.core.logging import get_logger
from global_filters.core.models.base import Result
from global_filters.document.cells import InMemoryDocument
from global_filters.filters.commands import AddGlobalFilter
from global_filters.filters.localization import get_translator
from global_filters.filters.matching import MatcherRegistry
from global_filters.filters.models import GlobalFilter
from global_filters.filters.store import GlobalFilterStore

logger = get_logger(__name__)

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class DocumentLoadError(Exception):
    """Error loading a document file."""

    pass


def _is_yaml(path: Path) -> bool:
    return path.suffix.lower() in YAML_SUFFIXES


def read_document(path: Path | str) -> dict[str, Any]:
    """Read the raw content of a document file.

    Raises:
        DocumentLoadError: If the file is missing or not valid JSON/YAML
    """
    path = Path(path)
    if not path.exists():
        raise DocumentLoadError(f"Document file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) if _is_yaml(path) else json.load(f)
    except yaml.YAMLError as e:
        raise DocumentLoadError(f"Invalid YAML in {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DocumentLoadError(f"Invalid JSON in {path}: {e}") from e

    if raw is None:
        logger.warning("empty_document_file", path=str(path))
        return {}
    if not isinstance(raw, dict):
        raise DocumentLoadError(f"Expected a mapping at the top of {path}")
    return raw


def write_document(path: Path | str, data: dict[str, Any]) -> None:
    """Write a document file, as YAML or JSON depending on the suffix."""
    path = Path(path)
    with open(path, "w", encoding="utf-8") as f:
        if _is_yaml(path):
            yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
        else:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
    logger.info("document_written", path=str(path))


@dataclass
class Workbook:
    """A document and the global filter store attached to it."""

    document: InMemoryDocument
    store: GlobalFilterStore

    @classmethod
    def from_data(
        cls,
        data: dict[str, Any],
        settings: Settings | None = None,
        registry: MatcherRegistry | None = None,
    ) -> "Workbook":
        """Build a workbook from the raw content of a document file.

        Raises:
            DocumentLoadError: If sheets or filters do not validate
        """
        settings = settings or get_settings()
        try:
            document = InMemoryDocument.from_data(data)
            store = GlobalFilterStore(
                document=document,
                registry=registry,
                localize=get_translator(settings),
                formula_function=settings.formula_function,
            )
            store.import_data(data)
        except ValidationError as e:
            raise DocumentLoadError(f"Invalid global filter: {e}") from e
        except (KeyError, ValueError) as e:
            raise DocumentLoadError(f"Invalid document content: {e}") from e
        return cls(document=document, store=store)

    def to_data(self) -> dict[str, Any]:
        data = self.document.to_data()
        self.store.export_data(data)
        return data


def load_workbook(
    path: Path | str,
    settings: Settings | None = None,
    registry: MatcherRegistry | None = None,
) -> Workbook:
    """Load a document file into a Workbook.

    Raises:
        DocumentLoadError: If the file cannot be read or does not validate
    """
    workbook = Workbook.from_data(read_document(path), settings=settings, registry=registry)
    logger.info(
        "document_loaded",
        path=str(path),
        sheets=len(workbook.document.get_sheet_ids()),
        filters=len(workbook.store),
    )
    return workbook


def save_workbook(path: Path | str, workbook: Workbook) -> None:
    write_document(path, workbook.to_data())


def verify_filters(
    data: dict[str, Any], settings: Settings | None = None
) -> Result[list[GlobalFilter]]:
    """Replay a persisted filter list through a fresh store.

    Import does not validate records, so a hand-edited file may hold
    duplicated labels or default values that do not fit their type. Each
    record is added in order; refused records are reported as warnings.

    Returns:
        Result with the accepted filters, failed if a record does not
        match the GlobalFilter schema
    """
    settings = settings or get_settings()
    store = GlobalFilterStore(localize=get_translator(settings))
    warnings: list[str] = []

    for position, record in enumerate(data.get("globalFilters") or []):
        try:
            global_filter = GlobalFilter.model_validate(record)
        except ValidationError as e:
            return Result.fail(f"Record {position} is not a valid global filter: {e}")

        result = store.dispatch(AddGlobalFilter(filter=global_filter))
        if not result.is_successful:
            warnings.append(f"{global_filter.id} ({global_filter.label}): {result.reason.value}")

    return Result.ok(store.get_global_filters(), warnings=warnings)
