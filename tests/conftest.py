"""Shared pytest fixtures for all tests."""

from collections.abc import Callable, Sequence
from typing import Any

import pytest

from global_filters.core.models.base import CommandResult
from global_filters.document.cells import InMemoryDocument, UpdateCell, to_xc
from global_filters.filters.commands import AddGlobalFilter
from global_filters.filters.matching import MatcherRegistry
from global_filters.filters.models import FieldMatching, GlobalFilter
from global_filters.filters.store import GlobalFilterStore


def make_filter(
    filter_id: str,
    label: str | None = None,
    filter_type: str = "text",
    **fields: Any,
) -> GlobalFilter:
    """Build a GlobalFilter with sensible defaults."""
    return GlobalFilter(id=filter_id, label=label or filter_id.upper(), type=filter_type, **fields)


class FakeMatcher:
    """FieldMatcher backed by plain dicts.

    Args:
        models: data source id -> model name
        matchings: data source id -> {filter id -> FieldMatching}
    """

    def __init__(
        self,
        models: dict[str, str],
        matchings: dict[str, dict[str, FieldMatching]] | None = None,
    ):
        self.models = models
        self.matchings = matchings or {}
        self.calls: list[tuple[str, str]] = []

    def get_ids(self) -> Sequence[str]:
        return list(self.models)

    def get_model(self, data_source_id: str) -> str:
        return self.models[data_source_id]

    def get_field_matching(self, data_source_id: str, filter_id: str) -> FieldMatching | None:
        self.calls.append((data_source_id, filter_id))
        return self.matchings.get(data_source_id, {}).get(filter_id)


class RefusingDocument(InMemoryDocument):
    """Document refusing updates of some cells, by A1 reference."""

    def __init__(self, refused: set[str], **kwargs: Any):
        super().__init__(**kwargs)
        self.refused = refused

    def dispatch(self, command: UpdateCell) -> CommandResult:
        if to_xc(command.col, command.row) in self.refused:
            return CommandResult.INVALID_SHEET_ID
        return super().dispatch(command)


@pytest.fixture
def filter_factory() -> Callable[..., GlobalFilter]:
    return make_filter


@pytest.fixture
def document() -> InMemoryDocument:
    """Two-sheet document with no cells."""
    doc = InMemoryDocument()
    doc.add_sheet("sheet1", name="Sheet1")
    doc.add_sheet("sheet2", name="Sheet2")
    return doc


@pytest.fixture
def registry() -> MatcherRegistry:
    return MatcherRegistry()


@pytest.fixture
def store(document: InMemoryDocument, registry: MatcherRegistry) -> GlobalFilterStore:
    """Empty store attached to the two-sheet document."""
    return GlobalFilterStore(document=document, registry=registry, formula_function="FILTER.VALUE")


@pytest.fixture
def abc_store(store: GlobalFilterStore) -> GlobalFilterStore:
    """Store holding f1/A, f2/B, f3/C in that order."""
    for filter_id, label in (("f1", "A"), ("f2", "B"), ("f3", "C")):
        result = store.dispatch(AddGlobalFilter(filter=make_filter(filter_id, label)))
        assert result.is_successful
    return store


def ids(store: GlobalFilterStore) -> list[str]:
    return [global_filter.id for global_filter in store.get_global_filters()]


@pytest.fixture
def filter_ids() -> Callable[[GlobalFilterStore], list[str]]:
    """Ordered ids of a store's filters."""
    return ids


@pytest.fixture
def matcher_factory() -> type[FakeMatcher]:
    return FakeMatcher


@pytest.fixture
def refusing_document_factory() -> type[RefusingDocument]:
    return RefusingDocument
