"""Tests for the pure validate/apply functions and command parsing."""

import pytest
from pydantic import ValidationError

from global_filters.core.models.base import CommandResult
from global_filters.filters.commands import (
    AddGlobalFilter,
    EditGlobalFilter,
    MoveGlobalFilter,
    RemoveGlobalFilter,
    parse_command,
)
from global_filters.filters.operations import apply, is_duplicated_label, validate


@pytest.fixture
def filters(filter_factory):
    return (
        filter_factory("f1", "A"),
        filter_factory("f2", "B"),
        filter_factory("f3", "C"),
    )


def test_validate_does_not_touch_input(filters):
    snapshot = list(filters)

    validate(MoveGlobalFilter(id="f1", delta=2), filters)
    validate(RemoveGlobalFilter(id="f2"), filters)

    assert list(filters) == snapshot


def test_apply_returns_new_tuple(filters, filter_factory):
    updated = apply(AddGlobalFilter(filter=filter_factory("f4", "D")), filters)

    assert isinstance(updated, tuple)
    assert [f.id for f in updated] == ["f1", "f2", "f3", "f4"]
    assert [f.id for f in filters] == ["f1", "f2", "f3"]


def test_apply_edit_keeps_position(filters, filter_factory):
    updated = apply(EditGlobalFilter(filter=filter_factory("f2", "Z")), filters)

    assert [f.label for f in updated] == ["A", "Z", "C"]


def test_apply_remove(filters):
    updated = apply(RemoveGlobalFilter(id="f1"), filters)

    assert [f.id for f in updated] == ["f2", "f3"]


@pytest.mark.parametrize(
    ("filter_id", "delta", "expected"),
    [
        ("f1", 1, ["f2", "f1", "f3"]),
        ("f3", -2, ["f3", "f1", "f2"]),
        ("f2", 0, ["f1", "f2", "f3"]),
        ("f2", 1, ["f1", "f3", "f2"]),
    ],
)
def test_apply_move_reinserts(filters, filter_id, delta, expected):
    assert validate(MoveGlobalFilter(id=filter_id, delta=delta), filters) is CommandResult.SUCCESS

    updated = apply(MoveGlobalFilter(id=filter_id, delta=delta), filters)

    assert [f.id for f in updated] == expected


def test_apply_edit_unknown_filter_raises(filters, filter_factory):
    with pytest.raises(ValueError):
        apply(EditGlobalFilter(filter=filter_factory("nope")), filters)


def test_apply_unsupported_command_raises(filters):
    with pytest.raises(TypeError):
        apply("REMOVE_GLOBAL_FILTER", filters)


def test_validate_move_on_empty_list():
    result = validate(MoveGlobalFilter(id="f1", delta=0), ())

    assert result is CommandResult.FILTER_NOT_FOUND


def test_is_duplicated_label_excludes_edited_filter(filters):
    assert is_duplicated_label(filters, "A")
    assert not is_duplicated_label(filters, "A", exclude_id="f1")
    assert is_duplicated_label(filters, "A", exclude_id="f2")


def test_is_duplicated_label_localizes_both_sides(filters):
    assert is_duplicated_label(filters, "a", localize=str.upper)


class TestParseCommand:
    """Tests for parsing the wire form of commands."""

    def test_parse_add(self):
        command = parse_command(
            {
                "type": "ADD_GLOBAL_FILTER",
                "filter": {"id": "f1", "label": "Year", "type": "date", "rangeType": "relative"},
            }
        )

        assert isinstance(command, AddGlobalFilter)
        assert command.filter.label == "Year"

    def test_parse_move(self):
        command = parse_command({"type": "MOVE_GLOBAL_FILTER", "id": "f3", "delta": -2})

        assert command == MoveGlobalFilter(id="f3", delta=-2)

    def test_parse_remove(self):
        assert parse_command({"type": "REMOVE_GLOBAL_FILTER", "id": "f1"}) == RemoveGlobalFilter(
            id="f1"
        )

    def test_unknown_command_type_is_refused(self):
        with pytest.raises(ValidationError):
            parse_command({"type": "UPDATE_CELL", "id": "f1"})

    def test_missing_field_is_refused(self):
        with pytest.raises(ValidationError):
            parse_command({"type": "MOVE_GLOBAL_FILTER", "id": "f1"})
