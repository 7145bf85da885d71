"""Pure validation and application of global filter commands.

Both functions work on a snapshot of the filter list and have no side
effects. ``validate`` decides whether a command may run; ``apply`` computes
the next list for a command that passed validation. The store commits the
result through the document history.
"""

from collections.abc import Callable, Sequence

from global_filters.core.models.base import CommandResult
from global_filters.filters.commands import (
    AddGlobalFilter,
    EditGlobalFilter,
    GlobalFilterCommand,
    MoveGlobalFilter,
    RemoveGlobalFilter,
)
from global_filters.filters.compatibility import TypeValueChecker, check_type_value_combination
from global_filters.filters.models import GlobalFilter

Localize = Callable[[str], str]


def identity(text: str) -> str:
    return text


def find_index(filters: Sequence[GlobalFilter], filter_id: str) -> int:
    """Position of the filter with ``filter_id``, -1 if absent."""
    for index, global_filter in enumerate(filters):
        if global_filter.id == filter_id:
            return index
    return -1


def is_duplicated_label(
    filters: Sequence[GlobalFilter],
    label: str,
    exclude_id: str | None = None,
    localize: Localize = identity,
) -> bool:
    """Check whether another filter already displays as ``label``.

    Args:
        filters: Current filters
        label: Candidate label
        exclude_id: Filter to leave out of the comparison (the one being edited)
        localize: Display transform applied to both sides
    """
    displayed = localize(label)
    return any(
        global_filter.id != exclude_id and localize(global_filter.label) == displayed
        for global_filter in filters
    )


def validate(
    command: GlobalFilterCommand,
    filters: Sequence[GlobalFilter],
    checker: TypeValueChecker = check_type_value_combination,
    localize: Localize = identity,
) -> CommandResult:
    """Decide whether ``command`` may be applied to ``filters``.

    Returns:
        CommandResult.SUCCESS or the first reason the command is refused
    """
    match command:
        case AddGlobalFilter(filter=new_filter):
            if find_index(filters, new_filter.id) != -1:
                return CommandResult.DUPLICATED_FILTER_ID
            if is_duplicated_label(filters, new_filter.label, localize=localize):
                return CommandResult.DUPLICATED_FILTER_LABEL
            return checker(new_filter.type, new_filter.default_value)

        case EditGlobalFilter(filter=new_filter):
            if find_index(filters, new_filter.id) == -1:
                return CommandResult.FILTER_NOT_FOUND
            if is_duplicated_label(
                filters, new_filter.label, exclude_id=new_filter.id, localize=localize
            ):
                return CommandResult.DUPLICATED_FILTER_LABEL
            return checker(new_filter.type, new_filter.default_value)

        case RemoveGlobalFilter(id=filter_id):
            if find_index(filters, filter_id) == -1:
                return CommandResult.FILTER_NOT_FOUND

        case MoveGlobalFilter(id=filter_id, delta=delta):
            index = find_index(filters, filter_id)
            if index == -1:
                return CommandResult.FILTER_NOT_FOUND
            target = index + delta
            if target < 0 or target >= len(filters):
                return CommandResult.INVALID_FILTER_MOVE

    return CommandResult.SUCCESS


def apply(
    command: GlobalFilterCommand, filters: Sequence[GlobalFilter]
) -> tuple[GlobalFilter, ...]:
    """Compute the filter list after ``command``.

    The command must have passed ``validate`` against the same ``filters``.

    Raises:
        ValueError: If the referenced filter does not exist
        TypeError: If the command is not a global filter command
    """
    current = tuple(filters)

    match command:
        case AddGlobalFilter(filter=new_filter):
            return (*current, new_filter)

        case EditGlobalFilter(filter=new_filter):
            index = _require_index(current, new_filter.id)
            return (*current[:index], new_filter, *current[index + 1 :])

        case RemoveGlobalFilter(id=filter_id):
            _require_index(current, filter_id)
            return tuple(f for f in current if f.id != filter_id)

        case MoveGlobalFilter(id=filter_id, delta=delta):
            index = _require_index(current, filter_id)
            reordered = list(current)
            moved = reordered.pop(index)
            reordered.insert(index + delta, moved)
            return tuple(reordered)

    raise TypeError(f"Unsupported command: {command!r}")


def _require_index(filters: Sequence[GlobalFilter], filter_id: str) -> int:
    index = find_index(filters, filter_id)
    if index == -1:
        raise ValueError(f"Global filter '{filter_id}' not found")
    return index
