"""Type/default-value compatibility check for global filters.

A filter's default value is polymorphic by type:
- text: free text
- date: "" (no default), a relative period token, or a mapping of explicit dates
- relation: "current_user" or a list of record ids

An absent default (None) is valid for every type.
"""

from collections.abc import Callable, Mapping
from typing import Any

from global_filters.core.models.base import CommandResult
from global_filters.filters.models import CURRENT_USER, FilterType, RelativePeriod

TypeValueChecker = Callable[[FilterType, Any], CommandResult]

RELATIVE_PERIODS = frozenset(period.value for period in RelativePeriod)


def check_type_value_combination(filter_type: FilterType, value: Any) -> CommandResult:
    """Check that a default value has the shape its filter type expects.

    Args:
        filter_type: Type of the filter
        value: Candidate default value

    Returns:
        CommandResult.SUCCESS, or INVALID_VALUE_TYPE_COMBINATION on mismatch
    """
    if value is None:
        return CommandResult.SUCCESS

    match FilterType(filter_type):
        case FilterType.TEXT:
            if not isinstance(value, str):
                return CommandResult.INVALID_VALUE_TYPE_COMBINATION
        case FilterType.DATE:
            if value == "":
                return CommandResult.SUCCESS
            if isinstance(value, str):
                if value in RELATIVE_PERIODS:
                    return CommandResult.SUCCESS
                return CommandResult.INVALID_VALUE_TYPE_COMBINATION
            if not isinstance(value, Mapping):
                return CommandResult.INVALID_VALUE_TYPE_COMBINATION
        case FilterType.RELATION:
            if value == CURRENT_USER:
                return CommandResult.SUCCESS
            if not isinstance(value, list | tuple):
                return CommandResult.INVALID_VALUE_TYPE_COMBINATION

    return CommandResult.SUCCESS
