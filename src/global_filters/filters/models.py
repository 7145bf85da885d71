"""Pydantic models for global filters.

A global filter is a named, typed query-scoping definition attached to a
document. Formulas reference it by label, external data sources by id.

Records are frozen: the store never edits a filter in place, it replaces the
whole record. Persisted keys are camelCase and unknown keys are kept as-is so
that a filter list survives an import/export round-trip untouched.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FilterType(str, Enum):
    """Kind of value a filter scopes queries by."""

    TEXT = "text"
    DATE = "date"
    RELATION = "relation"


class RangeType(str, Enum):
    """How a date filter expresses its range."""

    FIXED_PERIOD = "fixedPeriod"
    RELATIVE = "relative"
    FROM_TO = "from_to"


class RelativePeriod(str, Enum):
    """Symbolic date ranges, resolved to concrete dates elsewhere."""

    LAST_WEEK = "last_week"
    LAST_MONTH = "last_month"
    LAST_YEAR = "last_year"
    LAST_THREE_YEARS = "last_three_years"
    THIS_MONTH = "this_month"
    THIS_QUARTER = "this_quarter"
    THIS_YEAR = "this_year"


CURRENT_USER = "current_user"


class GlobalFilter(BaseModel):
    """A single global filter definition."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="allow",
        protected_namespaces=(),
    )

    id: str = Field(..., description="Opaque unique id, stable across renames and moves")
    label: str = Field(..., description="User-facing name, unique within a document")
    type: FilterType = Field(..., description="Filter kind")
    range_type: RangeType | None = Field(
        None, alias="rangeType", description="Range kind (date filters only)"
    )
    default_value: Any = Field(
        None,
        alias="defaultValue",
        description="Relative period, explicit dates, relation ids, current_user or text",
    )
    automatic_default_value: bool | None = Field(
        None,
        alias="automaticDefaultValue",
        description="Compute the default dynamically instead of reading it literally",
    )
    model_id: int | None = Field(
        None, alias="modelID", description="Id of the related model (relation filters only)"
    )
    model_name: str | None = Field(
        None, alias="modelName", description="Name of the related model (relation filters only)"
    )

    def with_label(self, label: str) -> "GlobalFilter":
        """Return a copy of this filter under another label."""
        return self.model_copy(update={"label": label})

    def to_data(self) -> dict[str, Any]:
        """Serialize to the persisted (camelCase) representation.

        Only keys that were read or set are written, so unknown keys and
        explicit nulls survive a round-trip.
        """
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


class FieldMatching(BaseModel):
    """Field of a data source that a filter is matched against."""

    chain: str = Field(..., description="Field path on the data source model")
    type: str = Field(..., description="Type of the field")
    offset: int | None = Field(None, description="Period offset to apply (date filters)")
