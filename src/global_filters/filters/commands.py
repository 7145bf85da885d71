"""Commands handled by the global filter store.

Commands are plain pydantic models discriminated by ``type``, so they can be
built directly or parsed from the wire form:

    parse_command({"type": "MOVE_GLOBAL_FILTER", "id": "f3", "delta": -2})
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

from global_filters.core.models.base import CommandResult
from global_filters.filters.models import GlobalFilter
from global_filters.filters.propagation import RewriteReport


class AddGlobalFilter(BaseModel):
    """Append a new filter (the caller supplies its id)."""

    type: Literal["ADD_GLOBAL_FILTER"] = "ADD_GLOBAL_FILTER"
    filter: GlobalFilter


class EditGlobalFilter(BaseModel):
    """Replace the filter with the same id, keeping its position."""

    type: Literal["EDIT_GLOBAL_FILTER"] = "EDIT_GLOBAL_FILTER"
    filter: GlobalFilter


class RemoveGlobalFilter(BaseModel):
    type: Literal["REMOVE_GLOBAL_FILTER"] = "REMOVE_GLOBAL_FILTER"
    id: str


class MoveGlobalFilter(BaseModel):
    """Move a filter ``delta`` positions (negative moves towards the front)."""

    type: Literal["MOVE_GLOBAL_FILTER"] = "MOVE_GLOBAL_FILTER"
    id: str
    delta: int


GlobalFilterCommand = Annotated[
    AddGlobalFilter | EditGlobalFilter | RemoveGlobalFilter | MoveGlobalFilter,
    Field(discriminator="type"),
]

_command_adapter: TypeAdapter[GlobalFilterCommand] = TypeAdapter(GlobalFilterCommand)


def parse_command(data: dict[str, Any]) -> GlobalFilterCommand:
    """Parse the wire form of a command.

    Raises:
        pydantic.ValidationError: If the type is unknown or fields are missing
    """
    return _command_adapter.validate_python(data)


class DispatchResult(BaseModel):
    """Outcome of dispatching a command.

    ``rewrite`` is only set when an accepted edit renamed a filter.
    """

    reason: CommandResult
    rewrite: RewriteReport | None = None

    @property
    def is_successful(self) -> bool:
        return self.reason.is_success

    def is_cancelled_because(self, reason: CommandResult) -> bool:
        return self.reason is reason
