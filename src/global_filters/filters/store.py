"""Global filter store.

Owns the ordered list of global filters of a document. Every command goes
through two phases:

1. ``allow_dispatch`` - pure pre-check returning a CommandResult
2. ``handle`` - commits the new list through the history, and for a label
   edit rewrites the formulas referencing the old label

``dispatch`` runs both inside one history transaction, so an accepted
command is a single undo step and a refused one leaves no trace.

Usage:
    document = InMemoryDocument()
    store = GlobalFilterStore(document=document)

    year = GlobalFilter(id="f1", label="Year", type="date")
    result = store.dispatch(AddGlobalFilter(filter=year))
    if not result.is_successful:
        print(result.reason)
"""

from collections.abc import Mapping, MutableMapping
from typing import Any

from global_filters.core.config import get_settings
from global_filters.core.logging import get_logger, log_context
from global_filters.core.models.base import CommandResult
from global_filters.document.cells import Document
from global_filters.document.history import SnapshotHistory, StateHistory
from global_filters.filters.commands import (
    DispatchResult,
    EditGlobalFilter,
    GlobalFilterCommand,
)
from global_filters.filters.compatibility import TypeValueChecker, check_type_value_combination
from global_filters.filters.matching import FieldMatchingResolver, MatcherRegistry
from global_filters.filters.models import FieldMatching, GlobalFilter
from global_filters.filters.operations import Localize, apply, find_index, identity, validate
from global_filters.filters.propagation import LabelRenamePropagator, RewriteReport

logger = get_logger(__name__)

FILTERS_SLICE = "global_filters"


class GlobalFilterStore:
    """Authoritative store of a document's global filters.

    Args:
        document: Document whose formulas follow label renames. Without one,
            renames only change the filter.
        history: Where the filter list is committed. Defaults to the
            document's history when it has one, so filter edits and formula
            rewrites share undo steps.
        registry: Field matchers consulted by get_field_matching_for_model
        checker: Type/default-value compatibility check
        localize: Display transform used to compare labels
        formula_function: Function referencing filters by label in formulas
    """

    def __init__(
        self,
        document: Document | None = None,
        history: StateHistory | None = None,
        registry: MatcherRegistry | None = None,
        checker: TypeValueChecker = check_type_value_combination,
        localize: Localize = identity,
        formula_function: str | None = None,
    ):
        if history is None:
            history = document.history if document is not None else SnapshotHistory()
        self.history: StateHistory = history
        self.document = document
        self.checker = checker
        self.localize = localize
        self.resolver = FieldMatchingResolver(
            registry if registry is not None else MatcherRegistry()
        )

        self.propagator: LabelRenamePropagator | None = None
        if document is not None:
            self.propagator = LabelRenamePropagator(
                document, formula_function or get_settings().formula_function
            )

        if self.history.get(FILTERS_SLICE) is None:
            self.history.load(FILTERS_SLICE, ())
        # Set once a command has committed, after which imports are refused
        self._has_commits = False

    @property
    def _filters(self) -> tuple[GlobalFilter, ...]:
        return self.history.get(FILTERS_SLICE, ())

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def allow_dispatch(self, command: GlobalFilterCommand) -> CommandResult:
        """Check whether ``command`` can be applied. Has no side effects."""
        return validate(command, self._filters, checker=self.checker, localize=self.localize)

    def handle(self, command: GlobalFilterCommand) -> RewriteReport | None:
        """Apply a command that passed ``allow_dispatch``.

        Returns:
            The rewrite report when the command renamed a filter, else None

        Raises:
            ValueError: If the command references a missing filter
        """
        previous = self._filters
        updated = apply(command, previous)
        self.history.commit(FILTERS_SLICE, updated)
        self._has_commits = True

        if isinstance(command, EditGlobalFilter):
            old_label = previous[find_index(previous, command.filter.id)].label
            new_label = command.filter.label
            if old_label != new_label:
                return self._propagate_label(old_label, new_label)
        return None

    def dispatch(self, command: GlobalFilterCommand) -> DispatchResult:
        """Validate then apply ``command`` as one history step."""
        with log_context(command=command.type):
            reason = self.allow_dispatch(command)
            if not reason.is_success:
                logger.info("command_rejected", reason=reason.value)
                return DispatchResult(reason=reason)

            with self.history.transaction():
                rewrite = self.handle(command)

            logger.info("command_applied", filter_count=len(self._filters))
            return DispatchResult(reason=CommandResult.SUCCESS, rewrite=rewrite)

    def _propagate_label(self, old_label: str, new_label: str) -> RewriteReport | None:
        if self.propagator is None:
            logger.debug("label_renamed_without_document", old_label=old_label)
            return None
        return self.propagator.propagate(old_label, new_label)

    # ------------------------------------------------------------------
    # Getters
    # ------------------------------------------------------------------

    def get_global_filter(self, filter_id: str) -> GlobalFilter | None:
        """Filter with the given id, if any."""
        index = find_index(self._filters, filter_id)
        return self._filters[index] if index != -1 else None

    def get_global_filter_by_label(self, label: str) -> GlobalFilter | None:
        """Filter displayed as ``label``, comparing localized labels."""
        displayed = self.localize(label)
        for global_filter in self._filters:
            if self.localize(global_filter.label) == displayed:
                return global_filter
        return None

    def get_global_filters(self) -> list[GlobalFilter]:
        """All filters, in order. The list is a copy."""
        return list(self._filters)

    def get_global_filter_default_value(self, filter_id: str) -> Any:
        """Default value of an existing filter.

        Raises:
            KeyError: If no filter has this id
        """
        global_filter = self.get_global_filter(filter_id)
        if global_filter is None:
            raise KeyError(filter_id)
        return global_filter.default_value

    def get_field_matching_for_model(self, model: str) -> dict[str, FieldMatching]:
        """Field matchings copied from a data source already targeting ``model``."""
        return self.resolver.get_field_matching_for_model(self._filters, model)

    def __len__(self) -> int:
        return len(self._filters)

    # ------------------------------------------------------------------
    # Import/Export
    # ------------------------------------------------------------------

    def import_data(self, data: Mapping[str, Any]) -> None:
        """Append the filters of ``data["globalFilters"]`` (not undoable).

        Import sets the initial state of the store, so it must run before
        any command. Undo steps recorded earlier would otherwise restore
        filter lists that predate the import.

        Raises:
            RuntimeError: If a command has already been applied
        """
        if self._has_commits:
            raise RuntimeError("Global filters can only be imported before any command")
        imported = [
            GlobalFilter.model_validate(record) for record in data.get("globalFilters") or []
        ]
        self.history.load(FILTERS_SLICE, (*self._filters, *imported))
        logger.debug("global_filters_imported", count=len(imported))

    def export_data(self, data: MutableMapping[str, Any]) -> None:
        """Write the filters to ``data["globalFilters"]``, in order."""
        data["globalFilters"] = [global_filter.to_data() for global_filter in self._filters]
