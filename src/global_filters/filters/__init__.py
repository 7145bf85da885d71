"""Global filters of a document.

- models: GlobalFilter and FieldMatching records
- commands/operations: command models, pure validate/apply
- store: the authoritative filter store
- propagation: label rename rewriting of formulas
- matching: field matching resolution for data sources
- localization/persistence: display labels and document files
"""

from global_filters.filters.commands import (
    AddGlobalFilter,
    DispatchResult,
    EditGlobalFilter,
    GlobalFilterCommand,
    MoveGlobalFilter,
    RemoveGlobalFilter,
    parse_command,
)
from global_filters.filters.compatibility import check_type_value_combination
from global_filters.filters.localization import (
    TranslationLoadError,
    Translator,
    get_translator,
    load_translations,
)
from global_filters.filters.matching import FieldMatcher, FieldMatchingResolver, MatcherRegistry
from global_filters.filters.models import (
    CURRENT_USER,
    FieldMatching,
    FilterType,
    GlobalFilter,
    RangeType,
    RelativePeriod,
)
from global_filters.filters.operations import apply, validate
from global_filters.filters.persistence import (
    DocumentLoadError,
    Workbook,
    load_workbook,
    read_document,
    save_workbook,
    verify_filters,
    write_document,
)
from global_filters.filters.propagation import (
    CellRewrite,
    LabelRenamePropagator,
    RejectedCellRewrite,
    RewriteReport,
)
from global_filters.filters.store import GlobalFilterStore

__all__ = [
    # Models
    "CURRENT_USER",
    "FieldMatching",
    "FilterType",
    "GlobalFilter",
    "RangeType",
    "RelativePeriod",
    # Commands
    "AddGlobalFilter",
    "DispatchResult",
    "EditGlobalFilter",
    "GlobalFilterCommand",
    "MoveGlobalFilter",
    "RemoveGlobalFilter",
    "parse_command",
    "apply",
    "validate",
    "check_type_value_combination",
    # Store
    "GlobalFilterStore",
    # Propagation
    "CellRewrite",
    "LabelRenamePropagator",
    "RejectedCellRewrite",
    "RewriteReport",
    # Matching
    "FieldMatcher",
    "FieldMatchingResolver",
    "MatcherRegistry",
    # Localization
    "TranslationLoadError",
    "Translator",
    "get_translator",
    "load_translations",
    # Persistence
    "DocumentLoadError",
    "Workbook",
    "load_workbook",
    "read_document",
    "save_workbook",
    "verify_filters",
    "write_document",
]
