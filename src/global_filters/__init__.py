"""Global filters for spreadsheet documents.

Named, typed query-scoping definitions shared by the formulas and the data
sources of a document.
"""

__version__ = "0.1.0"

from global_filters.core.models.base import CommandResult, Result
from global_filters.filters.models import GlobalFilter
from global_filters.filters.store import GlobalFilterStore

__all__ = [
    "CommandResult",
    "GlobalFilter",
    "GlobalFilterStore",
    "Result",
    "__version__",
]
