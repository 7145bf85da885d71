"""Shared models."""

from global_filters.core.models.base import CommandResult, Result

__all__ = [
    "CommandResult",
    "Result",
]
