"""Core module - configuration, logging, and shared models."""

from global_filters.core.config import Settings, get_settings
from global_filters.core.logging import configure_logging, get_logger, log_context
from global_filters.core.models.base import CommandResult, Result

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Logging
    "configure_logging",
    "get_logger",
    "log_context",
    # Models
    "CommandResult",
    "Result",
]
