"""Core Authority utilities.

This module exports configuration and logging helpers used throughout the application.
"""

from authority.core.config import Settings, get_settings
from authority.core.logging import (
    LoggingContext,
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "LoggingContext",
    "bind_correlation_id",
    "clear_context",
]
