# Core Module - Shared Utilities
#
# Core module provides shared functionality for the config store:
# - Settings (environment-driven configuration)
# - Structured logging

from .log import (
    EventType,
    configure_logging,
    get_logger,
    log_event,
)
from .settings import (
    DEFAULT_CONFIG_PATH,
    Settings,
)

__all__ = [
    # Settings
    "DEFAULT_CONFIG_PATH",
    "Settings",
    # Logging
    "EventType",
    "configure_logging",
    "get_logger",
    "log_event",
]
