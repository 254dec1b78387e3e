# Structured Logging
#
# structlog on top of stdlib logging. Every config store event is emitted
# as a named event with key/value context so it can be rendered either for
# the console or as JSON lines.
#
# Never pass passwords, plaintext keys or ciphertext as event fields.

import logging
import sys
from enum import Enum
from typing import Any, Optional

import structlog

from .settings import Settings


class EventType(str, Enum):
    """Config store events."""
    CONFIG_LOADED = "config.loaded"
    CONFIG_LOAD_FAILED = "config.load_failed"
    CONFIG_CREATED = "config.created"
    CONFIG_SAVED = "config.saved"
    CONFIG_SAVE_FAILED = "config.save_failed"

    KEY_UNLOCKED = "key.unlocked"
    KEY_UNLOCK_FAILED = "key.unlock_failed"


_configured = False


def configure_logging(settings: Optional[Settings] = None, force: bool = False) -> None:
    """
    Configure structlog and the stdlib root handler.

    Safe to call more than once; later calls are no-ops unless ``force``.

    Args:
        settings: Source of log level and renderer choice
                  (default: Settings.from_env())
        force: Reconfigure even if already configured
    """
    global _configured
    if _configured and not force:
        return

    settings = settings or Settings.from_env()
    level = getattr(logging, settings.log_level, logging.INFO)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))  # structlog handles formatting

    package_logger = logging.getLogger("dit_client")
    package_logger.handlers = [handler]
    package_logger.setLevel(level)
    package_logger.propagate = False

    _configured = True


def get_logger(name: str = "dit_client") -> Any:
    """Get a structlog logger bound to ``name``."""
    return structlog.get_logger(name)


def log_event(logger: Any, event_type: EventType, level: str = "info", **fields: Any) -> None:
    """Emit a config store event on ``logger`` at ``level``."""
    getattr(logger, level)(event_type.value, **fields)
