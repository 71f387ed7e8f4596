import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog
from structlog.types import EventDict, WrappedLogger

# ============================================================================
# Configuration & Constants
# ============================================================================


class LogKeys(str, Enum):
    """Log field keys shared by the processors."""

    CORRELATION_ID = "correlation_id"
    TIMESTAMP = "timestamp"
    LOGGER = "logger"
    MESSAGE = "message"
    LEVEL = "level"
    EXTRA = "extra"


@dataclass(frozen=True)
class LogDefaults:
    """Default values for logging configuration."""

    log_level: str = "INFO"
    level_env_var: str = "LOGGING_LEVEL"
    logger_prefix: str = "linkup_client"


DEFAULTS = LogDefaults()

_STANDARD_FIELDS = (
    LogKeys.TIMESTAMP.value,
    LogKeys.LOGGER.value,
    LogKeys.MESSAGE.value,
    LogKeys.LEVEL.value,
)


# ============================================================================
# Processors
# ============================================================================


def _move_fields_to_extra(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """Rename "event" to "message" and nest every non-standard field under "extra"."""
    event_dict[LogKeys.MESSAGE.value] = event_dict.pop("event", "")
    extra = {key: event_dict.pop(key) for key in list(event_dict) if key not in _STANDARD_FIELDS}
    if extra:
        event_dict[LogKeys.EXTRA.value] = extra
    return event_dict


# ============================================================================
# Configuration
# ============================================================================


def configure_structlog(testing: bool = False) -> None:
    """Configure structlog with JSON output, or console output when testing."""
    log_level = os.environ.get(DEFAULTS.level_env_var, DEFAULTS.log_level).upper()
    level = getattr(logging, log_level, logging.INFO)

    logging.basicConfig(format="%(message)s", level=level, stream=sys.stdout)
    logging.getLogger().setLevel(level)

    processors: list[Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if testing:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    else:
        processors.extend([_move_fields_to_extra, structlog.processors.JSONRenderer()])

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )


# ============================================================================
# Public API
# ============================================================================


def bind_context_vars(**kwargs: Any) -> None:
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context_fields() -> None:
    structlog.contextvars.clear_contextvars()


def get_context_vars() -> dict[str, Any]:
    return structlog.contextvars.get_contextvars()


@contextmanager
def scoped_context_vars(**kwargs: Any) -> Iterator[None]:
    """Bind context variables for the duration of a block only."""
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield


def get_logger(name: str = "") -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name or DEFAULTS.logger_prefix)  # type: ignore
