# src/streamsconfig/core/logging.py
"""Logging for streamsconfig.

Every library module obtains its logger from get_logger(__name__). Nothing
is configured on import: until an application calls configure_logging(),
events go wherever the application's own structlog setup sends them.

configure_logging() renders library events and stdlib records through one
structlog ProcessorFormatter so both share a format. Events carry the
logger name, so a warning is attributable to the module that raised it:

    {"event": "User value superseded by processing guarantee",
     "logger": "streamsconfig.core.guarantee", "key": "isolation.level", ...}
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter

from streamsconfig.contracts.types import Password

# One DEBUG event per resolved role and per instantiated plugin.
_VERBOSE_LOGGERS: tuple[str, ...] = (
    "streamsconfig.core.config",
    "streamsconfig.plugins.instantiator",
)


def _render_config_values(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Make configuration values printable.

    Classes become their dotted path, the form users write in properties.
    Passwords become their masked form so JSON output never holds a secret.
    """
    for name, value in event_dict.items():
        if isinstance(value, type):
            event_dict[name] = f"{value.__module__}.{value.__qualname__}"
        elif isinstance(value, Password):
            event_dict[name] = str(value)
    return event_dict


def _remove_internal_fields(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Drop ProcessorFormatter's bookkeeping fields (always present)."""
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    verbose: bool = False,
) -> None:
    """Render library events (and stdlib records) to stdout.

    Args:
        json_output: One JSON object per line instead of console text.
        level: Root log level (DEBUG, INFO, WARNING, ERROR).
        verbose: Keep per-role and per-plugin DEBUG events. Without it those
            loggers never go below INFO, whatever level is.
    """
    log_level = getattr(logging, level.upper())

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _render_config_values,
    ]

    final_processors: list[Any] = [_remove_internal_fields]
    if json_output:
        final_processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        final_processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=[*shared_processors, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Loggers are module globals; caching would pin them to the first configuration.
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ProcessorFormatter(
            processors=final_processors,
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    verbose_level = log_level if verbose else max(log_level, logging.INFO)
    for logger_name in _VERBOSE_LOGGERS:
        logging.getLogger(logger_name).setLevel(verbose_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Logger for a library module (pass __name__)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
