"""
Logging configuration.

Provides a single entry point for configuring structured logging.
Log lines go to stderr so they never mix with a unit's rendered output.

Configuration is read from ``ScriptSettings`` (environment variables):
- WORKSCRIPT_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR (default: WARNING)
- WORKSCRIPT_LOG_FORMAT: json | console (default: console)

Usage:
    from workscript.framework.logging import configure_logging
    configure_logging()

    # Or with explicit settings
    configure_logging(level="DEBUG", format="json")
"""

import logging
import sys
from typing import Literal

import structlog
from structlog.types import Processor

from workscript.framework.logging.context import add_context_processor

# Track if logging has been configured
_configured = False


def _processors(log_format: str) -> list[Processor]:
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        # Invocation context from contextvars
        add_context_processor,
        structlog.processors.format_exc_info,
        structlog.processors.StackInfoRenderer(),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    return processors


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None,
    format: Literal["json", "console"] | None = None,
    force: bool = False,
) -> None:
    """
    Configure structured logging for the application.

    Should be called once at startup (the ``workscript`` launcher does it).
    Subsequent calls are no-ops unless force=True.

    Args:
        level: Log level (overrides WORKSCRIPT_LOG_LEVEL)
        format: Output format (overrides WORKSCRIPT_LOG_FORMAT)
        force: Reconfigure even if already configured
    """
    global _configured

    if _configured and not force:
        return

    from workscript.framework.settings import get_settings

    settings = get_settings()
    log_level = (level or settings.log_level).upper()
    log_format = (format or settings.log_format).lower()

    structlog.configure(
        processors=_processors(log_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure stdlib logging to match
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level),
        force=True,
    )
    logging.getLogger("workscript").setLevel(getattr(logging, log_level))

    _configured = True


def ensure_logging() -> None:
    """
    Route structlog through stdlib logging without touching its handlers.

    Used by library entry points such as ``as_script``: the host program's
    root logger decides what is shown.  Does nothing if structlog is already
    configured, and leaves a later :func:`configure_logging` call free to
    take over.
    """
    if structlog.is_configured():
        return

    from workscript.framework.settings import get_settings

    structlog.configure(
        processors=_processors(get_settings().log_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured
