"""
workscript logging - structured, invocation-aware logging.

This module provides:
- Structured logging with structlog
- Invocation context propagation via contextvars
- Timing for the setup and execution steps
- Environment-based configuration

Usage:
    from workscript.framework.logging import get_logger, configure_logging, log_step, bind_context

    # Configure once at startup (the launcher does this);
    # library entry points only call ensure_logging()
    configure_logging()

    # Get a logger
    log = get_logger(__name__)

    # Attach the unit to every log entry
    bind_context(unit="send-email", invocation_id="a1b2c3d4")

    with log_step("invocation.execute"):
        outcome = invocation.execute()
"""

from workscript.framework.logging.config import configure_logging, ensure_logging, is_configured
from workscript.framework.logging.context import (
    LogContext,
    bind_context,
    clear_context,
    get_context,
    get_logger,
    push_context,
    set_context,
)
from workscript.framework.logging.timing import TimingResult, log_step

__all__ = [
    # Configuration
    "configure_logging",
    "ensure_logging",
    "is_configured",
    # Context
    "get_logger",
    "set_context",
    "clear_context",
    "get_context",
    "bind_context",
    "push_context",
    "LogContext",
    # Timing
    "log_step",
    "TimingResult",
]
