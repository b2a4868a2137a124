"""
Terminal rendering of invocation outcomes.

``TerminalRenderer`` is the default outcome policy attached by
``as_script``: failures get a red banner and a dim traceback, successes get
either a pretty-printed payload or a plain ``OK.``.
"""

from __future__ import annotations

import traceback
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.pretty import Pretty
from rich.text import Text

from workscript.core.result import Err, Ok, Outcome
from workscript.framework.logging import get_logger

if TYPE_CHECKING:
    from workscript.framework.unit import Invocation

console = Console()
err_console = Console(stderr=True)

log = get_logger(__name__)

FAILURE_BANNER = "Something went wrong:"
SUCCESS_MESSAGE = "OK."


def format_trace(error: Any) -> str:
    """Traceback text for ``error``, or the bare error when there is none."""
    if getattr(error, "__traceback__", None) is not None:
        return "".join(traceback.format_exception(error)).rstrip()
    if isinstance(error, BaseException):
        return repr(error)
    return str(error)


class TerminalRenderer:
    """Print outcomes the way a script user expects to see them."""

    def __init__(self, out: Console | None = None, err: Console | None = None) -> None:
        self.out = out or console
        self.err = err or err_console

    def render(self, outcome: Outcome, invocation: Invocation) -> None:
        match outcome:
            case Err(error):
                self.render_error(error)
            case Ok(value):
                self.render_success(value, invocation)

    def render_error(self, error: Any) -> None:
        self.out.print(FAILURE_BANNER, style="red", markup=False, highlight=False)
        self.err.print(Text(format_trace(error), style="dim"))

    def render_success(self, output: Any, invocation: Invocation) -> None:
        success_exit = invocation.exits.get("success")
        if output is not None and success_exit is not None and success_exit.has_structured_output:
            try:
                self.out.print(Pretty(output, max_depth=None))
            except Exception as e:  # noqa: BLE001
                log.debug("render.pretty_failed", error=str(e))
            return

        self.out.print(SUCCESS_MESSAGE, style="green", markup=False, highlight=False)


__all__ = ["TerminalRenderer", "format_trace", "FAILURE_BANNER", "SUCCESS_MESSAGE", "console", "err_console"]
