"""
Root Typer application for the ``workscript`` launcher.

``workscript run TARGET [ARGS]...`` imports a work unit and runs it as a
script; everything after TARGET belongs to the unit, not the launcher.
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from rich.table import Table
from rich.text import Text

from workscript.adapter import as_script, is_wrapped
from workscript.cli.loader import load_target
from workscript.cli.render import console, err_console
from workscript.core.errors import ScriptError, categorize_error, describe_schema
from workscript.framework.flags import derive_flags
from workscript.framework.logging import configure_logging, get_logger
from workscript.framework.unit import build, resolve_unit

log = get_logger(__name__)

app = typer.Typer(
    name="workscript",
    help="Run declarative work units as command-line scripts.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from workscript import __version__

        typer.echo(f"workscript {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
    log_format: str | None = typer.Option(None, "--log-format", help="console or json."),
) -> None:
    """Run and inspect work units."""
    configure_logging(
        level=log_level.upper() if log_level else None,
        format=log_format.lower() if log_format else None,
        force=bool(log_level or log_format),
    )


def _load(target: str):
    # Targets given as dotted module names resolve against the working directory
    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    try:
        return load_target(target)
    except Exception as e:
        # Importing a target runs its code
        category = categorize_error(e)
        message = e.message if isinstance(e, ScriptError) else f"{type(e).__name__}: {e}"
        log.debug("launcher.load_failed", target=target, category=category.value)
        err_console.print(Text.assemble(("Error", "bold red"), f" ({category.value}): {message}"))
        raise typer.Exit(code=1) from None


@app.command(
    "run",
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
    add_help_option=False,
)
def run_unit(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="module[:attr] or path/to/file.py[:attr]"),
) -> None:
    """Run a work unit; remaining arguments are the unit's own flags."""
    candidate = _load(target)

    if is_wrapped(candidate):
        log.debug("launcher.already_wrapped", target=target)
        invocation = candidate
    else:
        invocation = as_script(candidate, argv=list(ctx.args), prog_name=f"workscript run {target}")

    outcome = invocation.run()
    if outcome.is_err():
        raise typer.Exit(code=1)


@app.command("describe")
def describe_unit(
    target: str = typer.Argument(..., help="module[:attr] or path/to/file.py[:attr]"),
) -> None:
    """Show the flags a work unit accepts."""
    candidate = _load(target)
    unit = candidate.unit if is_wrapped(candidate) else build(resolve_unit(candidate))

    table = Table(title=unit.identity, show_lines=False, pad_edge=False)
    for col in ("flag", "shortcut", "type", "description"):
        table.add_column(col, overflow="fold")
    for spec in derive_flags(unit.inputs):
        schema = unit.inputs[spec.input_name].schema
        table.add_row(spec.long, spec.short or "", describe_schema(schema), spec.description)
    console.print(table)
