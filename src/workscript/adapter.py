"""Run a work unit as a command-line script.

Manifesto:
    A work unit already declares everything a script needs: its inputs
    (with examples that say what type each one is) and its exits.  The
    adapter turns that declaration into flags, reads argv and the
    environment, coerces the strings it finds, and hands back an
    invocation that is ready to run and knows how to print its outcome.

Architecture:
    ::

        argv ──▶ parse_argv() ─┐
                               ├─▶ assemble_configuration() ─▶ coerce_configuration()
        environ ───────────────┘                                      │
                                                                      ▼
                                         unit(config) ─▶ Invocation + TerminalRenderer

    Precedence, lowest to highest: flags, environment variables, the
    synthetic ``args`` list, named positional arguments.

Examples:
    >>> invocation = as_script(
    ...     {
    ...         "friendlyName": "Greet",
    ...         "inputs": {"name": {"example": "Ada"}, "times": {"example": 1}},
    ...         "fn": lambda inputs: "hi " * inputs["times"] + inputs["name"],
    ...     },
    ...     argv=["--name", "Grace", "-t", "2"],
    ...     environ={},
    ... )
    >>> invocation.config
    {'name': 'Grace', 'times': 2}

Tags:
    workscript, adapter, cli, argv, environment

Doc-Types:
    api-reference
"""

from __future__ import annotations

import json
import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from workscript.cli.render import TerminalRenderer
from workscript.core.errors import UnknownInputError
from workscript.framework.coercion import parse_human
from workscript.framework.flags import ParsedArgs, derive_flags, parse_argv
from workscript.framework.logging import ensure_logging, get_logger, log_step
from workscript.framework.settings import get_settings
from workscript.framework.unit import (
    TELLTALE,
    BuiltUnit,
    InputDef,
    Invocation,
    OutcomeRenderer,
    build,
    resolve_unit,
)

log = get_logger(__name__)

ARGS_KEY = "args"


@dataclass
class ScriptOptions:
    """What to run, and how to find its inputs outside of argv."""

    unit: Any = None
    env_var_namespace: str | None = None
    args: list[str] | None = None

    @classmethod
    def from_mapping(cls, opts: Mapping[str, Any]) -> ScriptOptions:
        """
        Accept ``{"machine" | "unit": ..., "envVarNamespace": ..., "args": [...]}``.

        Without a truthy ``machine``/``unit`` key the whole mapping is the
        unit definition.
        """
        unit = opts.get("unit") or opts.get("machine") or opts
        namespace = opts.get("env_var_namespace", opts.get("envVarNamespace"))
        positional_names = opts.get("args")
        return cls(
            unit=unit,
            env_var_namespace=namespace if isinstance(namespace, str) else None,
            args=list(positional_names) if isinstance(positional_names, (list, tuple)) else None,
        )


def assemble_configuration(
    inputs: Mapping[str, InputDef],
    parsed: ParsedArgs,
    environ: Mapping[str, str],
    namespace: str,
    positional_names: Sequence[str] | None = None,
) -> dict[str, Any]:
    """
    Merge flags, environment variables and positional arguments.

    Later sources win: an environment variable overrides a flag for the
    same input, and named positional arguments override both.
    """
    config: dict[str, Any] = dict(parsed.options)

    for name in inputs:
        env_key = f"{namespace}{name}"
        if env_key in environ:
            config[name] = environ[env_key]

    if parsed.positionals:
        config[ARGS_KEY] = list(parsed.positionals)

    for index, name in enumerate(positional_names or ()):
        if index < len(parsed.positionals):
            config[name] = parsed.positionals[index]

    return config


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return json.dumps(list(value))
    return str(value)


def coerce_configuration(
    inputs: Mapping[str, InputDef],
    config: Mapping[str, Any],
    *,
    unit: str | None = None,
) -> dict[str, Any]:
    """
    Coerce every configured value to the type its input's example implies.

    The synthetic ``args`` entry is dropped unless the unit declares an
    input named ``args``.  Any other undeclared key is an error.
    """
    coerced: dict[str, Any] = {}
    for name, raw in config.items():
        input_def = inputs.get(name)
        if input_def is None and name == ARGS_KEY:
            continue
        if input_def is None:
            raise UnknownInputError(name, unit=unit)
        coerced[name] = parse_human(_stringify(raw), input_def.schema, lenient=True)
    return coerced


def as_script(
    target: Any = None,
    *,
    args: Sequence[str] | None = None,
    env_var_namespace: str | None = None,
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
    renderer: OutcomeRenderer | None = None,
    prog_name: str | None = None,
) -> Invocation:
    """
    Turn a work unit into a configured, ready-to-run invocation.

    Args:
        target: A definition mapping, ``Definition``, built unit, naked
            function, or a ``ScriptOptions``/options mapping wrapping one.
        args: Names of inputs to fill from positional arguments, in order.
        env_var_namespace: Prefix for input environment variables
            (default ``___``, or ``WORKSCRIPT_ENV_VAR_NAMESPACE``).
        argv: Arguments to parse (default ``sys.argv[1:]``).
        environ: Environment to read (default ``os.environ``).
        renderer: Outcome policy to use instead of ``TerminalRenderer``.
        prog_name: Program name for help text.

    Returns:
        An unexecuted ``Invocation``; call ``.run()`` to execute and print.

    Raises:
        UnknownInputError: Configuration names an input the unit lacks.
        SystemExit: ``--help`` was requested or argv could not be parsed.
    """
    if isinstance(target, ScriptOptions):
        options = target
    elif isinstance(target, Mapping):
        options = ScriptOptions.from_mapping(target)
    else:
        options = ScriptOptions(unit=target)

    if args is not None:
        options.args = list(args)
    if env_var_namespace is not None:
        options.env_var_namespace = env_var_namespace

    ensure_logging()

    settings = get_settings()
    namespace = options.env_var_namespace
    if namespace is None:
        namespace = settings.env_var_namespace

    unit: BuiltUnit = build(resolve_unit(options.unit))
    definition = getattr(unit, "definition", None)

    with log_step("adapter.configure", unit=unit.identity) as timer:
        flags = derive_flags(unit.inputs)
        parsed = parse_argv(
            flags,
            sys.argv[1:] if argv is None else argv,
            prog_name=prog_name or settings.prog_name or unit.identity,
            help_text=getattr(definition, "description", None),
        )
        raw = assemble_configuration(
            unit.inputs,
            parsed,
            os.environ if environ is None else environ,
            namespace,
            options.args,
        )
        config = coerce_configuration(unit.inputs, raw, unit=unit.identity)
        timer.add_metric("configured", sorted(config))

    invocation = unit(config)
    invocation.renderer = renderer or TerminalRenderer()
    invocation.telltale = TELLTALE
    return invocation


def is_wrapped(candidate: Any) -> bool:
    """True for invocations already produced by :func:`as_script`."""
    return isinstance(candidate, Invocation) and candidate.telltale == TELLTALE


__all__ = [
    "ScriptOptions",
    "as_script",
    "assemble_configuration",
    "coerce_configuration",
    "is_wrapped",
]
