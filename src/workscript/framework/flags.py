"""Command-line flags derived from a work unit's inputs.

Manifesto:
    Every declared input is reachable from the command line as
    ``--<inputName>``, with a one-letter shortcut when the letter is still
    free.  The parser is built fresh for each call from an explicit argv,
    so nothing depends on process-wide parser state.

Tags:
    workscript, framework, flags, click, argv

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

import click
from click.core import ParameterSource

from workscript.framework.logging import get_logger
from workscript.framework.unit import InputDef

log = get_logger(__name__)

# Letters the parser keeps for itself (-h/--help)
RESERVED_SHORTCUTS = frozenset({"h"})

POSITIONALS_PARAM = "positional_args"


@dataclass(frozen=True)
class FlagSpec:
    """CLI flag derived from one declared input."""

    input_name: str
    long: str
    position: int = 0
    short: str | None = None
    description: str = ""
    is_boolean: bool = False

    @property
    def param_name(self) -> str:
        """Identifier-safe click parameter name (input names need not be identifiers)."""
        return f"input_{self.position}"

    @property
    def usage(self) -> str:
        if self.short:
            return f"{self.short}, {self.long}"
        return self.long


@dataclass
class ParsedArgs:
    """Flags actually supplied on the command line, plus leftover positionals."""

    options: dict[str, str] = field(default_factory=dict)
    positionals: list[str] = field(default_factory=list)


def _describe(input_def: InputDef) -> str:
    text = input_def.description or input_def.friendly_name or ""
    return text[:1].lower() + text[1:]


def derive_flags(inputs: Mapping[str, InputDef]) -> list[FlagSpec]:
    """
    Derive flags for each input, in declaration order.

    A shortcut letter is claimed by the first input that tries it, even if
    that input ends up without a usable shortcut, so a later input never
    takes over a letter an earlier one asked for.
    """
    claimed: set[str] = set(RESERVED_SHORTCUTS)
    specs: list[FlagSpec] = []

    for position, (name, input_def) in enumerate(inputs.items()):
        letter = name[:1]
        short = None
        if letter and letter not in claimed and letter.isalnum():
            short = f"-{letter}"
        if letter:
            claimed.add(letter)

        specs.append(
            FlagSpec(
                input_name=name,
                long=f"--{name}",
                position=position,
                short=short,
                description=_describe(input_def),
                is_boolean=input_def.is_boolean,
            )
        )

    log.debug("flags.derived", flags=[spec.usage for spec in specs])
    return specs


def build_command(
    flags: Sequence[FlagSpec],
    *,
    prog_name: str | None = None,
    help_text: str | None = None,
) -> click.Command:
    """
    Build a click command for ``flags``.

    Values are kept as raw strings; boolean inputs may also be given bare
    (``--verbose``), which reads as ``"true"``.  Unknown flags are rejected.
    """
    params: list[click.Parameter] = []
    for spec in flags:
        decls = [spec.long, spec.param_name]
        if spec.short:
            decls.insert(0, spec.short)
        extra = {"flag_value": "true"} if spec.is_boolean else {}
        params.append(
            click.Option(
                decls,
                type=click.STRING,
                default=None,
                is_flag=False,
                help=spec.description or None,
                metavar="VALUE",
                **extra,
            )
        )
    params.append(click.Argument([POSITIONALS_PARAM], nargs=-1, required=False))

    return click.Command(
        name=prog_name,
        params=params,
        help=help_text,
        options_metavar="[options]",
        context_settings={"help_option_names": ["-h", "--help"]},
    )


def parse_argv(
    flags: Sequence[FlagSpec],
    argv: Sequence[str],
    *,
    prog_name: str | None = None,
    help_text: str | None = None,
) -> ParsedArgs:
    """
    Parse ``argv`` against ``flags``.

    ``--help`` prints help and exits 0; an unknown flag or a missing flag
    value prints usage and exits 2, the same as a click script would.
    """
    command = build_command(flags, prog_name=prog_name, help_text=help_text)
    try:
        ctx = command.make_context(prog_name, list(argv))
    except click.exceptions.Exit as e:
        raise SystemExit(e.exit_code) from None
    except click.ClickException as e:
        log.debug("flags.rejected", error=e.format_message())
        e.show()
        raise SystemExit(e.exit_code) from None

    parsed = ParsedArgs(positionals=list(ctx.params.get(POSITIONALS_PARAM) or ()))
    for spec in flags:
        if ctx.get_parameter_source(spec.param_name) is ParameterSource.COMMANDLINE:
            parsed.options[spec.input_name] = ctx.params[spec.param_name]
    return parsed


__all__ = ["FlagSpec", "ParsedArgs", "derive_flags", "build_command", "parse_argv"]
