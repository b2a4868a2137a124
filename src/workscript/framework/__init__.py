"""
workscript framework - the pieces the adapter is assembled from.

This module provides:
- Work unit definitions, built units and invocations (``unit``)
- Example-based type inference and human parsing (``coercion``)
- Flag derivation and argv parsing (``flags``)
- Settings (``settings``) and structured logging (``logging``)
"""

from workscript.framework.coercion import coerce_value, infer_schema, parse_human
from workscript.framework.flags import FlagSpec, ParsedArgs, derive_flags, parse_argv
from workscript.framework.settings import ScriptSettings, get_settings
from workscript.framework.unit import (
    MISSING,
    BuiltUnit,
    Definition,
    ExitDef,
    InputDef,
    Invocation,
    OutcomeRenderer,
    WorkUnit,
    build,
    resolve_unit,
)

__all__ = [
    # Work units
    "MISSING",
    "InputDef",
    "ExitDef",
    "Definition",
    "BuiltUnit",
    "Invocation",
    "OutcomeRenderer",
    "WorkUnit",
    "build",
    "resolve_unit",
    # Coercion
    "infer_schema",
    "parse_human",
    "coerce_value",
    # Flags
    "FlagSpec",
    "ParsedArgs",
    "derive_flags",
    "parse_argv",
    # Settings
    "ScriptSettings",
    "get_settings",
]
