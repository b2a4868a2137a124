"""Work unit model and minimal runtime.

Manifesto:
    A work unit is a named operation with declared inputs (each with an
    example value) and declared exits.  This module holds the definition
    types, builds runnable units from them, and executes invocations into
    an ``Outcome`` (``Ok`` / ``Err``) instead of dispatching to callbacks.

    ``WorkUnit`` is an explicit two-way variant, ``Definition | BuiltUnit``,
    decided once by :func:`resolve_unit` at the boundary.

Lifecycle::

    Definition ──build()──▶ BuiltUnit ──unit(config)──▶ Invocation
                                                          │
                                          execute() ──▶ Ok(value) | Err(error)
                                          run()     ──▶ execute() + renderer

Tags:
    workscript, framework, work-unit, runtime, outcome

Doc-Types:
    api-reference
"""

from __future__ import annotations

import copy
import inspect
import re
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from workscript.core.errors import (
    DefinitionError,
    InputValidationError,
    NotImplementedUnitError,
    categorize_error,
)
from workscript.core.result import Err, Ok, Outcome, try_result
from workscript.framework.coercion import Schema, infer_schema
from workscript.framework.logging import get_logger, log_step, push_context

log = get_logger(__name__)

TELLTALE = "workscript"
ANONYMOUS_IDENTITY = "anonymous-unit-as-script"


class _Missing:
    """Sentinel for "not declared" (``None`` is a legitimate example)."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


# =============================================================================
# Declarations
# =============================================================================


@dataclass(frozen=True)
class InputDef:
    """Declared input of a work unit."""

    name: str
    example: Any = None
    description: str | None = None
    friendly_name: str | None = None
    required: bool = False
    default: Any = MISSING

    @classmethod
    def from_mapping(cls, name: str, spec: Mapping[str, Any] | None) -> InputDef:
        """Build from a definition mapping (camelCase keys accepted)."""
        spec = spec or {}
        return cls(
            name=name,
            example=spec.get("example"),
            description=spec.get("description"),
            friendly_name=spec.get("friendly_name", spec.get("friendlyName")),
            required=bool(spec.get("required", False)),
            default=spec.get("default", spec.get("defaultsTo", MISSING)),
        )

    @property
    def schema(self) -> Schema:
        """Type schema inferred from the example."""
        return infer_schema(self.example)

    @property
    def is_boolean(self) -> bool:
        return self.schema == "boolean"


@dataclass(frozen=True)
class ExitDef:
    """Declared exit of a work unit."""

    name: str
    description: str | None = None
    example: Any = MISSING
    get_example: Callable[..., Any] | None = None
    like: str | None = None
    item_of: str | None = None
    output_friendly_name: str | None = None

    @classmethod
    def from_mapping(cls, name: str, spec: Mapping[str, Any] | None) -> ExitDef:
        """Build from a definition mapping (camelCase keys accepted)."""
        spec = spec or {}
        get_example = spec.get("get_example", spec.get("getExample"))
        if get_example is not None and not callable(get_example):
            raise DefinitionError(f"Exit `{name}`: get_example must be callable")
        return cls(
            name=name,
            description=spec.get("description"),
            example=spec.get("example", MISSING),
            get_example=get_example,
            like=spec.get("like"),
            item_of=spec.get("item_of", spec.get("itemOf")),
            output_friendly_name=spec.get("output_friendly_name", spec.get("outputFriendlyName")),
        )

    @property
    def has_structured_output(self) -> bool:
        """True when the exit declares what kind of output it carries."""
        return (
            self.example is not MISSING
            or self.get_example is not None
            or self.like is not None
            or self.item_of is not None
        )


DEFAULT_EXITS: dict[str, ExitDef] = {
    "success": ExitDef(name="success", description="Done."),
    "error": ExitDef(name="error", description="Unexpected error occurred."),
}


def _kebab_case(text: str) -> str:
    words = re.findall(r"[A-Z]{2,}(?=[A-Z][a-z]|\b|\d)|[A-Z]?[a-z]+|[A-Z]+|\d+", text)
    return "-".join(word.lower() for word in words)


@dataclass(frozen=True)
class Definition:
    """
    Immutable work unit definition.

    ``fn`` receives a dict of input values.  It may return a plain value
    (success), return an ``Ok``/``Err`` directly, or raise (failure).
    """

    identity: str
    inputs: Mapping[str, InputDef] = field(default_factory=dict)
    exits: Mapping[str, ExitDef] = field(default_factory=lambda: dict(DEFAULT_EXITS))
    fn: Callable[[dict[str, Any]], Any] | None = None
    friendly_name: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        exits = dict(DEFAULT_EXITS)
        exits.update(self.exits)
        object.__setattr__(self, "exits", exits)
        object.__setattr__(self, "inputs", dict(self.inputs))
        if self.fn is None:
            object.__setattr__(self, "fn", _not_implemented(self.identity))
        elif not callable(self.fn):
            raise DefinitionError(f"Unit `{self.identity}`: fn must be callable")

    @classmethod
    def from_mapping(cls, spec: Mapping[str, Any]) -> Definition:
        """
        Build a definition from a plain mapping.

        Recognized keys: ``identity``, ``friendlyName``/``friendly_name``,
        ``description``, ``inputs``, ``exits``, ``fn``/``function``.
        """
        if not isinstance(spec, Mapping):
            raise DefinitionError(f"Expected a mapping, got {type(spec).__name__}")

        friendly_name = spec.get("friendly_name", spec.get("friendlyName"))
        identity = spec.get("identity") or (
            _kebab_case(friendly_name) if friendly_name else ANONYMOUS_IDENTITY
        )
        raw_inputs = spec.get("inputs") or {}
        raw_exits = spec.get("exits") or {}
        if not isinstance(raw_inputs, Mapping) or not isinstance(raw_exits, Mapping):
            raise DefinitionError(f"Unit `{identity}`: inputs and exits must be mappings")

        return cls(
            identity=identity,
            friendly_name=friendly_name,
            description=spec.get("description"),
            inputs={
                name: value if isinstance(value, InputDef) else InputDef.from_mapping(name, value)
                for name, value in raw_inputs.items()
            },
            exits={
                name: value if isinstance(value, ExitDef) else ExitDef.from_mapping(name, value)
                for name, value in raw_exits.items()
            },
            fn=spec.get("fn", spec.get("function")),
        )

    @classmethod
    def from_function(cls, func: Callable[..., Any]) -> Definition:
        """
        Build an anonymous definition around a naked function.

        Keyword-capable parameters become inputs; a parameter's default is
        its example, and parameters without a default are required strings.
        """
        inputs: dict[str, InputDef] = {}
        for param in inspect.signature(func).parameters.values():
            if param.kind not in (param.POSITIONAL_OR_KEYWORD, param.KEYWORD_ONLY):
                continue
            if param.default is param.empty:
                inputs[param.name] = InputDef(name=param.name, example="", required=True)
            else:
                inputs[param.name] = InputDef(
                    name=param.name,
                    example=param.default,
                    default=param.default,
                )

        doc = inspect.getdoc(func)
        name = getattr(func, "__name__", "")
        return cls(
            identity=_kebab_case(name) if name and name != "<lambda>" else ANONYMOUS_IDENTITY,
            description=doc.splitlines()[0] if doc else None,
            inputs=inputs,
            exits={"success": ExitDef(name="success", description="Done.", get_example=lambda: None)},
            fn=lambda values: func(**values),
        )


def _not_implemented(identity: str) -> Callable[[dict[str, Any]], Any]:
    def fn(inputs: dict[str, Any]) -> Any:
        return Err(NotImplementedUnitError(identity))

    return fn


# =============================================================================
# Runtime
# =============================================================================


class OutcomeRenderer(Protocol):
    """Policy deciding what to show for each outcome tag."""

    def render(self, outcome: Outcome, invocation: Invocation) -> None: ...


class BuiltUnit:
    """
    Runnable work unit built from a :class:`Definition`.

    Calling it with a configuration mapping binds the inputs and returns an
    :class:`Invocation`; nothing runs until the invocation is executed.
    """

    is_built_unit = True

    def __init__(self, definition: Definition) -> None:
        self.definition = definition

    @property
    def identity(self) -> str:
        return self.definition.identity

    @property
    def inputs(self) -> Mapping[str, InputDef]:
        return self.definition.inputs

    @property
    def exits(self) -> Mapping[str, ExitDef]:
        return self.definition.exits

    def __call__(self, config: Mapping[str, Any] | None = None) -> Invocation:
        return Invocation(self, dict(config or {}))

    def __repr__(self) -> str:
        return f"BuiltUnit({self.identity!r}, inputs={list(self.inputs)})"


class Invocation:
    """A work unit bound to its input configuration, not yet executed."""

    telltale: str | None = None

    def __init__(
        self,
        unit: BuiltUnit,
        config: dict[str, Any],
        renderer: OutcomeRenderer | None = None,
    ) -> None:
        self.unit = unit
        self.config = config
        self.renderer = renderer
        self.invocation_id = uuid.uuid4().hex[:8]

    @property
    def exits(self) -> Mapping[str, ExitDef]:
        return self.unit.exits

    def _resolve_inputs(self) -> Outcome[dict[str, Any]]:
        values = dict(self.config)
        for name, input_def in self.unit.inputs.items():
            if name not in values and input_def.default is not MISSING:
                values[name] = copy.deepcopy(input_def.default)

        missing = [
            name for name, input_def in self.unit.inputs.items()
            if input_def.required and values.get(name) is None
        ]
        if missing:
            return Err(
                InputValidationError(
                    f"Missing required input(s): {', '.join(missing)}",
                    missing_inputs=missing,
                ).with_context(unit=self.unit.identity)
            )
        return Ok(values)

    def execute(self) -> Outcome:
        """Run the unit body and return its outcome. Never raises for unit failures."""
        token = push_context(unit=self.unit.identity, invocation_id=self.invocation_id)
        try:
            resolved = self._resolve_inputs()
            if resolved.is_err():
                log.warning("invocation.invalid_inputs", error=str(resolved.error))
                return resolved

            with log_step("invocation.execute", inputs=sorted(resolved.value)):
                outcome = try_result(lambda: self.unit.definition.fn(resolved.value))

            # A body may hand back an Outcome of its own
            if isinstance(outcome, Ok) and isinstance(outcome.value, (Ok, Err)):
                outcome = outcome.value

            if outcome.is_err():
                log.info(
                    "invocation.failed",
                    error=str(outcome.error),
                    error_type=type(outcome.error).__name__,
                    category=categorize_error(outcome.error).value,
                )
            else:
                log.debug("invocation.completed")
            return outcome
        finally:
            token.restore()

    def run(self) -> Outcome:
        """Execute, then hand the outcome to the attached renderer (if any)."""
        outcome = self.execute()
        if self.renderer is not None:
            self.renderer.render(outcome, self)
        return outcome

    def __repr__(self) -> str:
        return f"Invocation({self.unit.identity!r}, config={self.config!r})"


WorkUnit = Definition | BuiltUnit


def resolve_unit(candidate: Any) -> WorkUnit:
    """
    Decide once what kind of work unit ``candidate`` is.

    - already-built units (``is_built_unit`` marker) pass through
    - ``Definition`` instances pass through
    - mappings become definitions
    - naked functions become anonymous definitions
    - ``None`` becomes an empty anonymous definition
    """
    if getattr(candidate, "is_built_unit", False):
        return candidate
    if isinstance(candidate, Definition):
        return candidate
    if candidate is None:
        return Definition.from_mapping({})
    if isinstance(candidate, Mapping):
        return Definition.from_mapping(candidate)
    if callable(candidate):
        return Definition.from_function(candidate)
    raise DefinitionError(f"Cannot build a work unit from {type(candidate).__name__}")


def build(unit: WorkUnit) -> BuiltUnit:
    """Return a runnable unit, building it from its definition when needed."""
    if isinstance(unit, Definition):
        log.debug("unit.built", unit=unit.identity, inputs=list(unit.inputs))
        return BuiltUnit(unit)
    return unit


__all__ = [
    "MISSING",
    "TELLTALE",
    "InputDef",
    "ExitDef",
    "Definition",
    "BuiltUnit",
    "Invocation",
    "OutcomeRenderer",
    "WorkUnit",
    "resolve_unit",
    "build",
]
