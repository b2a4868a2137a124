"""
Structured error types for workscript.

Provides a small hierarchy of typed errors with metadata for categorization,
reporting, and root cause analysis through error chaining.

Instead of generic exceptions that lose context, ScriptError and its
subclasses carry:
- **Category:** What kind of error (definition, config, validation, unit)
- **Context:** Structured metadata (unit identity, input name, exit name)
- **Cause:** Chained underlying exception for root cause analysis

Manifesto:
    - **Typed Error Hierarchy:** Setup mistakes and unit failures are different things
    - **Rich Context:** Errors carry the unit and input they are about
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                       ScriptError                               │
        │  (category, context, cause)                                     │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                 │
        │  DefinitionError     ConfigError        ValidationError         │
        │  (DEFINITION)        (CONFIG)           (VALIDATION)            │
        │                          │                   │                  │
        │                     UnknownInputError   InputValidationError    │
        │                                         CoercionError           │
        │                                                                 │
        │  UnitError                                                      │
        │  (UNIT)                                                         │
        │     │                                                           │
        │  UnitExit                                                       │
        │  NotImplementedUnitError                                        │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    >>> err = UnknownInputError("colour", unit="paint")
    >>> err.category
    <ErrorCategory.CONFIG: 'CONFIG'>
    >>> err.context.input_name
    'colour'

Tags:
    errors, exception-hierarchy, error-context, workscript

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories.

    String enum so values serialize directly into structured log entries.
    """

    DEFINITION = "DEFINITION"     # Malformed work unit definition
    CONFIG = "CONFIG"             # Configuration for inputs that don't exist
    VALIDATION = "VALIDATION"     # Missing or unparseable input values
    UNIT = "UNIT"                 # Failures raised by a unit's own body
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Attributes:
        unit: Identity of the work unit the error is about
        input_name: Name of the offending input, when there is one
        exit_name: Name of the exit a unit left through
        metadata: Additional key-value pairs
    """

    unit: str | None = None
    input_name: str | None = None
    exit_name: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["unit", "input_name", "exit_name"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class ScriptError(Exception):
    """
    Base exception for all workscript errors.

    Subclasses set ``default_category`` so callers can route on category
    without isinstance ladders.

    Examples:
        >>> error = ScriptError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> error = ScriptError("Bad input").with_context(unit="greet", input_name="name")
        >>> error.context.to_dict()
        {'unit': 'greet', 'input_name': 'name'}
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ScriptError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ScriptError("Failed").with_context(unit="greet", attempt=2)
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize error for structured logging."""
        result: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
            "category": self.category.value,
        }
        ctx = self.context.to_dict()
        if ctx:
            result["context"] = ctx
        if self.cause is not None:
            result["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# DEFINITION ERRORS
# =============================================================================


class DefinitionError(ScriptError):
    """Work unit definition is malformed or cannot be built."""

    default_category = ErrorCategory.DEFINITION


# =============================================================================
# CONFIG ERRORS
# =============================================================================


class ConfigError(ScriptError):
    """Configuration doesn't line up with the unit's declared inputs."""

    default_category = ErrorCategory.CONFIG


class UnknownInputError(ConfigError):
    """Configuration was supplied for an input the unit does not declare."""

    def __init__(self, input_name: str, *, unit: str | None = None, **kwargs: Any):
        self.input_name = input_name
        super().__init__(
            f"Unexpected error: received configuration for unknown input ({input_name})",
            context=ErrorContext(unit=unit, input_name=input_name),
            **kwargs,
        )


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ScriptError):
    """Input value validation error."""

    default_category = ErrorCategory.VALIDATION


class InputValidationError(ValidationError):
    """One or more inputs are missing or invalid at execution time."""

    def __init__(
        self,
        message: str,
        *,
        missing_inputs: list[str] | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.missing_inputs = missing_inputs or []

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.missing_inputs:
            result["missing_inputs"] = self.missing_inputs
        return result


class CoercionError(ValidationError):
    """A human-entered string could not be parsed as the expected type."""

    def __init__(self, text: str, schema: Any, **kwargs: Any):
        self.text = text
        self.schema = schema
        super().__init__(f"Could not parse {text!r} as {describe_schema(schema)}", **kwargs)


# =============================================================================
# UNIT ERRORS
# =============================================================================


class UnitError(ScriptError):
    """Failure reported by a work unit's body."""

    default_category = ErrorCategory.UNIT


class UnitExit(UnitError):
    """
    Leave a work unit through a named, non-success exit.

    Raised from a unit body; the runtime turns it into an ``Err`` outcome.

    Usage:
        def fn(inputs):
            if not lookup(inputs["id"]):
                raise UnitExit("notFound", output={"id": inputs["id"]})
    """

    def __init__(self, exit_name: str, output: Any = None, message: str | None = None, **kwargs: Any):
        self.exit_name = exit_name
        self.output = output
        super().__init__(
            message or f"Unit left through the `{exit_name}` exit",
            context=ErrorContext(exit_name=exit_name),
            **kwargs,
        )


class NotImplementedUnitError(UnitError):
    """Default body for units defined without a function."""

    def __init__(self, unit: str | None = None):
        super().__init__(
            "Not implemented yet! (This is a default `fn` injected by workscript.)",
            context=ErrorContext(unit=unit),
        )


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def describe_schema(schema: Any) -> str:
    """Short human label for an inferred type schema."""
    if isinstance(schema, list):
        return "a list"
    if isinstance(schema, dict):
        return "a dictionary"
    return {
        "string": "a string",
        "number": "a number",
        "boolean": "a boolean",
        "json": "JSON",
        "ref": "a value",
    }.get(schema, str(schema))


def categorize_error(error: Any) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, ScriptError):
        return error.category
    if isinstance(error, (ValueError, TypeError)):
        return ErrorCategory.VALIDATION
    return ErrorCategory.INTERNAL


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ScriptError",
    "DefinitionError",
    "ConfigError",
    "UnknownInputError",
    "ValidationError",
    "InputValidationError",
    "CoercionError",
    "UnitError",
    "UnitExit",
    "NotImplementedUnitError",
    "describe_schema",
    "categorize_error",
]
