"""workscript core -- errors and the outcome envelope.

Architecture::

    errors.py          Structured error hierarchy (ScriptError, UnknownInputError)
    result.py          Outcome envelope (Ok / Err / try_result)

Nothing in here imports from the framework or CLI layers.
"""

from workscript.core.errors import (
    CoercionError,
    ConfigError,
    DefinitionError,
    ErrorCategory,
    ErrorContext,
    InputValidationError,
    NotImplementedUnitError,
    ScriptError,
    UnitError,
    UnitExit,
    UnknownInputError,
    ValidationError,
)
from workscript.core.result import Err, Ok, Outcome, try_result

__all__ = [
    # Errors
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
    # Outcome
    "Ok",
    "Err",
    "Outcome",
    "try_result",
]
