"""
workscript - run declarative work units as command-line scripts.

Usage:
    from workscript import as_script

    as_script({
        "friendlyName": "Say hello",
        "inputs": {"name": {"example": "Ada", "required": True}},
        "fn": lambda inputs: f"Hello, {inputs['name']}!",
    }).run()
"""

__version__ = "0.1.0"

from workscript.adapter import ScriptOptions, as_script, is_wrapped  # noqa: E402
from workscript.core.errors import ScriptError, UnitExit, UnknownInputError  # noqa: E402
from workscript.core.result import Err, Ok, Outcome  # noqa: E402
from workscript.framework.unit import BuiltUnit, Definition, ExitDef, InputDef, Invocation, build  # noqa: E402

__all__ = [
    "__version__",
    "as_script",
    "is_wrapped",
    "ScriptOptions",
    "Definition",
    "InputDef",
    "ExitDef",
    "BuiltUnit",
    "Invocation",
    "build",
    "Ok",
    "Err",
    "Outcome",
    "ScriptError",
    "UnitExit",
    "UnknownInputError",
]
