"""Example-based type inference and human-friendly parsing.

Manifesto:
    Inputs arrive from a terminal as strings.  A unit declares what it
    expects by example (``42``, ``True``, ``["a"]``, ``{"k": 1}``), so
    turning ``"42"`` into ``42`` should not need a second, parallel type
    declaration.  This module infers a small type schema from the example
    and parses strings against it, leniently by default.

Schemas:
    ``"string"``, ``"number"``, ``"boolean"``  primitives
    ``"json"``   any JSON-compatible value (example ``None``)
    ``"ref"``    any value at all (example ``"==="`` or an arbitrary object)
    ``[item]``   list whose items match ``item`` (``[]`` = list of anything)
    ``{k: s}``   dict with known keys (``{}`` = dict of anything)

Examples:
    >>> infer_schema(123)
    'number'
    >>> infer_schema([{"name": "a"}])
    [{'name': 'string'}]
    >>> parse_human("42", "number")
    42
    >>> parse_human("a, b", ["string"])
    ['a', 'b']
    >>> parse_human("not a number", "number")
    'not a number'

Tags:
    workscript, framework, coercion, pydantic, type-inference

Doc-Types:
    api-reference
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from workscript.core.errors import CoercionError

Schema = str | list | dict

REF_EXAMPLE = "==="

_INT = TypeAdapter(int)
_FLOAT = TypeAdapter(float)
_BOOL = TypeAdapter(bool)


def infer_schema(example: Any) -> Schema:
    """Infer a type schema from an example value."""
    if example is None:
        return "json"
    if isinstance(example, bool):
        return "boolean"
    if isinstance(example, (int, float)):
        return "number"
    if isinstance(example, str):
        return "ref" if example == REF_EXAMPLE else "string"
    if isinstance(example, (list, tuple)):
        if not example:
            return []
        return [infer_schema(example[0])]
    if isinstance(example, dict):
        return {str(key): infer_schema(value) for key, value in example.items()}
    return "ref"


def parse_human(text: str, schema: Schema, lenient: bool = True) -> Any:
    """
    Parse a human-entered string according to ``schema``.

    In lenient mode this never raises: text that doesn't fit the schema
    comes back unchanged.  With ``lenient=False`` a ``CoercionError`` is
    raised instead.
    """
    if not isinstance(text, str):
        raise TypeError(f"parse_human expects a string, got {type(text).__name__}")

    try:
        return _parse(text, schema)
    except (ValueError, PydanticValidationError) as e:
        if lenient:
            return text
        raise CoercionError(text, schema, cause=e) from e


def coerce_value(value: Any, schema: Schema) -> Any:
    """
    Coerce an already-decoded value (e.g. from JSON) to ``schema``.

    Strings are parsed as human input; containers are walked recursively.
    Values that don't fit, and anything under a ``json``/``ref`` schema, are
    kept as they are.
    """
    if schema in ("json", "ref"):
        return value

    if isinstance(value, str):
        return parse_human(value, schema)

    if isinstance(schema, list):
        if not isinstance(value, list):
            return value
        item_schema = schema[0] if schema else "json"
        return [coerce_value(item, item_schema) for item in value]

    if isinstance(schema, dict):
        if not isinstance(value, dict):
            return value
        return {
            key: coerce_value(item, schema[key]) if key in schema else item
            for key, item in value.items()
        }

    if schema == "string" and isinstance(value, (int, float, bool)):
        return json.dumps(value)
    if schema == "number" and isinstance(value, bool):
        return int(value)
    return value


def _parse(text: str, schema: Schema) -> Any:
    if isinstance(schema, list):
        return _parse_list(text, schema)
    if isinstance(schema, dict):
        return _parse_dict(text, schema)
    if schema == "string":
        return text
    if schema == "number":
        return _parse_number(text)
    if schema == "boolean":
        return _BOOL.validate_python(text.strip())
    if schema in ("json", "ref"):
        try:
            return json.loads(text)
        except ValueError:
            return text
    raise ValueError(f"Unknown type schema: {schema!r}")


def _parse_number(text: str) -> int | float:
    stripped = text.strip()
    try:
        return _INT.validate_python(stripped)
    except PydanticValidationError:
        return _FLOAT.validate_python(stripped)


def _parse_list(text: str, schema: list) -> list:
    item_schema = schema[0] if schema else "json"
    stripped = text.strip()
    if not stripped:
        return []
    if stripped.startswith("["):
        decoded = json.loads(stripped)
        if not isinstance(decoded, list):
            raise ValueError("Expected a JSON array")
        return [coerce_value(item, item_schema) for item in decoded]

    # Comma-separated shorthand: a,b,c
    items = [part.strip() for part in stripped.split(",")]
    return [parse_human(item, item_schema) for item in items]


def _parse_dict(text: str, schema: dict) -> dict:
    decoded = json.loads(text)
    if not isinstance(decoded, dict):
        raise ValueError("Expected a JSON object")
    return coerce_value(decoded, schema)


__all__ = ["Schema", "REF_EXAMPLE", "infer_schema", "parse_human", "coerce_value"]
