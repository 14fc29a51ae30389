"""Typed JSON values: the canonical parameter and result representation.

``JsonValue`` is pydantic's recursive JSON type. Byte-level encoding and
decoding go through a single :class:`~pydantic.TypeAdapter`; :func:`coerce`
checks in-memory Python objects (e.g. what a tool handler returns) against
the same closed variant.

Classification order is string, integer, float, boolean, array, object, null.
``bool`` is a subclass of ``int`` in Python, so the integer test excludes it.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import JsonValue, TypeAdapter, ValidationError

from mcpcore.protocol.errors import DecodeError

JsonObject = dict[str, JsonValue]

_ADAPTER: TypeAdapter[JsonValue] = TypeAdapter(JsonValue)


class JsonKind(str, Enum):
    """Variant tag of a JSON value."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"


def kind_of(value: Any) -> JsonKind:
    """Return the variant of *value*, or raise :class:`DecodeError`."""
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, int) and not isinstance(value, bool):
        return JsonKind.INTEGER
    if isinstance(value, float):
        return JsonKind.NUMBER
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    if value is None:
        return JsonKind.NULL
    raise DecodeError(f"unsupported type {type(value).__name__}")


def coerce(obj: Any, *, path: str = "$") -> JsonValue:
    """Validate *obj* as a JSON value, converting tuples to lists.

    Raises :class:`DecodeError` naming the first offending path.
    """
    try:
        kind = kind_of(obj)
    except DecodeError as exc:
        raise DecodeError(f"{exc.detail} at {path}") from exc

    if kind is JsonKind.NUMBER and not math.isfinite(obj):
        raise DecodeError(f"non-finite number at {path}")
    if kind is JsonKind.ARRAY:
        return [coerce(item, path=f"{path}[{i}]") for i, item in enumerate(obj)]
    if kind is JsonKind.OBJECT:
        result: JsonObject = {}
        for key, item in obj.items():
            if not isinstance(key, str):
                raise DecodeError(f"object key {key!r} is not a string at {path}")
            result[key] = coerce(item, path=f"{path}.{key}")
        return result
    return obj  # type: ignore[no-any-return]


def encode(value: JsonValue) -> bytes:
    """Serialize *value* to compact JSON bytes."""
    return _ADAPTER.dump_json(coerce(value))


def decode(data: bytes | str) -> JsonValue:
    """Parse JSON bytes into a :data:`JsonValue`.

    The ``NaN`` and ``Infinity`` literals are rejected, matching :func:`encode`.
    """
    try:
        value = _ADAPTER.validate_json(data)
    except ValidationError as exc:
        raise DecodeError(_describe(exc)) from exc
    return coerce(value)


def decode_object(data: bytes | str) -> JsonObject:
    """Parse JSON bytes that must hold a top-level object."""
    value = decode(data)
    if not isinstance(value, dict):
        raise DecodeError(f"expected a JSON object, got {kind_of(value).value}")
    return value


def _describe(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    return str(first.get("msg", "invalid JSON"))
