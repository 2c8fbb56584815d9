"""
Filter value validation.

``validate_value`` rejects payloads shaped like NoSQL operator injection or
prototype pollution before they reach an expression builder. Two checks run:

1. A case-insensitive substring scan of the JSON form of the whole payload
   against ``DANGEROUS_PATTERNS``. This is a heuristic: legitimate strings
   that happen to contain a token (``"constructor"``) are rejected too.
2. A structural walk that checks the actual keys of every mapping or
   object, and every string it reaches. This is the authoritative check
   for key placement.

The walk uses an explicit stack instead of recursion, so nesting depth is
limited by ``max_depth`` rather than by the interpreter stack.
"""

from __future__ import annotations

import dataclasses
import json
import uuid
from collections.abc import Iterable, Mapping
from enum import Enum
from numbers import Number
from typing import Any

from .errors import ValidationError

MAX_VALUE_LENGTH = 400_000
DEFAULT_MAX_DEPTH = 256

DANGEROUS_PATTERNS: tuple[str, ...] = (
    "$where",
    "$regex",
    "$ne",
    "$gt",
    "$lt",
    "$gte",
    "$lte",
    "$in",
    "$nin",
    "$or",
    "$and",
    "$not",
    "$exists",
    "$type",
    "$mod",
    "$text",
    "$elemMatch",
    "$size",
    "$all",
    "$expr",
    "__proto__",
    "constructor",
    "prototype",
)

_LOWERED_PATTERNS = tuple(p.lower() for p in DANGEROUS_PATTERNS)
_DANGEROUS_KEYS = frozenset(DANGEROUS_PATTERNS)
_ARRAY_TYPES = (list, tuple, set, frozenset)
_UNSET = object()


def _canonical_form(value: Any) -> str:
    try:
        return json.dumps(value, default=str, ensure_ascii=False)
    except RecursionError:
        # Too deep to render; the structural walk still sees every node.
        return ""
    except (TypeError, ValueError):
        # Non-string keys or circular references.
        return repr(value)


def _contains_dangerous_pattern(text: str) -> bool:
    lowered = text.lower()
    return any(pattern in lowered for pattern in _LOWERED_PATTERNS)


def _utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def _object_properties(value: Any) -> Mapping[Any, Any] | None:
    """Return the own properties of a mapping-like object, or ``None`` for terminals."""
    if isinstance(value, Mapping):
        return value
    if isinstance(value, type):
        return None
    if dataclasses.is_dataclass(value):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    properties: dict[str, Any] = {}
    for cls in type(value).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        for name in (slots,) if isinstance(slots, str) else slots:
            if name in ("__dict__", "__weakref__") or name in properties:
                continue
            attribute = getattr(value, name, _UNSET)
            if attribute is not _UNSET:
                properties[name] = attribute
    if hasattr(value, "__dict__"):
        properties.update(vars(value))
        return properties
    return properties or None


def _check_keys(keys: Iterable[Any]) -> None:
    for key in keys:
        if isinstance(key, str) and (key in _DANGEROUS_KEYS or _contains_dangerous_pattern(key)):
            raise ValidationError("Potential NoSQL injection detected")


def validate_value(
    value: Any,
    *,
    max_length: int = MAX_VALUE_LENGTH,
    max_depth: int | None = DEFAULT_MAX_DEPTH,
) -> None:
    """Raise ``ValidationError`` if ``value`` is unsafe to pass to a query builder.

    Args:
        value: Arbitrary filter value; scalars, sequences, mappings or objects.
        max_length: Maximum string length in UTF-16 code units.
        max_depth: Maximum nesting depth, ``None`` for no limit. With no
            limit a self-referencing structure is walked forever.

    Raises:
        ValidationError: On ``None`` anywhere in the structure, operator-like
            tokens, over-long strings, empty arrays, dangerous keys or
            excessive nesting.
    """
    if value is None:
        raise ValidationError("Value cannot be null or undefined")

    if _contains_dangerous_pattern(_canonical_form(value)):
        raise ValidationError("Potential NoSQL injection detected")

    stack: list[tuple[Any, int]] = [(value, 0)]
    while stack:
        current, depth = stack.pop()

        if current is None:
            raise ValidationError("Value cannot be null or undefined")
        if max_depth is not None and depth > max_depth:
            raise ValidationError(f"Value nesting exceeds maximum depth of {max_depth}")

        if isinstance(current, str):
            # Strings reached through enums or objects never appear in the payload scan.
            if _contains_dangerous_pattern(current):
                raise ValidationError("Potential NoSQL injection detected")
            if len(current) > max_length // 2 and _utf16_length(current) > max_length:
                raise ValidationError(f"Value length exceeds maximum of {max_length}")
            continue
        if isinstance(current, (Number, bytes, bytearray, uuid.UUID)):
            continue
        if isinstance(current, Enum):
            stack.append((current.value, depth + 1))
            continue

        if isinstance(current, _ARRAY_TYPES):
            if not current:
                raise ValidationError("Empty arrays not supported")
            stack.extend((item, depth + 1) for item in current)
            continue

        properties = _object_properties(current)
        if properties is None:
            continue
        _check_keys(properties.keys())
        stack.extend((item, depth + 1) for item in properties.values())
