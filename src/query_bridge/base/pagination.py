"""
Pagination handling.

Two independent policies live here:

- ``normalize_pagination`` is permissive: it repairs whatever it is given
  into safe integer bounds and never raises.
- ``assert_pagination_shape`` is strict: it rejects values that are not
  representable as integers. Callers pick which one (or both) to apply.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from numbers import Real
from typing import Any

from .errors import ValidationError
from .types import NormalizedPagination, PaginationQuery

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 100

_SHAPE_FIELDS = ("page", "size", "limit", "offset")


def _as_number(value: Any) -> Real | None:
    """Return ``value`` if it is a finite real number, else ``None``."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    if not math.isfinite(value):
        return None
    return value


def normalize_pagination(
    pagination: PaginationQuery | Mapping[str, Any] | None = None,
) -> NormalizedPagination:
    """Turn a loosely-typed pagination request into safe bounds.

    ``page`` is floored and clamped to at least 1, ``limit`` floored and
    clamped to at least 0. ``offset`` is kept when it is a non-negative
    number, otherwise it is derived from page and limit. Anything that is
    not a real number is treated as missing.
    """
    query = PaginationQuery.from_value(pagination)

    page = _as_number(query.page)
    page = DEFAULT_PAGE if page is None else max(1, math.floor(page))

    limit = _as_number(query.limit)
    limit = DEFAULT_LIMIT if limit is None else max(0, math.floor(limit))

    offset = _as_number(query.offset)
    if offset is None or offset < 0:
        offset = (page - 1) * limit
    else:
        offset = math.floor(offset)

    return NormalizedPagination(page=page, limit=limit, offset=offset)


def _is_integral(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    if isinstance(value, Real):
        return math.isfinite(value) and value == math.floor(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return False
        try:
            number = float(text)
        except ValueError:
            return False
        return math.isfinite(number) and number.is_integer()
    return False


def assert_pagination_shape(
    pagination: PaginationQuery | Mapping[str, Any] | None = None,
) -> None:
    """Raise ``ValidationError`` if a supplied pagination field is not an integer.

    Absent fields (``None``) are not checked.
    """
    values = PaginationQuery.from_value(pagination).as_dict()
    for name in _SHAPE_FIELDS:
        if name in values and not _is_integral(values[name]):
            raise ValidationError(f"{name.capitalize()} must be an integer")
