from __future__ import annotations

import operator as op
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..base.builder import BaseExpressionBuilder
from ..base.errors import ValidationError
from ..base.types import FilterQuery


def _contains(actual: Any, expected: Any) -> bool:
    return expected in actual


def _begins_with(actual: Any, expected: Any) -> bool:
    return isinstance(actual, str) and actual.startswith(str(expected))


def _is_in(actual: Any, expected: Any) -> bool:
    return actual in expected


OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "=": op.eq,
    "!=": op.ne,
    "<": op.lt,
    "<=": op.le,
    ">": op.gt,
    ">=": op.ge,
    "in": _is_in,
    "contains": _contains,
    "begins_with": _begins_with,
}


@dataclass(slots=True)
class MemoryExpression:
    """Filter expression evaluated in-process.

    ``filter_expression`` is a readable ``field op :placeholder`` rendering of
    every filter; ``expression_values`` maps placeholders to bound values.
    ``pk_filter`` is the primary-key equality filter, kept apart from
    ``filters`` so it can narrow rows first.
    """

    filter_expression: str = ""
    expression_values: dict[str, Any] = field(default_factory=dict)
    filters: tuple[FilterQuery, ...] = ()
    pk_filter: FilterQuery | None = None


class MemoryExpressionBuilder(BaseExpressionBuilder[MemoryExpression]):
    """Expression builder for the in-memory backend."""

    def __init__(self, pk_name: str = "id", *, validate: bool = True) -> None:
        super().__init__(pk_name)
        self.validate = validate

    def build_filter_expression(self, filters: Sequence[FilterQuery]) -> MemoryExpression:
        filters = tuple(filters)
        for f in filters:
            if f.operator not in OPERATORS:
                raise ValidationError(f"Unsupported operator: {f.operator}")
        if self.validate:
            self.validate_filters(filters)

        pk_filter, remaining = self.extract_partition_key_filter(filters)
        expression = MemoryExpression(filters=tuple(remaining), pk_filter=pk_filter)
        parts = [
            self.build_sub_expression(expression, f.field, f.operator, f.value, index)
            for index, f in enumerate(filters)
        ]
        expression.filter_expression = " AND ".join(parts)
        return expression

    def build_sub_expression(
        self,
        expression: MemoryExpression,
        field: str,
        operator: str,
        value: Any,
        index: int,
    ) -> str:
        base = f":val{field}"
        placeholder = base
        suffix = index
        while placeholder in expression.expression_values:
            placeholder = f"{base}_{suffix}"
            suffix += 1
        expression.expression_values[placeholder] = value
        return f"{field} {operator} {placeholder}"
