from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from .types import FilterQuery
from .validation import validate_value

E = TypeVar("E")


class BaseExpressionBuilder(Generic[E], ABC):
    """Abstract builder turning filters into a store-specific expression."""

    def __init__(self, pk_name: str = "id") -> None:
        self.pk_name = pk_name

    @abstractmethod
    def build_filter_expression(self, filters: Sequence[FilterQuery]) -> E:
        """Build the store expression for the given filters."""
        pass

    @abstractmethod
    def build_sub_expression(
        self,
        expression: E,
        field: str,
        operator: str,
        value: Any,
        index: int,
    ) -> str | dict[str, Any]:
        """Build the fragment for a single filter at position ``index``."""
        pass

    def extract_partition_key_filter(
        self,
        filters: Sequence[FilterQuery],
    ) -> tuple[FilterQuery | None, list[FilterQuery]]:
        """Split off the first primary-key equality filter.

        Returns ``(pk_filter, remaining_filters)``; ``pk_filter`` is ``None``
        when there is no ``pk_name = value`` filter. The input is not modified.
        """
        remaining = list(filters)
        for index, f in enumerate(remaining):
            if f.field == self.pk_name and f.operator == "=":
                return remaining.pop(index), remaining
        return None, remaining

    def validate_filters(self, filters: Sequence[FilterQuery]) -> None:
        """Run ``validate_value`` over every filter value."""
        for f in filters:
            validate_value(f.value)
