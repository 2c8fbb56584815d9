from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from ..base.backends import QueryExecutor
from ..base.types import FilterQuery
from .expression import OPERATORS, MemoryExpression

_MISSING = object()

MemoryClient = Mapping[str, Sequence[Any]] | None


def _field_value(row: Any, name: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(name, _MISSING)
    return getattr(row, name, _MISSING)


def matches(row: Any, f: FilterQuery) -> bool:
    """Return True if ``row`` satisfies ``f``.

    Rows without the field, and values that cannot be compared, do not match.
    """
    actual = _field_value(row, f.field)
    if actual is _MISSING:
        return False
    try:
        return bool(OPERATORS[f.operator](actual, f.value))
    except TypeError:
        return False


class MemoryQueryExecutor(QueryExecutor[MemoryExpression, MemoryClient]):
    """Evaluate a ``MemoryExpression`` against rows held in memory.

    When the client is a mapping holding ``table_name``, its rows are
    queried; otherwise (no client, or an opaque connection handle) the
    executor's own rows are.
    """

    def __init__(self, rows: Iterable[Any] = (), *, table_name: str | None = None) -> None:
        self._rows = tuple(rows)
        self._table_name = table_name

    def _source_rows(self, client: MemoryClient) -> Sequence[Any]:
        if isinstance(client, Mapping) and self._table_name is not None and self._table_name in client:
            return client[self._table_name]
        return self._rows

    async def execute_query(self, params: MemoryExpression, client: MemoryClient) -> list[Any]:
        rows: Iterable[Any] = self._source_rows(client)
        if params.pk_filter is not None:
            rows = [row for row in rows if matches(row, params.pk_filter)]
        return [row for row in rows if all(matches(row, f) for f in params.filters)]
