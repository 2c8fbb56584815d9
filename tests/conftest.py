"""
Pytest configuration and shared fixtures for query-bridge tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import pytest

from query_bridge import (
    BaseDatabaseService,
    BaseExpressionBuilder,
    FilterQuery,
    GenericFilterQuery,
    PaginationQuery,
    PreparedQuery,
    QueryExecutor,
)


@dataclass
class RecordedExpression:
    filter_expression: str
    expression_values: dict[str, Any] = field(default_factory=dict)
    filters: tuple[FilterQuery, ...] = ()


class RecordingExpressionBuilder(BaseExpressionBuilder[RecordedExpression]):
    """Builder that keeps every filter list it was asked to build."""

    def __init__(self, pk_name: str = "id") -> None:
        super().__init__(pk_name)
        self.calls: list[tuple[FilterQuery, ...]] = []

    def build_filter_expression(self, filters: Sequence[FilterQuery]) -> RecordedExpression:
        filters = tuple(filters)
        self.calls.append(filters)
        expression = RecordedExpression("", filters=filters)
        parts = [
            self.build_sub_expression(expression, f.field, f.operator, f.value, i)
            for i, f in enumerate(filters)
        ]
        expression.filter_expression = " AND ".join(parts)
        return expression

    def build_sub_expression(
        self,
        expression: RecordedExpression,
        field: str,
        operator: str,
        value: Any,
        index: int,
    ) -> str:
        expression.expression_values[f":val{field}"] = value
        return f"{field} {operator} :val{field}"


class StaticQueryExecutor(QueryExecutor[RecordedExpression, Any]):
    """Executor returning a fixed row list regardless of filters."""

    def __init__(self, rows: Sequence[Any] = (), error: Exception | None = None) -> None:
        self.rows = list(rows)
        self.error = error
        self.calls: list[tuple[RecordedExpression, Any]] = []

    async def execute_query(self, params: RecordedExpression, client: Any) -> list[Any]:
        self.calls.append((params, client))
        if self.error is not None:
            raise self.error
        return self.rows


class RecordingDatabaseService(BaseDatabaseService[RecordedExpression, Any]):
    """Service slicing rows contiguously and recording observed errors."""

    def __init__(
        self,
        table_name: str,
        rows: Sequence[Any] = (),
        *,
        executor: QueryExecutor[RecordedExpression, Any] | None = None,
    ) -> None:
        super().__init__(
            table_name,
            "id",
            expression_builder=RecordingExpressionBuilder(),
            query_executor=executor or StaticQueryExecutor(rows),
        )
        self.errors: list[Exception] = []

    async def prepare_query_parameters(
        self, query: GenericFilterQuery
    ) -> PreparedQuery[RecordedExpression]:
        bounds = self.calculate_pagination_values(query.pagination)
        params = self.expression_builder.build_filter_expression(query.filters)
        return PreparedQuery(
            params=params,
            limit=bounds.limit,
            offset=bounds.offset,
            page=bounds.page,
            pagination=query.pagination,
        )

    def process_results(
        self,
        items: Sequence[Any],
        limit: int,
        offset: int,
        pagination: PaginationQuery,
    ) -> list[Any]:
        return list(items[offset : offset + limit])

    def handle_error(self, error: Exception) -> None:
        self.errors.append(error)


@pytest.fixture
def mock_data() -> list[dict[str, str]]:
    """Return three sample items."""
    return [
        {"id": "1", "name": "Item 1"},
        {"id": "2", "name": "Item 2"},
        {"id": "3", "name": "Item 3"},
    ]


@pytest.fixture
def service(mock_data: list[dict[str, str]]) -> RecordingDatabaseService:
    """Return a recording service over the sample items."""
    return RecordingDatabaseService("test-table", mock_data)
