from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from ..base.pagination import assert_pagination_shape
from ..base.service import BaseDatabaseService
from ..base.types import GenericFilterQuery, PaginationQuery, PreparedQuery
from .executor import MemoryClient, MemoryQueryExecutor
from .expression import MemoryExpression, MemoryExpressionBuilder

logger = logging.getLogger(__name__)


class MemoryDatabaseService(BaseDatabaseService[MemoryExpression, MemoryClient]):
    """Database service over in-memory rows.

    Args:
        table_name: Name used to look rows up in a client mapping.
        rows: Rows queried when the client does not supply ``table_name``.
        pk_name: Primary-key field used for point lookups.
        strict_pagination: Reject non-integer pagination instead of repairing it.
    """

    def __init__(
        self,
        table_name: str,
        rows: Iterable[Any] = (),
        pk_name: str = "id",
        *,
        strict_pagination: bool = False,
    ) -> None:
        super().__init__(
            table_name,
            pk_name,
            expression_builder=MemoryExpressionBuilder(pk_name),
            query_executor=MemoryQueryExecutor(rows, table_name=table_name),
        )
        self._strict_pagination = strict_pagination

    async def prepare_query_parameters(
        self, query: GenericFilterQuery
    ) -> PreparedQuery[MemoryExpression]:
        if self._strict_pagination:
            assert_pagination_shape(query.pagination)
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
        logger.error("Query against %s failed: %s", self.table_name, error)
