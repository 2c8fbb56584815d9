from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

from .backends import QueryExecutor, SyncQueryExecutor
from .builder import BaseExpressionBuilder
from .pagination import normalize_pagination
from .types import (
    GenericFilterQuery,
    NormalizedPagination,
    PaginatedResponse,
    PaginationQuery,
    PreparedQuery,
)

logger = logging.getLogger(__name__)

E = TypeVar("E")
C = TypeVar("C")
T = TypeVar("T")


class BaseDatabaseService(Generic[E, C], ABC):
    """Abstract service running filtered, paginated queries.

    Subclasses decide how filters and pagination become store parameters
    (``prepare_query_parameters``), how raw rows become results
    (``process_results``) and how failures are observed (``handle_error``).
    The executor returns every matching row; the page slice is taken here.

    Instances hold only their collaborators, so concurrent fetches on one
    service do not interfere.
    """

    def __init__(
        self,
        table_name: str,
        pk_name: str = "id",
        *,
        expression_builder: BaseExpressionBuilder[E],
        query_executor: QueryExecutor[E, C] | SyncQueryExecutor[E, C],
    ) -> None:
        self._table_name = table_name
        self._pk_name = pk_name
        self._expression_builder = expression_builder
        self._query_executor = query_executor

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def pk_name(self) -> str:
        return self._pk_name

    @property
    def expression_builder(self) -> BaseExpressionBuilder[E]:
        return self._expression_builder

    @property
    def query_executor(self) -> QueryExecutor[E, C] | SyncQueryExecutor[E, C]:
        return self._query_executor

    async def fetch_with_filters_and_pagination(
        self,
        query: GenericFilterQuery | Mapping[str, Any],
        client: C,
    ) -> PaginatedResponse[Any]:
        """Fetch one page of rows matching ``query``.

        Errors from any step are passed to ``handle_error`` and re-raised
        unchanged.
        """
        try:
            query = GenericFilterQuery.from_value(query)
            logger.debug(
                "Fetching from %s with %d filter(s)", self._table_name, len(query.filters)
            )

            prepared = await self.prepare_query_parameters(query)
            items = await self._execute(prepared.params, client)
            total = len(items)

            data = self.process_results(
                items, prepared.limit, prepared.offset, prepared.pagination
            )
        except Exception as error:
            self.handle_error(error)
            raise

        logger.debug(
            "Fetched %d of %d row(s) from %s (page=%d, limit=%d)",
            len(data),
            total,
            self._table_name,
            prepared.page,
            prepared.limit,
        )
        return PaginatedResponse(data=data, total=total, page=prepared.page, limit=prepared.limit)

    async def _execute(self, params: E, client: C) -> list[Any]:
        if isinstance(self._query_executor, SyncQueryExecutor):
            return await asyncio.to_thread(self._query_executor.execute_query, params, client)
        return await self._query_executor.execute_query(params, client)

    @abstractmethod
    async def prepare_query_parameters(self, query: GenericFilterQuery) -> PreparedQuery[E]:
        """Merge filters and pagination into store parameters.

        Implementations are expected to call ``calculate_pagination_values``
        and the expression builder.
        """
        pass

    @abstractmethod
    def process_results(
        self,
        items: Sequence[Any],
        limit: int,
        offset: int,
        pagination: PaginationQuery,
    ) -> list[Any]:
        """Shape raw rows into the page returned to the caller."""
        pass

    @abstractmethod
    def handle_error(self, error: Exception) -> None:
        """Observe a failure. Must not suppress it; the caller re-raises."""
        pass

    def calculate_pagination_values(
        self,
        pagination: PaginationQuery | Mapping[str, Any] | None,
    ) -> NormalizedPagination:
        return normalize_pagination(pagination)
