from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

E = TypeVar("E")
C = TypeVar("C")


class QueryExecutor(Generic[E, C], ABC):
    """Abstract base class for asynchronous query executors."""

    @abstractmethod
    async def execute_query(self, params: E, client: C) -> list[Any]:
        """Run the query and return every matching row.

        Pagination is applied by the caller, so rows must not be sliced here.
        """
        pass
