from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

E = TypeVar("E")
C = TypeVar("C")


class SyncQueryExecutor(Generic[E, C], ABC):
    """Abstract base class for blocking query executors.

    Services run these in a worker thread so the event loop is not blocked.
    """

    @abstractmethod
    def execute_query(self, params: E, client: C) -> list[Any]:
        """Run the query and return every matching row."""
        pass
