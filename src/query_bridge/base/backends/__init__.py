"""Query executor abstractions."""

from .base import QueryExecutor
from .sync import SyncQueryExecutor

__all__ = [
    "QueryExecutor",
    "SyncQueryExecutor",
]
