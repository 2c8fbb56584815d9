"""
In-memory backend.

Evaluates filters against Python rows (mappings or objects). Useful for
tests and as a reference for writing real backends.

Usage:
    from query_bridge.memory import MemoryDatabaseService

    service = MemoryDatabaseService("items", rows)
    page = await service.fetch_with_filters_and_pagination(
        {"filters": [{"field": "name", "operator": "=", "value": "Item 1"}],
         "pagination": {"page": 1, "limit": 10}},
        None,
    )
"""

from .executor import MemoryQueryExecutor
from .expression import MemoryExpression, MemoryExpressionBuilder
from .service import MemoryDatabaseService

__all__ = [
    "MemoryDatabaseService",
    "MemoryExpression",
    "MemoryExpressionBuilder",
    "MemoryQueryExecutor",
]
