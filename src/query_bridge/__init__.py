"""
Query Bridge - filtered, paginated queries decoupled from the store that runs them.

A backend supplies two small pieces:
- an expression builder turning filters into a store-native query object
- a query executor running that object and returning every matching row

``BaseDatabaseService`` ties them together, normalizes pagination and slices
the page in-process. ``validate_value`` rejects NoSQL-injection shaped filter
values before they reach a builder.

Usage:
    # Reference in-memory backend
    from query_bridge.memory import MemoryDatabaseService

    # Writing a backend
    from query_bridge import BaseDatabaseService, BaseExpressionBuilder, QueryExecutor
"""

from .base.backends import QueryExecutor, SyncQueryExecutor
from .base.builder import BaseExpressionBuilder
from .base.errors import QueryBridgeError, ValidationError
from .base.pagination import assert_pagination_shape, normalize_pagination
from .base.service import BaseDatabaseService
from .base.types import (
    FilterQuery,
    GenericFilterQuery,
    NormalizedPagination,
    PaginatedResponse,
    PaginationQuery,
    PreparedQuery,
)
from .base.validation import validate_value

__version__ = "0.1.0"

__all__ = [
    "BaseDatabaseService",
    "BaseExpressionBuilder",
    "FilterQuery",
    "GenericFilterQuery",
    "NormalizedPagination",
    "PaginatedResponse",
    "PaginationQuery",
    "PreparedQuery",
    "QueryBridgeError",
    "QueryExecutor",
    "SyncQueryExecutor",
    "ValidationError",
    "assert_pagination_shape",
    "normalize_pagination",
    "validate_value",
]
