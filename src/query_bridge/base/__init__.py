"""
Base utilities and abstractions for query-bridge.

This package provides the components shared by every backend.
"""

from .backends import QueryExecutor, SyncQueryExecutor
from .builder import BaseExpressionBuilder
from .errors import QueryBridgeError, ValidationError
from .pagination import DEFAULT_LIMIT, DEFAULT_PAGE, assert_pagination_shape, normalize_pagination
from .service import BaseDatabaseService
from .types import (
    FilterQuery,
    GenericFilterQuery,
    NormalizedPagination,
    PaginatedResponse,
    PaginationQuery,
    PreparedQuery,
)
from .validation import DANGEROUS_PATTERNS, DEFAULT_MAX_DEPTH, MAX_VALUE_LENGTH, validate_value

__all__ = [
    "DANGEROUS_PATTERNS",
    "DEFAULT_LIMIT",
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_PAGE",
    "MAX_VALUE_LENGTH",
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
