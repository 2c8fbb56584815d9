from __future__ import annotations


class QueryBridgeError(Exception):
    """Base class for errors raised by query-bridge itself."""

    pass


class ValidationError(QueryBridgeError, ValueError):
    """Input rejected before any query is built or executed."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
