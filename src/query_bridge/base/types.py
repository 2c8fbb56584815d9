from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(slots=True, frozen=True)
class FilterQuery:
    """A single ``field operator value`` predicate."""

    field: str
    operator: str
    value: Any

    @classmethod
    def from_value(cls, value: FilterQuery | Mapping[str, Any]) -> FilterQuery:
        if isinstance(value, FilterQuery):
            return value
        return cls(value["field"], value["operator"], value.get("value"))


@dataclass(slots=True, frozen=True)
class PaginationQuery:
    """Raw pagination request as supplied by a caller.

    Fields are left untyped on purpose: they come from untrusted input and
    are repaired by ``normalize_pagination`` or rejected by
    ``assert_pagination_shape``. ``None`` means the field was not given.

    Defaults applied during normalization:
        page: 1
        limit: 100
        offset: ``(page - 1) * limit``
        size: accepted, never used
    """

    page: Any = None
    limit: Any = None
    offset: Any = None
    size: Any = None

    @classmethod
    def from_value(cls, value: PaginationQuery | Mapping[str, Any] | None) -> PaginationQuery:
        if value is None:
            return cls()
        if isinstance(value, PaginationQuery):
            return value
        return cls(
            page=value.get("page"),
            limit=value.get("limit"),
            offset=value.get("offset"),
            size=value.get("size"),
        )

    def as_dict(self) -> dict[str, Any]:
        """Return only the fields that were supplied."""
        items = {
            "page": self.page,
            "limit": self.limit,
            "offset": self.offset,
            "size": self.size,
        }
        return {k: v for k, v in items.items() if v is not None}


@dataclass(slots=True, frozen=True)
class GenericFilterQuery:
    """Caller-facing request: filters plus pagination."""

    filters: tuple[FilterQuery, ...] = ()
    pagination: PaginationQuery = field(default_factory=PaginationQuery)

    @classmethod
    def from_value(cls, value: GenericFilterQuery | Mapping[str, Any] | None) -> GenericFilterQuery:
        if value is None:
            return cls()
        if isinstance(value, GenericFilterQuery):
            return value
        filters: Iterable[Any] = value.get("filters") or ()
        return cls(
            filters=tuple(FilterQuery.from_value(f) for f in filters),
            pagination=PaginationQuery.from_value(value.get("pagination")),
        )


@dataclass(slots=True, frozen=True)
class NormalizedPagination:
    """Always-valid pagination bounds."""

    page: int
    limit: int
    offset: int


@dataclass(slots=True, frozen=True)
class PaginatedResponse(Generic[T]):
    """One page of results.

    ``total`` is the number of matching rows before the page slice.
    """

    data: list[T]
    total: int
    page: int
    limit: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": list(self.data),
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
        }


@dataclass(slots=True, frozen=True)
class PreparedQuery(Generic[E]):
    """Store-specific parameters produced by a service's prepare step."""

    params: E
    limit: int
    offset: int
    page: int
    pagination: PaginationQuery = field(default_factory=PaginationQuery)
