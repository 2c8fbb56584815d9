"""Tests for pagination normalization and the strict shape check."""

import math

import pytest

from query_bridge import (
    NormalizedPagination,
    PaginationQuery,
    ValidationError,
    assert_pagination_shape,
    normalize_pagination,
)


class TestNormalizePagination:
    """Permissive repair of pagination input."""

    def test_defaults(self):
        assert normalize_pagination({}) == NormalizedPagination(page=1, limit=100, offset=0)
        assert normalize_pagination(None) == NormalizedPagination(page=1, limit=100, offset=0)
        assert normalize_pagination(PaginationQuery()) == NormalizedPagination(1, 100, 0)

    @pytest.mark.parametrize("page", [0, -1, -100, 0.5])
    def test_page_clamped_to_one(self, page):
        assert normalize_pagination({"page": page}).page == 1

    @pytest.mark.parametrize("limit", [-1, -10, -0.5])
    def test_negative_limit_clamped_to_zero(self, limit):
        assert normalize_pagination({"limit": limit}).limit == 0

    def test_fractional_values_are_floored(self):
        result = normalize_pagination({"page": 2.9, "limit": 10.7})
        assert result == NormalizedPagination(page=2, limit=10, offset=10)

    def test_zero_limit_is_legal(self):
        result = normalize_pagination({"page": 3, "limit": 0})
        assert result.limit == 0
        assert result.offset == 0

    def test_offset_derived_from_page_and_limit(self):
        assert normalize_pagination({"page": 3, "limit": 20}).offset == 40

    def test_negative_offset_is_derived(self):
        assert normalize_pagination({"page": 2, "limit": 5, "offset": -3}).offset == 5

    def test_explicit_offset_kept(self):
        result = normalize_pagination({"page": 4, "limit": 5, "offset": 2})
        assert result == NormalizedPagination(page=4, limit=5, offset=2)

    def test_non_numeric_offset_is_derived(self):
        assert normalize_pagination({"page": 2, "limit": 10, "offset": "7"}).offset == 10

    @pytest.mark.parametrize("bad", ["abc", "5", True, math.nan, math.inf, [1], {"a": 1}])
    def test_non_numbers_fall_back_to_defaults(self, bad):
        result = normalize_pagination({"page": bad, "limit": bad})
        assert result == NormalizedPagination(page=1, limit=100, offset=0)

    def test_size_is_ignored(self):
        assert normalize_pagination({"size": 5}) == NormalizedPagination(1, 100, 0)

    def test_invalid_input_is_repaired(self):
        result = normalize_pagination({"page": -1, "limit": -10})
        assert result.page >= 1
        assert result.limit >= 0
        assert result.offset == 0


class TestAssertPaginationShape:
    """Strict rejection of non-integer pagination."""

    def test_accepts_valid_parameters(self):
        assert_pagination_shape({"page": 1, "size": 10, "limit": 100, "offset": 0})
        assert_pagination_shape({"page": 1, "limit": 100})
        assert_pagination_shape(PaginationQuery(page=2, limit=5))

    def test_accepts_integral_floats_and_numeric_strings(self):
        assert_pagination_shape({"page": 2.0, "limit": "10", "offset": " 5 "})

    def test_handles_missing_pagination(self):
        assert_pagination_shape()
        assert_pagination_shape(None)
        assert_pagination_shape({})

    def test_rejects_fractional_page(self):
        with pytest.raises(ValidationError, match="Page must be an integer"):
            assert_pagination_shape({"page": 1.5})

    def test_rejects_non_numeric_size(self):
        with pytest.raises(ValidationError, match="Size must be an integer"):
            assert_pagination_shape({"size": "invalid"})

    @pytest.mark.parametrize(
        ("name", "value"),
        [("limit", 2.5), ("offset", "x"), ("limit", math.nan), ("offset", [1]), ("page", "")],
    )
    def test_rejects_other_fields(self, name, value):
        with pytest.raises(ValidationError) as exc_info:
            assert_pagination_shape({name: value})
        assert exc_info.value.reason == f"{name.capitalize()} must be an integer"

    def test_validation_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            assert_pagination_shape({"page": 1.5})
