"""Tests for pagination."""

import math

import pytest

from shaping.filters import apply_filters
from shaping.models import FilterSpec
from shaping.pagination import paginate


class TestPaginate:
    """Tests for page slicing and clamping."""

    def test_first_page(self):
        """Test slicing the first page."""
        page = paginate(list(range(25)), page=1, limit=10, max_per_page=20)
        assert page.items == list(range(10))
        assert page.page_num == 1
        assert page.page_size == 10
        assert page.total_pages == 3
        assert page.has_more

    def test_last_partial_page(self):
        """Test the final page is partial and has no more."""
        page = paginate(list(range(25)), page=3, limit=10, max_per_page=20)
        assert page.items == [20, 21, 22, 23, 24]
        assert not page.has_more

    def test_limit_capped_at_max(self):
        """Test oversized limits are silently capped."""
        page = paginate(list(range(50)), page=1, limit=50, max_per_page=5)
        assert page.page_size == 5
        assert len(page.items) == 5
        assert page.total_pages == 10

    def test_limit_below_one(self):
        """Test zero and negative limits become 1."""
        assert paginate([1, 2, 3], page=1, limit=0, max_per_page=20).page_size == 1
        assert paginate([1, 2, 3], page=1, limit=-4, max_per_page=20).page_size == 1

    def test_page_below_one(self):
        """Test zero and negative pages become 1."""
        page = paginate([1, 2, 3], page=0, limit=2, max_per_page=20)
        assert page.page_num == 1
        assert page.items == [1, 2]

    def test_fractional_values_floored(self):
        """Test fractional page and limit are floored."""
        page = paginate(list(range(10)), page=2.7, limit=3.9, max_per_page=20)
        assert page.page_num == 2
        assert page.page_size == 3
        assert page.items == [3, 4, 5]

    def test_empty_items(self):
        """Test empty input gives zero pages and an empty slice."""
        page = paginate([], page=1, limit=10, max_per_page=20)
        assert page.items == []
        assert page.total_pages == 0
        assert page.page_num == 1
        assert not page.has_more

    def test_page_past_end(self):
        """Test out-of-range pages are empty, not errors."""
        page = paginate(list(range(5)), page=9, limit=2, max_per_page=20)
        assert page.items == []
        assert page.total_pages == 3
        assert not page.has_more

    @pytest.mark.parametrize("limit", [1, 2, 3, 7, 20])
    def test_pages_cover_everything_once(self, accessories, limit):
        """Test concatenating all pages reproduces the filtered list."""
        filtered = apply_filters(accessories, FilterSpec(online_only=True))
        first = paginate(filtered, 1, limit, max_per_page=20)
        assert first.total_pages == math.ceil(len(filtered) / first.page_size)

        collected = []
        for n in range(1, first.total_pages + 1):
            collected.extend(paginate(filtered, n, limit, max_per_page=20).items)
        assert collected == filtered
