"""
Listing Helpers Tests

Tests for pagination and search filtering.
"""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "python"))

from listing import Paginator, filter_records, matches_search, paginate


class TestPaginate:
    """Tests for paginate()."""

    def test_first_page(self):
        page = paginate(list(range(25)), page=1, page_size=10)

        assert page.items == list(range(10))
        assert page.total_items == 25
        assert page.total_pages == 3
        assert page.has_next is True
        assert page.has_prev is False

    def test_last_partial_page(self):
        page = paginate(list(range(25)), page=3, page_size=10)
        assert page.items == [20, 21, 22, 23, 24]
        assert page.has_next is False

    @pytest.mark.parametrize("requested,expected", [(0, 1), (-4, 1), (99, 3)])
    def test_page_is_clamped(self, requested, expected):
        assert paginate(list(range(25)), page=requested).current_page == expected

    def test_empty_list_has_one_page(self):
        page = paginate([], page=5)
        assert page.total_pages == 1
        assert page.current_page == 1
        assert page.items == []

    def test_none_is_empty(self):
        assert paginate(None).total_items == 0

    def test_invalid_page_size(self):
        with pytest.raises(ValueError):
            paginate([1, 2], page_size=0)

    def test_to_dict(self):
        assert paginate([1, 2, 3], page=2, page_size=2).to_dict() == {
            "items": [3],
            "page": 2,
            "page_size": 2,
            "total": 3,
            "total_pages": 2,
        }


class TestPaginator:
    """Tests for the stateful Paginator."""

    def test_navigation(self):
        pager = Paginator(list(range(15)), page_size=5)

        assert pager.next().current_page == 2
        assert pager.next().current_page == 3
        assert pager.next().current_page == 3
        assert pager.prev().current_page == 2
        assert pager.reset().current_page == 1
        assert pager.prev().current_page == 1

    def test_set_page_clamps(self):
        pager = Paginator(list(range(15)), page_size=5)
        assert pager.set_page(10).items == [10, 11, 12, 13, 14]

    def test_new_items_reset_page(self):
        pager = Paginator(list(range(15)), page_size=5)
        pager.set_page(3)
        pager.items = list(range(30))
        assert pager.page.current_page == 1
        assert pager.total_pages == 6


class TestSearch:
    """Tests for name/phone search."""

    @pytest.fixture
    def records(self):
        return [
            {"name": "Acme Corp", "phone": "555-0100"},
            {"name": "Globex", "phone": None},
            {"name": None, "phone": "555-0199"},
        ]

    def test_case_insensitive_name(self, records):
        assert filter_records(records, "  acme ") == [records[0]]

    def test_phone_match(self, records):
        assert filter_records(records, "0199") == [records[2]]

    def test_empty_query_matches_all(self, records):
        assert filter_records(records, "   ") == records
        assert filter_records(records, None) == records

    def test_email_not_searched(self):
        assert not matches_search({"name": "A", "email": "acme@example.com"}, "acme")

    def test_none_records(self):
        assert filter_records(None, "x") == []
