"""
Unit Tests - Pagination
"""
import pytest

from dashboard.readmodel.exceptions import ErrorKind, ValidationError
from dashboard.readmodel.pagination import (
    generate_pagination,
    page_offset,
    total_pages,
    validate_page,
)


class TestValidatePage:
    
    def test_accepts_positive(self):
        assert validate_page(1) == 1
        assert validate_page(40) == 40
    
    @pytest.mark.parametrize("page", [0, -1])
    def test_rejects_below_one(self, page):
        with pytest.raises(ValidationError) as exc_info:
            validate_page(page, "fetch_filtered_invoices")
        
        assert exc_info.value.kind == ErrorKind.VALIDATION
        assert exc_info.value.operation == "fetch_filtered_invoices"
    
    @pytest.mark.parametrize("page", ["1", 1.0, None, True])
    def test_rejects_non_integers(self, page):
        with pytest.raises(ValidationError):
            validate_page(page)


def test_page_offset():
    assert page_offset(1, 6) == 0
    assert page_offset(2, 6) == 6
    assert page_offset(5, 6) == 24


@pytest.mark.parametrize(
    "count,expected",
    [(0, 0), (1, 1), (6, 1), (7, 2), (12, 2), (13, 3)],
)
def test_total_pages(count, expected):
    assert total_pages(count, 6) == expected


class TestGeneratePagination:
    
    def test_short_strip_lists_every_page(self):
        assert generate_pagination(1, 5) == [1, 2, 3, 4, 5]
        assert generate_pagination(3, 7) == [1, 2, 3, 4, 5, 6, 7]
    
    def test_empty(self):
        assert generate_pagination(1, 0) == []
    
    def test_near_start(self):
        assert generate_pagination(2, 10) == [1, 2, 3, "...", 9, 10]
    
    def test_near_end(self):
        assert generate_pagination(9, 10) == [1, 2, "...", 8, 9, 10]
    
    def test_middle(self):
        assert generate_pagination(5, 10) == [1, "...", 4, 5, 6, "...", 10]
