"""
Pagination Helpers

Page math shared by the paginated search and its page count.
"""

import math
from typing import List, Union

from dashboard.readmodel.exceptions import ValidationError

ELLIPSIS = "..."


def validate_page(page: int, operation: str = "pagination") -> int:
    """
    Reject page numbers below 1 or of the wrong type.
    
    Raises:
        ValidationError: If `page` is not an integer >= 1
    """
    if isinstance(page, bool) or not isinstance(page, int):
        raise ValidationError(operation, "Page must be an integer.")
    if page < 1:
        raise ValidationError(operation, "Page must be 1 or greater.")
    return page


def page_offset(page: int, page_size: int) -> int:
    """Row offset of the first row on `page`."""
    return (page - 1) * page_size


def total_pages(count: int, page_size: int) -> int:
    """Number of pages needed for `count` rows. No rows means no pages."""
    return math.ceil(count / page_size)


def generate_pagination(current_page: int, total: int) -> List[Union[int, str]]:
    """
    Page numbers to show in a paginator strip.
    
    Up to seven pages are listed in full. Beyond that the strip keeps the
    first and last pages and collapses the rest into "..." around the
    current page.
    
    Example:
        >>> generate_pagination(5, 10)
        [1, '...', 4, 5, 6, '...', 10]
    """
    if total <= 7:
        return list(range(1, total + 1))
    
    if current_page <= 3:
        return [1, 2, 3, ELLIPSIS, total - 1, total]
    
    if current_page >= total - 2:
        return [1, 2, ELLIPSIS, total - 2, total - 1, total]
    
    return [
        1,
        ELLIPSIS,
        current_page - 1,
        current_page,
        current_page + 1,
        ELLIPSIS,
        total,
    ]
