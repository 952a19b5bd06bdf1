"""
Pagination Module

In-memory pagination over already fetched rows.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Sequence

DEFAULT_PAGE_SIZE = 10


@dataclass
class Page:
    """One page of a list."""

    current_page: int
    page_size: int
    total_items: int
    total_pages: int
    items: list[Any] = field(default_factory=list)

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.current_page > 1

    def to_dict(self) -> dict:
        return {
            "items": self.items,
            "page": self.current_page,
            "page_size": self.page_size,
            "total": self.total_items,
            "total_pages": self.total_pages,
        }


def _total_pages(total_items: int, page_size: int) -> int:
    return max(1, math.ceil(total_items / page_size))


def _clamp(page: int, total_pages: int) -> int:
    return min(max(1, page), total_pages)


def paginate(
    items: Sequence[Any] | None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Page:
    """Slice items into a page.

    There is always at least one page, and out-of-range page numbers are
    clamped into [1, total_pages].

    Args:
        items: Rows to paginate (None is treated as empty)
        page: Requested page number
        page_size: Rows per page

    Returns:
        Page
    """
    if page_size < 1:
        raise ValueError("page_size must be at least 1")

    rows = list(items) if items else []
    total_pages = _total_pages(len(rows), page_size)
    current = _clamp(page, total_pages)
    start = (current - 1) * page_size

    return Page(
        current_page=current,
        page_size=page_size,
        total_items=len(rows),
        total_pages=total_pages,
        items=rows[start:start + page_size],
    )


class Paginator:
    """Stateful pager over a list; replacing the items resets to page 1."""

    def __init__(self, items: Sequence[Any] | None = None, page_size: int = DEFAULT_PAGE_SIZE):
        self.page_size = page_size
        self._items = list(items) if items else []
        self._page = 1

    @property
    def items(self) -> list[Any]:
        return self._items

    @items.setter
    def items(self, items: Sequence[Any] | None) -> None:
        self._items = list(items) if items else []
        self._page = 1

    @property
    def total_pages(self) -> int:
        return _total_pages(len(self._items), self.page_size)

    @property
    def page(self) -> Page:
        return paginate(self._items, self._page, self.page_size)

    def set_page(self, page: int) -> Page:
        self._page = _clamp(page, self.total_pages)
        return self.page

    def next(self) -> Page:
        return self.set_page(self._page + 1)

    def prev(self) -> Page:
        return self.set_page(self._page - 1)

    def reset(self) -> Page:
        return self.set_page(1)
