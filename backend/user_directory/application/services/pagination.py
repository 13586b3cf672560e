"""Pagination slicer for the visible record list."""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

PAGE_SIZE = 5


@dataclass(frozen=True)
class Page(Generic[T]):
    """One window of an ordered list."""

    items: list[T]
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


def count_pages(total_items: int, page_size: int = PAGE_SIZE) -> int:
    """Ceiling of total / size, never below 1 (an empty list still has a page)."""
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return max(1, math.ceil(total_items / page_size))


def clamp_page(page: int, total_pages: int) -> int:
    return min(max(page, 1), max(1, total_pages))


def paginate(items: Sequence[T], page: int = 1, page_size: int = PAGE_SIZE) -> Page[T]:
    """Slice ``[(page-1)*size, page*size)`` after clamping the page into range."""
    total_pages = count_pages(len(items), page_size)
    current = clamp_page(page, total_pages)
    start = (current - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        page=current,
        page_size=page_size,
        total_items=len(items),
        total_pages=total_pages,
    )
