"""
Client-side pagination and in-memory search filtering.
"""

import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page_number: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.page_number < self.total_pages


def total_pages(total_items: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return math.ceil(total_items / page_size)


def clamp_page(page_number: int, pages: int) -> int:
    return min(max(page_number, 1), max(1, pages))


def paginate(items: Sequence[T], page_size: int, page_number: int) -> Page[T]:
    pages = total_pages(len(items), page_size)
    page_number = clamp_page(page_number, pages)
    start = (page_number - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        page_number=page_number,
        page_size=page_size,
        total_items=len(items),
        total_pages=pages,
    )


class PageCursor:
    """Current page for a list whose size changes under it."""

    def __init__(self, page_size: int, page_number: int = 1):
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.page_size = page_size
        self.page_number = max(page_number, 1)

    def resize(self, total_items: int) -> int:
        self.page_number = clamp_page(self.page_number, total_pages(total_items, self.page_size))
        return self.page_number

    def go_to(self, page_number: int, total_items: int) -> int:
        self.page_number = page_number
        return self.resize(total_items)

    def set_page_size(self, page_size: int, total_items: int) -> int:
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.page_size = page_size
        return self.resize(total_items)

    def reset(self) -> None:
        self.page_number = 1

    def page(self, items: Sequence[T]) -> Page[T]:
        self.resize(len(items))
        return paginate(items, self.page_size, self.page_number)


def filter_by_term(
    items: Iterable[T], term: str, fields: Sequence[Callable[[T], str]]
) -> list[T]:
    """Case-insensitive substring match over one or more fields."""
    needle = (term or "").lower()
    if not needle:
        return list(items)
    return [item for item in items if any(needle in (get(item) or "").lower() for get in fields)]
