"""Pagination — slices an ordered, already-cached list into pages.

Invariants:
    - page is 1-based; pages past the end are empty (total_pages still reported)
    - total_pages >= 1, even for an empty list
"""

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    per_page: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_items / self.per_page))

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


def paginate(items: Sequence[T], page: int, per_page: int) -> Page[T]:
    if per_page < 1:
        raise ValueError("per_page must be >= 1")
    page = max(1, page)
    start = (page - 1) * per_page
    return Page(
        items=list(items[start:start + per_page]),
        page=page,
        per_page=per_page,
        total_items=len(items),
    )
