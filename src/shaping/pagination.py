"""Page slicing with clamped page size."""

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of a result set."""

    items: list[T]
    page_num: int
    page_size: int
    total_pages: int
    has_more: bool


def paginate(items: Sequence[T], page: int | float, limit: int | float, max_per_page: int) -> Page[T]:
    """Slice ``items`` into the requested page.

    Page numbers below 1 become 1 and page sizes are clamped to
    ``[1, max_per_page]``. A page past the end is empty rather than an error.
    """
    page_num = max(1, math.floor(page))
    page_size = min(max(1, math.floor(limit)), max(1, max_per_page))
    total_pages = math.ceil(len(items) / page_size)

    start = (page_num - 1) * page_size
    end = start + page_size

    return Page(
        items=list(items[start:end]),
        page_num=page_num,
        page_size=page_size,
        total_pages=total_pages,
        has_more=page_num < total_pages,
    )
