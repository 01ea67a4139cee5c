"""
Page request math shared by every paginated listing.
"""

import math
from dataclasses import dataclass
from typing import Generic, List, TypeVar

from sqlalchemy.orm import Query

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """1-based page number and page size."""
    page: int = 1
    limit: int = 10

    def __post_init__(self):
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.limit < 1:
            raise ValueError("limit must be >= 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class Page(Generic[T]):
    items: List[T]
    total: int
    request: PageRequest

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.request.limit)

    def envelope(self, data) -> dict:
        """Response body for a paginated listing; `data` is the serialized items."""
        return {
            "success": True,
            "count": self.count,
            "total": self.total,
            "totalPages": self.total_pages,
            "currentPage": self.request.page,
            "data": data,
        }


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit)


def paginate(query: Query, page: PageRequest) -> Page:
    """
    Run the count and the page fetch against the same filtered query.

    Query.count() disables eager loads, so joinedload options on `query`
    do not inflate the total.
    """
    total = query.order_by(None).count()
    items = query.offset(page.offset).limit(page.limit).all()
    return Page(items=items, total=total, request=page)
