"""Page slicing for the filtered repository view."""

import math
from dataclasses import dataclass
from typing import Generic, List, Sequence, TypeVar

T = TypeVar("T")

DEFAULT_PER_PAGE = 10


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    page: int
    total_pages: int
    start_index: int
    end_index: int
    has_next: bool
    has_previous: bool


def paginate(items: Sequence[T], page: int = 1, per_page: int = DEFAULT_PER_PAGE) -> Page[T]:
    """
    Slice one page out of items.
    
    Args:
        items: Full result sequence
        page: 1-based page number, clamped into the valid range
        per_page: Items per page (must be positive)
    
    Returns:
        Page with the sliced items and navigation info
    """
    if per_page <= 0:
        raise ValueError(f"per_page must be positive, got {per_page}")
    
    total_pages = math.ceil(len(items) / per_page)
    page = max(1, min(page, total_pages)) if total_pages else 1
    start_index = (page - 1) * per_page if total_pages else 0
    end_index = min(start_index + per_page, len(items))
    
    return Page(
        items=list(items[start_index:end_index]),
        page=page,
        total_pages=total_pages,
        start_index=start_index,
        end_index=end_index,
        has_next=page < total_pages,
        has_previous=page > 1,
    )
