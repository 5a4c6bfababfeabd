"""Pagination helpers for list responses."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from ..paginator import Paginator


def build_pagination(
    total_entries: int,
    entries_per_page: int,
    current_page: Optional[int] = None,
    full: bool = True,
) -> dict:
    """Build pagination metadata for a set of ``total_entries``."""
    pager = Paginator(total_entries, entries_per_page, current_page)
    return pager.to_full_dict() if full else pager.to_dict()


def paginate(
    items: Sequence[Any],
    entries_per_page: int,
    current_page: Optional[int] = 1,
    full: bool = True,
) -> tuple[list[Any], dict]:
    """Slice items to one page and return it with pagination metadata."""
    pager = Paginator(len(items), entries_per_page, current_page)
    metadata = pager.to_full_dict() if full else pager.to_dict()
    return pager.slice(items), metadata
