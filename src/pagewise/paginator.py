"""Pagination arithmetic for in-memory result sets.

A ``Paginator`` holds three inputs (total entries, entries per page and the
current page) and derives everything a paged view needs from them: page
bounds, neighbour pages, zero-based slice indices and one-based item
numbers.

Usage:
    from pagewise import Paginator

    things = list(range(1, 11))
    pager = Paginator(total_entries=len(things), entries_per_page=3, current_page=4)

    pager.last_page           # 4
    pager.entries_on_this_page  # 1
    pager.slice(things)       # [10]

The current page is always clamped into ``[1, last_page]``. Changing the
total or the page size re-clamps it straight away. An empty set has
``last_page == 0`` and the current page collapses to 0; the index values
derived from it (``first_index == -entries_per_page``, ``last_index == -1``)
are kept consistent with that rather than special-cased.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from typing import Any, Mapping, Optional, Sequence

from .errors import InvalidConfiguration
from .pager_config import PagerSettings, resolve_settings

logger = logging.getLogger(__name__)

COMPACT_KEYS = ("total_entries", "entries_per_page", "current_page")


_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def _to_int(value: Any) -> int:
    """Truncate ``value`` to int, reading strings by their leading number.

    ``"3.0"`` and ``"2abc"`` give 3 and 2, the way query strings are usually
    cast. Raises TypeError, ValueError or OverflowError when there is nothing
    finite to read.
    """
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            raise ValueError(f"no leading number in {value!r}")
        text = match.group().strip()
        try:
            return int(text)
        except ValueError:
            return int(float(text))
    return int(value)


def _coerce_count(value: Any, field: str, minimum: int) -> int:
    """Coerce a set-defining input to int, rejecting values below ``minimum``."""
    try:
        number = _to_int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidConfiguration(
            f"{field} must be an integer, got {value!r}", field=field, value=value
        ) from None
    if number < minimum:
        raise InvalidConfiguration(
            f"{field} must be at least {minimum}, got {number}", field=field, value=value
        )
    return number


def _coerce_page(value: Any) -> int:
    """Coerce a page request to int; unreadable requests mean page 1.

    Infinite requests become the largest representable page in their
    direction so the clamp still applies.
    """
    if value is None:
        return 1
    try:
        return _to_int(value)
    except OverflowError:
        return -sys.maxsize if str(value).lstrip().startswith("-") else sys.maxsize
    except (TypeError, ValueError):
        logger.debug("Unreadable page request %r treated as page 1", value)
        return 1


class Paginator:
    """Pagination state plus the values derived from it."""

    def __init__(
        self,
        total_entries: int,
        entries_per_page: int,
        current_page: Optional[int] = None,
    ):
        self._total_entries = _coerce_count(total_entries, "total_entries", 0)
        self._entries_per_page = _coerce_count(entries_per_page, "entries_per_page", 1)
        self._current_page = 1
        self.current_page = current_page

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Paginator":
        """Create from a compact or full view mapping.

        Derived keys are ignored; they are recomputed from the inputs.
        """
        missing = [key for key in COMPACT_KEYS[:2] if key not in data]
        if missing:
            raise InvalidConfiguration(
                f"Missing required key(s): {', '.join(missing)}", field=missing[0]
            )
        return cls(
            total_entries=data["total_entries"],
            entries_per_page=data["entries_per_page"],
            current_page=data.get("current_page"),
        )

    @classmethod
    def from_json(cls, content: str) -> "Paginator":
        """Create from the JSON text of a compact or full view."""
        data = json.loads(content)
        if not isinstance(data, dict):
            raise InvalidConfiguration(
                f"Expected a JSON object, got {type(data).__name__}"
            )
        return cls.from_dict(data)

    @classmethod
    def from_settings(
        cls,
        total_entries: int,
        current_page: Optional[int] = None,
        settings: Optional[PagerSettings] = None,
    ) -> "Paginator":
        """Create using the page size from resolved settings.

        Args:
            total_entries: Size of the underlying set
            current_page: Requested page (default: 1)
            settings: Settings to use (default: resolved for the cwd)
        """
        settings = settings or resolve_settings()
        return cls(total_entries, settings.entries_per_page, current_page)

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    @property
    def total_entries(self) -> int:
        """Total number of entries in the set."""
        return self._total_entries

    @total_entries.setter
    def total_entries(self, value: int) -> None:
        self._total_entries = _coerce_count(value, "total_entries", 0)
        self._reclamp_current_page()

    @property
    def entries_per_page(self) -> int:
        """Maximum number of entries shown on each page."""
        return self._entries_per_page

    @entries_per_page.setter
    def entries_per_page(self, value: int) -> None:
        self._entries_per_page = _coerce_count(value, "entries_per_page", 1)
        self._reclamp_current_page()

    @property
    def current_page(self) -> int:
        """The page being displayed, clamped into ``[1, last_page]``."""
        return self._current_page

    @current_page.setter
    def current_page(self, value: Optional[int]) -> None:
        requested = _coerce_page(value)
        last_page = self.last_page
        if last_page == 0:
            # Empty set: every request lands on page 0
            page = 0
        elif requested > last_page:
            page = last_page
        elif requested < 1:
            page = 1
        else:
            page = requested
        if page != requested:
            logger.debug("Page %d clamped to %d (last page %d)", requested, page, last_page)
        self._current_page = page

    def _reclamp_current_page(self) -> None:
        self.current_page = self._current_page

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def last_page(self) -> int:
        """Number of the final page; 0 for an empty set."""
        return -(-self._total_entries // self._entries_per_page)

    @property
    def entries_on_this_page(self) -> int:
        """Entries on the current page.

        On the last page this is ``total_entries % entries_per_page``, so a
        last page that is exactly full reports 0.
        """
        if self._current_page != self.last_page:
            return self._entries_per_page
        return self._total_entries % self._entries_per_page

    @property
    def previous_page(self) -> Optional[int]:
        """Page before the current one, or None on the first page."""
        page = self._current_page - 1
        return page if page > 0 else None

    @property
    def next_page(self) -> Optional[int]:
        """Page after the current one, or None on the last page."""
        page = self._current_page + 1
        return page if page <= self.last_page else None

    @property
    def first_index(self) -> int:
        """Zero-based index of the first entry on the current page."""
        return (self._current_page - 1) * self._entries_per_page

    @property
    def last_index(self) -> int:
        """Zero-based index of the last entry on the current page."""
        return min(
            self.first_index + self._entries_per_page - 1,
            self._total_entries - 1,
        )

    @property
    def first_item(self) -> int:
        """One-based number of the first entry on the current page."""
        return self.first_index + 1

    @property
    def last_item(self) -> int:
        """One-based number of the last entry on the current page."""
        return self.last_index + 1

    def slice(self, items: Sequence[Any]) -> list[Any]:
        """Return the entries of ``items`` that belong on the current page.

        ``items`` is left untouched; the result is a new list.
        """
        count = self.entries_on_this_page
        if count <= 0:
            return []
        start = self.first_index
        return list(items[start:start + count])

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Compact view: the three inputs."""
        return {
            "total_entries": self._total_entries,
            "entries_per_page": self._entries_per_page,
            "current_page": self._current_page,
        }

    def to_full_dict(self) -> dict:
        """Full view: the inputs plus every derived value."""
        d = self.to_dict()
        d.update({
            "last_page": self.last_page,
            "entries_on_this_page": self.entries_on_this_page,
            "previous_page": self.previous_page,
            "next_page": self.next_page,
            "first_index": self.first_index,
            "last_index": self.last_index,
            "first_item": self.first_item,
            "last_item": self.last_item,
        })
        return d

    def to_json(self) -> str:
        """Compact view as JSON text."""
        return json.dumps(self.to_dict())

    def to_full_json(self) -> str:
        """Full view as JSON text."""
        return json.dumps(self.to_full_dict())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Paginator):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return (
            f"Paginator(total_entries={self._total_entries}, "
            f"entries_per_page={self._entries_per_page}, "
            f"current_page={self._current_page})"
        )
