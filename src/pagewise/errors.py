"""Exceptions raised by pagewise."""

from typing import Any, Optional


class PaginationError(Exception):
    """Base class for pagewise errors."""


class InvalidConfiguration(PaginationError, ValueError):
    """Raised when a page size or entry count cannot describe a page set.

    Page requests are never rejected (they are clamped instead); only the
    inputs that define the set itself are validated here.
    """

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value
