"""Pagination arithmetic for in-memory result sets."""

from .errors import InvalidConfiguration, PaginationError
from .pager_config import PagerSettings, resolve_settings
from .paginator import Paginator

__all__ = [
    "Paginator",
    "PagerSettings",
    "resolve_settings",
    "PaginationError",
    "InvalidConfiguration",
]

__version__ = "0.1.0"
