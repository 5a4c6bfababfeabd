"""Shared output formatting for the CLI and library callers."""

from .format import format_response, render_cli, render_text, to_serializable
from .pagination import build_pagination, paginate

__all__ = [
    "format_response",
    "render_cli",
    "render_text",
    "to_serializable",
    "build_pagination",
    "paginate",
]
