"""Output formatting utilities for the CLI and library callers."""

from __future__ import annotations

import json
from typing import Any, Callable, Optional


def to_serializable(payload: Any) -> Any:
    """Replace objects exposing ``to_dict()`` (a Paginator) with their mapping.

    Walks dicts, lists and tuples so a paginator embedded in a larger
    response serializes as its compact view.
    """
    if hasattr(payload, "to_dict") and callable(payload.to_dict):
        return payload.to_dict()
    if isinstance(payload, dict):
        return {key: to_serializable(value) for key, value in payload.items()}
    if isinstance(payload, (list, tuple)):
        return [to_serializable(value) for value in payload]
    return payload


def _encode_toon(payload: Any) -> str:
    """Encode payload to TOON format when available, else JSON."""
    try:
        from toon_format import encode  # type: ignore
    except ImportError:
        return json.dumps(payload, separators=(",", ":"))
    return encode(payload)


def render_text(payload: Any) -> str:
    """Render a flat mapping as ``key: value`` lines (None shown as ``-``)."""
    if not isinstance(payload, dict):
        return json.dumps(payload, indent=2)
    width = max((len(str(key)) for key in payload), default=0)
    lines = []
    for key, value in payload.items():
        shown = "-" if value is None else value
        lines.append(f"{str(key).ljust(width)}  {shown}")
    return "\n".join(lines)


def format_response(
    payload: Any,
    output_format: str = "toon",
    text_renderer: Optional[Callable[[Any], str]] = None,
) -> dict:
    """Normalize response with format metadata and content.

    Args:
        payload: Data to serialize. Paginators are reduced to their compact view.
        output_format: "toon", "json", or "text".
        text_renderer: Optional renderer for text output.
    """
    output_format = (output_format or "toon").lower()
    payload = to_serializable(payload)

    if output_format == "json":
        return {"format": "json", "content": payload}
    if output_format == "text":
        content = text_renderer(payload) if text_renderer else render_text(payload)
        return {"format": "text", "content": content}

    return {"format": "toon", "content": _encode_toon(payload)}


def render_cli(response: dict) -> str:
    """Render a formatted response into a CLI string."""
    fmt = response.get("format")
    content = response.get("content")
    if fmt == "json":
        return json.dumps(content, indent=2)
    return str(content)
