"""HTML-related utility helpers."""

from __future__ import annotations

from html import escape as _html_escape
from typing import Iterable, Mapping


def escape_html(text: str, *, enabled: bool = True) -> str:
    """Escape HTML special characters when enabled."""
    if not enabled:
        return text
    return _html_escape(text)


def format_style(properties: Mapping[str, str] | Iterable[tuple[str, str]]) -> str:
    """Serialize CSS properties into an inline ``style`` attribute value.

    Parameters
    ----------
    properties : mapping or iterable of (name, value) pairs
        CSS properties in declaration order. Custom properties (``--name``)
        are emitted as-is.

    Returns
    -------
    str
        Declarations joined with ``"; "``, e.g. ``"--grid-cols: 2; grid-row: 1"``

    """
    items = properties.items() if isinstance(properties, Mapping) else properties
    return "; ".join(f"{name}: {value}" for name, value in items)


def format_class_list(classes: Iterable[str]) -> str:
    """Join class names into a ``class`` attribute value, dropping blanks and duplicates."""
    seen: list[str] = []
    for name in classes:
        if name and name not in seen:
            seen.append(name)
    return " ".join(seen)


__all__ = ["escape_html", "format_style", "format_class_list"]
