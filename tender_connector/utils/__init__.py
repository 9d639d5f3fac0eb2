"""Utility functions for text normalization and time handling."""

from .text import collapse_whitespace, normalize_text, strip_html
from .timestamps import (
    ensure_utc,
    parse_datetime,
    utc_now,
    window_start,
)

__all__ = [
    # Text
    "normalize_text",
    "strip_html",
    "collapse_whitespace",
    # Timestamps
    "utc_now",
    "ensure_utc",
    "parse_datetime",
    "window_start",
]
