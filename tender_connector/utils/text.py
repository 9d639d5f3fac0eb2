"""Text utilities for diacritic-insensitive matching and HTML cleanup.

This module provides the comparison primitive used by every matcher in the
connector. Upstream sources spell the same organization or keyword with and
without accents ("láser" / "laser", "Órgano" / "organo") and in arbitrary
case, so all comparisons go through normalize_text().
"""

import html
import re
import unicodedata
from typing import Optional


def normalize_text(text: Optional[str]) -> str:
    """Fold diacritics and case to produce a comparable form of text.

    Normalization steps:
    - Decompose to NFD so accented letters split into base + combining mark
    - Drop combining marks
    - Casefold

    The result is idempotent: normalize_text(normalize_text(x)) == normalize_text(x).

    Args:
        text: Text to normalize (None is treated as empty)

    Returns:
        Comparable form of the text, empty string for None/empty input

    Example:
        >>> normalize_text("Órgano de Contratación")
        'organo de contratacion'
    """
    if not text:
        return ""

    decomposed = unicodedata.normalize("NFD", str(text))
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))

    # casefold() can reintroduce decomposable characters (e.g. "ß" -> "ss" is fine,
    # but some compatibility forms are not), so decompose once more
    folded = unicodedata.normalize("NFD", stripped.casefold())
    return "".join(ch for ch in folded if not unicodedata.combining(ch))


def strip_html(html_text: Optional[str]) -> str:
    """Remove HTML tags and entities, collapsing whitespace.

    Args:
        html_text: Text possibly containing HTML markup

    Returns:
        Plain text on a single line
    """
    if not html_text:
        return ""

    text = re.sub(r"<[^>]+>", " ", str(html_text))
    text = html.unescape(text)
    return re.sub(r"\s+", " ", text).strip()


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace to single spaces and trim."""
    return re.sub(r"\s+", " ", text).strip()
