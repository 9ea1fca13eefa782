"""
URL slug generation for bookshop, city and county names.

Slugs are lowercase, hyphen-separated tokens. They are derived, not stored,
and are not guaranteed to be unique across the bookshop collection.
"""

from __future__ import annotations

import re
from typing import Optional

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-{2,}")


def slugify(text: Optional[str]) -> str:
    """
    Convert free text to a URL slug.

    Characters outside ``[a-z0-9\\s-]`` are dropped after lowercasing, so
    accented and non-Latin letters disappear rather than being transliterated.

    Args:
        text: Bookshop, city or county name

    Returns:
        str: Slug (e.g. "Powell's Books" -> "powells-books"), or "" for empty input

    Examples:
        >>> slugify("Powell's Books")
        'powells-books'
        >>> slugify("  Books -- & More ")
        'books-more'
    """
    if not text or not isinstance(text, str):
        return ""
    s = _DISALLOWED.sub("", text.lower())
    s = _WHITESPACE.sub("-", s)
    s = _HYPHENS.sub("-", s)
    return s.strip("-")
