"""Text utilities shared by the report and bulletin parsers."""
from __future__ import annotations

import re
from typing import Optional, Pattern

from bs4 import BeautifulSoup

_WHITESPACE = re.compile(r"\s+")


def create_soup(html: str) -> BeautifulSoup:
    """Create a BeautifulSoup parser from HTML content."""
    return BeautifulSoup(html, "lxml")


def html_to_text(html: str) -> str:
    """Flatten an HTML document to a single line of visible text.

    Scripts and styles are dropped entirely; every run of whitespace collapses
    to one space so label-anchored patterns can span former tag boundaries.
    """
    if not html:
        return ""
    soup = create_soup(html)
    for node in soup(["script", "style", "noscript"]):
        node.decompose()
    return _WHITESPACE.sub(" ", soup.get_text(" ")).strip()


def to_number(raw: Optional[str]) -> Optional[float]:
    """Convert a captured numeric token, returning ``None`` for anything unparseable."""
    if raw is None:
        return None
    try:
        return float(raw.replace(",", ""))
    except ValueError:
        return None


def search_number(pattern: Pattern[str], text: str, group: int = 1) -> Optional[float]:
    """Return the numeric capture of the first ``pattern`` match in ``text``."""
    if not text:
        return None
    match = pattern.search(text)
    if not match:
        return None
    return to_number(match.group(group))


def search_int(pattern: Pattern[str], text: str, group: int = 1) -> Optional[int]:
    value = search_number(pattern, text, group)
    return int(value) if value is not None else None
