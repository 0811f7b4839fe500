"""Parser for the BC River Forecast Centre snow conditions commentary.

Source: https://www2.gov.bc.ca/.../snow-survey-water-supply-bulletin/snow-conditions-commentary
"""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

from ..models import SnowpackBulletin
from .base import html_to_text, search_number

BLURB_MAX_LENGTH = 260
ELLIPSIS = "…"

_MONTHS = "January|February|March|April|May|June|July|August|September|October|November|December"

_UPDATED_ON = re.compile(r"Last updated on\s+([A-Za-z]+\s+\d{1,2},\s+\d{4})", re.IGNORECASE)
_PROVINCIAL = re.compile(
    r"provincial average[^%]{0,120}is\s+(\d+(?:\.\d+)?)%\s+of\s+the\s+period-of-record\s+median",
    re.IGNORECASE,
)
_VANCOUVER_ISLAND = re.compile(r"Vancouver Island\s*\((\d+(?:\.\d+)?)%\)", re.IGNORECASE)
# Commentary body: from the dated heading up to the station listing or the provincial summary.
_BLURB = re.compile(
    rf"(?<!on )(?:{_MONTHS})\s+\d{{1,2}},\s+\d{{4}}\s+(.*?)"
    r"(?:A complete listing of Automated Snow Weather Stations|The provincial average across all ASWS sites)",
    re.IGNORECASE,
)


def _parse_updated_on(text: str) -> Optional[date]:
    match = _UPDATED_ON.search(text)
    if not match:
        return None
    raw = " ".join(match.group(1).split())
    try:
        return datetime.strptime(raw, "%B %d, %Y").date()
    except ValueError:
        return None


def truncate_blurb(text: str, limit: int = BLURB_MAX_LENGTH) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def _parse_blurb(text: str) -> Optional[str]:
    match = _BLURB.search(text)
    if not match:
        return None
    blurb = match.group(1).strip()
    return truncate_blurb(blurb) if blurb else None


def parse_bulletin(html: str, *, source_url: str) -> SnowpackBulletin:
    """Extract snowpack percentages, the update date and a short excerpt from bulletin HTML."""
    text = html_to_text(html)
    return SnowpackBulletin(
        source_url=source_url,
        updated_on=_parse_updated_on(text),
        provincial_pct_median=search_number(_PROVINCIAL, text),
        vancouver_island_pct_median=search_number(_VANCOUVER_ISLAND, text),
        blurb=_parse_blurb(text),
    )
