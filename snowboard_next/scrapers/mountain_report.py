"""Parser for the mountain report's lift and snow panels.

Input is the accessibility snapshot of a page region as produced by
Playwright's ``Locator.aria_snapshot()``::

    - heading "Lifts Open" [level=3]
    - text: "5"
    - paragraph: of 6
    - text: Snow 7 Days
    - text: 11 cm

Every field is located by anchoring on its label and reading the nearest
following number. A field that cannot be found comes back as ``None``.
"""
from __future__ import annotations

import re
from typing import Dict, Optional, Pattern

from ..logging import get_logger
from ..models import LiftStatus, SnowReport
from .base import search_int, search_number

logger = get_logger(__name__)

_LIFTS_OPEN = re.compile(r'heading "Lifts Open"[\s\S]*?\n[ \t]*- text: "?(\d+)"?[ \t]*$', re.MULTILINE)
_LIFTS_TOTAL = re.compile(r'heading "Lifts Open"[\s\S]*?\n[ \t]*- paragraph: of (\d+)')
_LIFTS_CLOSED = re.compile(r'heading "Lifts Closed"[\s\S]*?\n[ \t]*- paragraph: (\d+) of (\d+)')


def _snow_pattern(label: str) -> Pattern[str]:
    # The value sits on the line right after the label.
    return re.compile(rf'{re.escape(label)}[^\n]*\n[ \t]*- text: "?(\d+(?:\.\d+)?)\s*cm')


SNOW_LABELS: Dict[str, str] = {
    "snow_overnight_cm": "Snow Overnight",
    "snow_24_hours_cm": "Snow 24 Hrs.",
    "snow_48_hours_cm": "Snow 48 Hrs.",
    "snow_7_days_cm": "Snow 7 Days",
    "season_total_cm": "Snow Season Total",
    "base_depth_cm": "Base Depth",
}

_SNOW_PATTERNS: Dict[str, Pattern[str]] = {field: _snow_pattern(label) for field, label in SNOW_LABELS.items()}


def parse_lift_status(snapshot: str) -> LiftStatus:
    """Read open/total/closed lift counts from the ``#lift-status`` snapshot."""
    snapshot = snapshot or ""
    open_count = search_int(_LIFTS_OPEN, snapshot)
    total: Optional[int] = search_int(_LIFTS_TOTAL, snapshot)
    closed = search_int(_LIFTS_CLOSED, snapshot)

    if open_count is not None and total is not None and open_count > total:
        logger.warning("report.lifts_inconsistent", open=open_count, total=total)
        open_count, total = None, None

    return LiftStatus(open=open_count, total=total, closed=closed)


def parse_snow_report(snapshot: str) -> SnowReport:
    """Read the snow figures (cm) from the ``#snow`` snapshot."""
    snapshot = snapshot or ""
    values = {field: search_number(pattern, snapshot) for field, pattern in _SNOW_PATTERNS.items()}
    return SnowReport(**values)
