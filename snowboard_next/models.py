from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional


class Stoke(str, Enum):
    """Qualitative rating shared by forecast days and the final recommendation."""

    GOOD = "good"
    MEH = "meh"
    BAD = "bad"


@dataclass(frozen=True)
class LiftStatus:
    open: Optional[int] = None
    total: Optional[int] = None
    closed: Optional[int] = None

    def open_ratio(self) -> Optional[float]:
        if self.open is None or not self.total:
            return None
        return self.open / self.total


@dataclass(frozen=True)
class SnowReport:
    """Snow figures from the mountain report, all in centimetres.

    ``None`` means the figure could not be read from the report, not that no
    snow fell.
    """

    snow_overnight_cm: Optional[float] = None
    snow_24_hours_cm: Optional[float] = None
    snow_48_hours_cm: Optional[float] = None
    snow_7_days_cm: Optional[float] = None
    season_total_cm: Optional[float] = None
    base_depth_cm: Optional[float] = None


@dataclass(frozen=True)
class ForecastDay:
    date: date
    label: str
    rain_mm: float
    snowfall_cm: float
    rain_before_3pm: bool
    stoke: Stoke


@dataclass(frozen=True)
class Forecast:
    days: List[ForecastDay]
    source_url: str

    def exclude_before_3pm_rain(self) -> Dict[str, bool]:
        return {day.date.isoformat(): day.rain_before_3pm for day in self.days}


@dataclass(frozen=True)
class SnowpackBulletin:
    """Regional snowpack figures from the BC River Forecast Centre commentary."""

    source_url: str
    updated_on: Optional[date] = None
    provincial_pct_median: Optional[float] = None
    vancouver_island_pct_median: Optional[float] = None
    blurb: Optional[str] = None


@dataclass(frozen=True)
class SourceError:
    """Placeholder kept in a source's slot when fetching or parsing it failed."""

    error: str
    source_url: Optional[str] = None


@dataclass
class Recommendation:
    label: str
    confidence: Stoke
    reasons: List[str] = field(default_factory=list)
