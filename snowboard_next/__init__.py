"""Next-good-day snowboard recommendations from mountain, forecast and snowpack data."""

from .models import (
    Forecast,
    ForecastDay,
    LiftStatus,
    Recommendation,
    SnowpackBulletin,
    SnowReport,
    SourceError,
    Stoke,
)
from .services.decision import DecisionConfig, decide_next
from .services.seasonal import seasonal_guess

__all__ = [
    "DecisionConfig",
    "Forecast",
    "ForecastDay",
    "LiftStatus",
    "Recommendation",
    "SnowReport",
    "SnowpackBulletin",
    "SourceError",
    "Stoke",
    "decide_next",
    "seasonal_guess",
]
