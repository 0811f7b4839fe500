"""Service layer: forecast aggregation, seasonal fallback and the decision engine."""

from .decision import DecisionConfig, decide_next
from .forecast import aggregate_hourly, fetch_forecast
from .seasonal import seasonal_guess, snowpack_bias

__all__ = [
    "DecisionConfig",
    "aggregate_hourly",
    "decide_next",
    "fetch_forecast",
    "seasonal_guess",
    "snowpack_bias",
]
