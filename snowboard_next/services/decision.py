from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from fractions import Fraction
from typing import List, Mapping, Optional, Sequence

from snowboard_next.config import app_config
from snowboard_next.logging import get_logger
from snowboard_next.models import ForecastDay, LiftStatus, Recommendation, SnowReport, Stoke
from snowboard_next.services.seasonal import BulletinInput, seasonal_guess

logger = get_logger(__name__)

NO_ACCEPTABLE_DAY = "no acceptable (no-rain-before-3pm) day found"
TODAY_LABEL = "Next good day: Today (no rain before 3pm), go when you can"


@dataclass
class DecisionConfig:
    """Thresholds for calling today rideable.

    Overrides arrive already merged by :func:`snowboard_next.config.load_config`
    (YAML ``decision`` section plus ``SNOWBOARD_DECISION_*`` variables).
    """

    lift_open_ratio: float = 0.67
    snow_7_days_cm: float = 10.0
    base_depth_cm: float = 80.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, float] | None) -> "DecisionConfig":
        """Build thresholds from a config mapping. Unknown keys are ignored."""
        values = {k: float(v) for k, v in (data or {}).items() if v is not None and k in cls.__dataclass_fields__}
        return cls(**values)


def _fmt(value: float) -> str:
    return f"{value:g}"


def _ratio_threshold(threshold: float) -> Fraction:
    # 0.67 stands for 2/3, 0.33 for 1/3: snap to a simple fraction when the
    # configured value is that fraction rounded to two decimals.
    exact = Fraction(str(threshold))
    simple = exact.limit_denominator(10)
    return simple if abs(simple - exact) < Fraction(1, 200) else exact


def lifts_ok(lifts: Optional[LiftStatus], config: DecisionConfig) -> bool:
    if lifts is None or lifts.open is None or not lifts.total:
        return False
    return Fraction(lifts.open, lifts.total) >= _ratio_threshold(config.lift_open_ratio)


def snow_ok(snow: Optional[SnowReport], config: DecisionConfig) -> bool:
    return bool(snow) and snow.snow_7_days_cm is not None and snow.snow_7_days_cm >= config.snow_7_days_cm


def base_ok(snow: Optional[SnowReport], config: DecisionConfig) -> bool:
    return bool(snow) and snow.base_depth_cm is not None and snow.base_depth_cm >= config.base_depth_cm


def today_excluded(days: Sequence[ForecastDay]) -> bool:
    # Only the first forecast entry is checked, whatever date it carries.
    return bool(days) and days[0].rain_before_3pm


def _current_condition_reasons(lifts: Optional[LiftStatus], snow: Optional[SnowReport]) -> List[str]:
    reasons: List[str] = []
    if lifts and lifts.open is not None and lifts.total is not None:
        reasons.append(f"Cypress lift status: {lifts.open}/{lifts.total} open.")
    if snow and snow.snow_7_days_cm is not None:
        reasons.append(f"Snow (7 days): {_fmt(snow.snow_7_days_cm)} cm.")
    if snow and snow.base_depth_cm is not None:
        reasons.append(f"Base depth: {_fmt(snow.base_depth_cm)} cm.")
    return reasons


def _forecast_day_reasons(day: ForecastDay) -> List[str]:
    reasons = [f"No forecast rain before 3pm on {day.date.isoformat()}."]
    if day.snowfall_cm > 0:
        reasons.append(f"Forecast snowfall: ~{_fmt(day.snowfall_cm)} cm (low confidence).")
    if day.rain_mm > 0:
        reasons.append(f"Forecast total rain: ~{_fmt(day.rain_mm)} mm (but after 3pm, per rule).")
    return reasons


def _next_day_label(day: ForecastDay) -> str:
    iso = day.date.isoformat()
    if not day.label or iso in day.label:
        return f"Next good day: {day.label or iso}"
    return f"Next good day: {day.label} ({iso})"


def decide_next(
    lifts: Optional[LiftStatus],
    snow: Optional[SnowReport],
    days: Sequence[ForecastDay],
    bulletin: BulletinInput,
    *,
    today: date,
    config: Optional[DecisionConfig] = None,
) -> Recommendation:
    """Pick the next rideable day.

    Rules, first match wins:

    1. Today, when it is not excluded by rain before 3pm, most lifts are open
       and either the 7-day snowfall or the base depth is good.
    2. The first later forecast day without rain before 3pm.
    3. The seasonal calendar guess.

    ``reasons`` accumulates every fact considered along the way. Missing
    inputs count as insufficient evidence, never as an error.
    """
    config = config or DecisionConfig.from_mapping(app_config.decision)
    reasons = _current_condition_reasons(lifts, snow)

    excluded = today_excluded(days)
    if excluded:
        reasons.append("Excluded today: forecast shows rain before 3pm.")

    if not excluded and lifts_ok(lifts, config) and (snow_ok(snow, config) or base_ok(snow, config)):
        recommendation = Recommendation(label=TODAY_LABEL, confidence=Stoke.GOOD, reasons=reasons)
        logger.info("decision.result", rule="today", confidence=recommendation.confidence.value)
        return recommendation

    next_day = next((day for day in days[1:] if not day.rain_before_3pm), None)
    if next_day is not None:
        recommendation = Recommendation(
            label=_next_day_label(next_day),
            confidence=Stoke.MEH,
            reasons=[*reasons, *_forecast_day_reasons(next_day)],
        )
        logger.info("decision.result", rule="forecast", day=next_day.date.isoformat())
        return recommendation

    seasonal = seasonal_guess(today, bulletin)
    scanned = len(days) - 1
    if not days:
        note = f"Also: no forecast available, so {NO_ACCEPTABLE_DAY}."
    elif scanned == 0:
        note = f"Also: the forecast covers only today, so {NO_ACCEPTABLE_DAY}."
    else:
        note = f"Also: {NO_ACCEPTABLE_DAY} in the next {scanned} day{'s' if scanned != 1 else ''}."
    recommendation = Recommendation(
        label=seasonal.label,
        confidence=seasonal.confidence,
        reasons=[*reasons, *seasonal.reasons, note],
    )
    logger.info("decision.result", rule="seasonal", confidence=recommendation.confidence.value)
    return recommendation
