"""Shape of ``data.json``, the only contract with the page that renders it.

Field names are snake_case in Python and camelCase on the wire.
"""
from __future__ import annotations

import datetime as dt
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from snowboard_next.models import (
    Forecast,
    ForecastDay,
    LiftStatus,
    Recommendation,
    SnowpackBulletin,
    SnowReport,
    SourceError,
)


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LiftsPayload(_Payload):
    open: Optional[int] = None
    total: Optional[int] = None
    closed: Optional[int] = None


class SnowPayload(_Payload):
    snow_overnight_cm: Optional[float] = None
    snow_24_hours_cm: Optional[float] = None
    snow_48_hours_cm: Optional[float] = None
    snow_7_days_cm: Optional[float] = None
    season_total_cm: Optional[float] = None
    base_depth_cm: Optional[float] = None


class CurrentPayload(_Payload):
    lifts: LiftsPayload
    snow: SnowPayload
    error: Optional[str] = None


class ForecastDayPayload(_Payload):
    date: dt.date
    label: str
    rain_mm: float
    snowfall_cm: float
    rain_before_3pm: bool = Field(alias="rainBefore3pm")
    stoke: str


class RawForecastPayload(_Payload):
    url: str


class ForecastPayload(_Payload):
    days: List[ForecastDayPayload]
    exclude_before_3pm_rain: Dict[str, bool] = Field(alias="excludeBefore3pmRain")
    raw: RawForecastPayload


class ErrorPayload(_Payload):
    error: str


class SnowpackErrorPayload(ErrorPayload):
    source_url: Optional[str] = None


class SnowpackPayload(_Payload):
    source_url: str
    updated_on: Optional[dt.date] = None
    provincial_pct_median: Optional[float] = None
    vancouver_island_pct_median: Optional[float] = None
    blurb: Optional[str] = None


class RecommendationPayload(_Payload):
    label: str
    confidence: str
    reasons: List[str]


class SourceLink(_Payload):
    label: str
    url: str


class ReportArtifact(_Payload):
    generated_at: dt.datetime
    generated_at_local: str
    current: CurrentPayload
    forecast: Union[ErrorPayload, ForecastPayload]
    bc_snowpack: Union[SnowpackErrorPayload, SnowpackPayload]
    next: RecommendationPayload
    sources: List[SourceLink]

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2) + "\n"


def current_payload(lifts: LiftStatus, snow: SnowReport, error: Optional[str] = None) -> CurrentPayload:
    return CurrentPayload(
        lifts=LiftsPayload(open=lifts.open, total=lifts.total, closed=lifts.closed),
        snow=SnowPayload(
            snow_overnight_cm=snow.snow_overnight_cm,
            snow_24_hours_cm=snow.snow_24_hours_cm,
            snow_48_hours_cm=snow.snow_48_hours_cm,
            snow_7_days_cm=snow.snow_7_days_cm,
            season_total_cm=snow.season_total_cm,
            base_depth_cm=snow.base_depth_cm,
        ),
        error=error,
    )


def _day_payload(day: ForecastDay) -> ForecastDayPayload:
    return ForecastDayPayload(
        date=day.date,
        label=day.label,
        rain_mm=day.rain_mm,
        snowfall_cm=day.snowfall_cm,
        rain_before_3pm=day.rain_before_3pm,
        stoke=day.stoke.value,
    )


def forecast_payload(forecast: Union[Forecast, SourceError]) -> Union[ForecastPayload, ErrorPayload]:
    if isinstance(forecast, SourceError):
        return ErrorPayload(error=forecast.error)
    return ForecastPayload(
        days=[_day_payload(day) for day in forecast.days],
        exclude_before_3pm_rain=forecast.exclude_before_3pm_rain(),
        raw=RawForecastPayload(url=forecast.source_url),
    )


def snowpack_payload(bulletin: Union[SnowpackBulletin, SourceError]) -> Union[SnowpackPayload, SnowpackErrorPayload]:
    if isinstance(bulletin, SourceError):
        return SnowpackErrorPayload(error=bulletin.error, source_url=bulletin.source_url)
    return SnowpackPayload(
        source_url=bulletin.source_url,
        updated_on=bulletin.updated_on,
        provincial_pct_median=bulletin.provincial_pct_median,
        vancouver_island_pct_median=bulletin.vancouver_island_pct_median,
        blurb=bulletin.blurb,
    )


def recommendation_payload(recommendation: Recommendation) -> RecommendationPayload:
    return RecommendationPayload(
        label=recommendation.label,
        confidence=recommendation.confidence.value,
        reasons=list(recommendation.reasons),
    )
