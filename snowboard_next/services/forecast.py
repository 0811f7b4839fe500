from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

import httpx

from snowboard_next.config import ForecastConfig, MountainSettings
from snowboard_next.http_client import HttpFetcher
from snowboard_next.models import Forecast, ForecastDay, Stoke

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"
HOURLY_VARIABLES = "rain,snowfall,temperature_2m"


@dataclass
class _DayTotals:
    """Running per-day sums while hourly samples are bucketed."""

    rain_mm: float = 0.0
    snowfall_cm: float = 0.0
    rain_before_3pm: bool = False


def _sample(values: Sequence[Any], index: int) -> float:
    if index >= len(values) or values[index] is None:
        return 0.0
    return float(values[index])


def _round_tenth(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def is_rain_hour(rain_mm: float, snowfall_cm: float, temperature_c: float, *, snow_temperature_c: float = 1.0) -> bool:
    """An hour counts as rain unless it is cold enough and the model also reports snowfall."""
    if rain_mm <= 0:
        return False
    return not (temperature_c <= snow_temperature_c and snowfall_cm > 0)


def classify_stoke(rain_mm: float, snowfall_cm: float, rain_before_3pm: bool) -> Stoke:
    if rain_before_3pm:
        return Stoke.BAD
    if (snowfall_cm > 0 and rain_mm < 5) or rain_mm < 2:
        return Stoke.GOOD
    return Stoke.MEH


def day_label(day: date, index: int) -> str:
    if index == 0:
        return f"{day.isoformat()} (today)"
    return f"{day:%a}, {day:%b} {day.day}"


def aggregate_hourly(
    hourly: Mapping[str, Sequence[Any]],
    *,
    horizon_days: Optional[int] = None,
    config: Optional[ForecastConfig] = None,
) -> List[ForecastDay]:
    """Bucket Open-Meteo hourly samples into per-day forecast records.

    ``hourly`` holds parallel arrays ``time``, ``rain``, ``snowfall`` and
    ``temperature_2m`` already expressed in the mountain's local time. Days
    appear in the order their first sample does; a date without samples is
    never synthesised.
    """
    config = config or ForecastConfig()
    horizon = horizon_days if horizon_days is not None else config.horizon_days

    times = hourly.get("time") or []
    rain = hourly.get("rain") or []
    snowfall = hourly.get("snowfall") or []
    temperature = hourly.get("temperature_2m") or []

    buckets: Dict[date, _DayTotals] = {}
    for index, stamp in enumerate(times):
        moment = datetime.fromisoformat(stamp)
        totals = buckets.setdefault(moment.date(), _DayTotals())

        rain_mm = _sample(rain, index)
        snowfall_cm = _sample(snowfall, index)
        temperature_c = _sample(temperature, index)
        totals.rain_mm += rain_mm
        totals.snowfall_cm += snowfall_cm

        raining = is_rain_hour(rain_mm, snowfall_cm, temperature_c, snow_temperature_c=config.snow_temperature_c)
        if raining and moment.hour < config.rain_cutoff_hour:
            totals.rain_before_3pm = True

    days: List[ForecastDay] = []
    for index, (day, totals) in enumerate(list(buckets.items())[:horizon]):
        rain_mm = _round_tenth(totals.rain_mm)
        snowfall_cm = _round_tenth(totals.snowfall_cm)
        days.append(
            ForecastDay(
                date=day,
                label=day_label(day, index),
                rain_mm=rain_mm,
                snowfall_cm=snowfall_cm,
                rain_before_3pm=totals.rain_before_3pm,
                stoke=classify_stoke(rain_mm, snowfall_cm, totals.rain_before_3pm),
            )
        )
    return days


def fetch_forecast(
    mountain: MountainSettings,
    *,
    url: str = OPEN_METEO_URL,
    client: Optional[httpx.Client] = None,
    config: Optional[ForecastConfig] = None,
) -> Forecast:
    """Fetch the hourly Open-Meteo forecast for the mountain and aggregate it by day.

    Open-Meteo needs no API key. Timestamps come back localized to
    ``mountain.timezone`` so the 3pm cutoff is evaluated in local time.
    """
    config = config or ForecastConfig()
    params = {
        "latitude": mountain.latitude,
        "longitude": mountain.longitude,
        "timezone": mountain.timezone,
        "forecast_days": config.horizon_days,
        "hourly": HOURLY_VARIABLES,
    }

    data = HttpFetcher(client=client).fetch_json(url, params=params)
    days = aggregate_hourly(data.get("hourly") or {}, config=config)
    return Forecast(days=days, source_url=str(httpx.URL(url, params=params)))
