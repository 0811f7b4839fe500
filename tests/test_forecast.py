import json
from datetime import date
from pathlib import Path
from typing import Callable

import httpx
import pytest

from snowboard_next.config import ForecastConfig, MountainSettings
from snowboard_next.models import Stoke
from snowboard_next.services.forecast import (
    aggregate_hourly,
    classify_stoke,
    fetch_forecast,
    is_rain_hour,
)

FIXTURES = Path(__file__).parent / "fixtures"


def _hourly_fixture() -> dict:
    return json.loads((FIXTURES / "open_meteo_hourly.json").read_text())


def _make_mock_transport(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.MockTransport:
    return httpx.MockTransport(handler)


def _hours(*samples):
    """Build an hourly payload from (timestamp, rain, snowfall, temperature) tuples."""
    return {
        "time": [s[0] for s in samples],
        "rain": [s[1] for s in samples],
        "snowfall": [s[2] for s in samples],
        "temperature_2m": [s[3] for s in samples],
    }


def test_fixture_aggregates_per_day() -> None:
    days = aggregate_hourly(_hourly_fixture()["hourly"])

    assert [day.date for day in days] == [date(2026, 2, 4), date(2026, 2, 5), date(2026, 2, 6)]
    today, thursday, friday = days

    assert today.label == "2026-02-04 (today)"
    assert today.rain_mm == 0.4
    assert today.rain_before_3pm is True
    assert today.stoke is Stoke.BAD

    assert thursday.label == "Thu, Feb 5"
    assert thursday.rain_mm == 3.5
    assert thursday.snowfall_cm == 3.0
    assert thursday.rain_before_3pm is False
    assert thursday.stoke is Stoke.GOOD

    assert friday.label == "Fri, Feb 6"
    assert friday.rain_mm == 0
    assert friday.stoke is Stoke.GOOD


def test_cold_mixed_hour_counts_as_snow() -> None:
    days = aggregate_hourly(_hours(("2026-02-05T10:00", 2, 3, 0.5)))

    assert days[0].rain_before_3pm is False
    assert days[0].rain_mm == 2
    assert days[0].snowfall_cm == 3


def test_warm_mixed_hour_counts_as_rain() -> None:
    days = aggregate_hourly(_hours(("2026-02-05T10:00", 2, 3, 1.5)))

    assert days[0].rain_before_3pm is True
    assert days[0].stoke is Stoke.BAD


def test_rain_at_cutoff_hour_does_not_exclude() -> None:
    days = aggregate_hourly(
        _hours(
            ("2026-02-05T14:00", 0, 0, 4),
            ("2026-02-05T15:00", 6, 0, 4),
        )
    )

    assert days[0].rain_before_3pm is False
    assert days[0].rain_mm == 6
    assert days[0].stoke is Stoke.MEH


def test_rain_just_before_cutoff_excludes() -> None:
    days = aggregate_hourly(_hours(("2026-02-05T14:00", 0.1, 0, 4)))

    assert days[0].rain_before_3pm is True


def test_custom_cutoff_hour() -> None:
    config = ForecastConfig(rain_cutoff_hour=12)
    days = aggregate_hourly(_hours(("2026-02-05T13:00", 1, 0, 4)), config=config)

    assert days[0].rain_before_3pm is False


def test_totals_round_half_up_to_one_decimal() -> None:
    days = aggregate_hourly(
        _hours(
            ("2026-02-05T16:00", 0.25, 0.14, 4),
            ("2026-02-05T17:00", 0, 0.12, 4),
        )
    )

    assert days[0].rain_mm == 0.3
    assert days[0].snowfall_cm == 0.3


def test_null_samples_count_as_zero() -> None:
    days = aggregate_hourly(_hours(("2026-02-05T09:00", None, None, None)))

    assert days[0].rain_mm == 0
    assert days[0].rain_before_3pm is False


def test_horizon_truncates_days() -> None:
    hourly = _hourly_fixture()["hourly"]

    assert len(aggregate_hourly(hourly, horizon_days=2)) == 2
    assert len(aggregate_hourly(hourly, config=ForecastConfig(horizon_days=1))) == 1


def test_no_samples_no_days() -> None:
    assert aggregate_hourly({}) == []
    assert aggregate_hourly(_hours()) == []


@pytest.mark.parametrize(
    "rain_mm, snowfall_cm, rain_before_3pm, expected",
    [
        (0, 0, True, Stoke.BAD),
        (0, 25, True, Stoke.BAD),
        (4.9, 0.1, False, Stoke.GOOD),
        (1.9, 0, False, Stoke.GOOD),
        (2, 0, False, Stoke.MEH),
        (5, 2, False, Stoke.MEH),
    ],
)
def test_classify_stoke(rain_mm, snowfall_cm, rain_before_3pm, expected) -> None:
    assert classify_stoke(rain_mm, snowfall_cm, rain_before_3pm) is expected


def test_is_rain_hour_threshold() -> None:
    assert is_rain_hour(1, 1, 1.0) is False
    assert is_rain_hour(1, 0, -5) is True
    assert is_rain_hour(0, 0, 10) is False
    assert is_rain_hour(1, 1, 1.5, snow_temperature_c=2.0) is False


def test_fetch_forecast_requests_hourly_local_series() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=_hourly_fixture())

    client = httpx.Client(transport=_make_mock_transport(handler))
    mountain = MountainSettings(name="Test Hill", latitude=49.39, longitude=-123.21, timezone="America/Vancouver")

    forecast = fetch_forecast(mountain, client=client, config=ForecastConfig(horizon_days=7))

    assert seen["params"]["hourly"] == "rain,snowfall,temperature_2m"
    assert seen["params"]["timezone"] == "America/Vancouver"
    assert seen["params"]["forecast_days"] == "7"
    assert len(forecast.days) == 3
    assert forecast.exclude_before_3pm_rain() == {
        "2026-02-04": True,
        "2026-02-05": False,
        "2026-02-06": False,
    }
    assert forecast.source_url.startswith("https://api.open-meteo.com/v1/forecast?")
    assert "latitude=49.39" in forecast.source_url


def test_fetch_forecast_raises_on_http_error() -> None:
    client = httpx.Client(transport=_make_mock_transport(lambda _: httpx.Response(502)))

    with pytest.raises(httpx.HTTPStatusError):
        fetch_forecast(MountainSettings(), client=client)
