from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "config" / "defaults.yaml"
load_dotenv()


def _bool_from_env(value: str | None) -> Optional[bool]:
    if value is None:
        return None
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return None


def _merge_dicts(base: Dict, overrides: Mapping) -> Dict:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), Mapping):
            merged[key] = _merge_dicts(base[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> Dict:
    if not path.exists():
        return {}
    return yaml.safe_load(path.read_text()) or {}


@dataclass
class MountainSettings:
    name: str = "Cypress Mountain"
    latitude: float = 49.3889782663548
    longitude: float = -123.20711795277704
    timezone: str = "America/Vancouver"


@dataclass
class SourceSettings:
    mountain_report: str = "https://www.cypressmountain.com/mountain-report"
    snow_forecast: str = "https://www.snow-forecast.com/resorts/Cypress-Mountain/6day/mid"
    open_meteo: str = "https://api.open-meteo.com/v1/forecast"
    open_meteo_home: str = "https://open-meteo.com/"
    bc_snow_commentary: str = (
        "https://www2.gov.bc.ca/gov/content/environment/air-land-water/water/drought-flooding-dikes-dams/"
        "river-forecast-centre/snow-survey-water-supply-bulletin/snow-conditions-commentary"
    )


@dataclass
class BrowserSettings:
    settle_ms: int = 3500
    lift_selector: str = "#lift-status"
    snow_selector: str = "#snow"
    headless: bool = True


@dataclass
class ForecastConfig:
    horizon_days: int = 14
    rain_cutoff_hour: int = 15  # local hour; samples before it can exclude the day
    snow_temperature_c: float = 1.0


@dataclass
class OutputSettings:
    path: str = "data.json"


@dataclass
class LoggingConfig:
    level: str = "INFO"
    json: bool = True


@dataclass
class AppConfig:
    mountain: MountainSettings = field(default_factory=MountainSettings)
    sources: SourceSettings = field(default_factory=SourceSettings)
    browser: BrowserSettings = field(default_factory=BrowserSettings)
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    decision: Dict[str, float] = field(default_factory=dict)
    output: OutputSettings = field(default_factory=OutputSettings)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(*, config_path: str | None = None, env: Mapping[str, str] | None = None) -> AppConfig:
    env = dict(os.environ if env is None else env)
    data = _load_yaml(_DEFAULT_CONFIG_PATH)

    explicit_path = config_path or env.get("SNOWBOARD_CONFIG_PATH")
    if explicit_path:
        data = _merge_dicts(data, _load_yaml(Path(explicit_path)))

    logging_data = dict(data.get("logging") or {})
    level_override = env.get("SNOWBOARD_LOG_LEVEL")
    if level_override:
        logging_data["level"] = level_override
    json_override = _bool_from_env(env.get("SNOWBOARD_LOG_JSON"))
    if json_override is not None:
        logging_data["json"] = json_override

    output_data = dict(data.get("output") or {})
    output_override = env.get("SNOWBOARD_OUTPUT_PATH")
    if output_override:
        output_data["path"] = output_override

    forecast_data = dict(data.get("forecast") or {})
    horizon_override = env.get("SNOWBOARD_FORECAST_DAYS")
    if horizon_override:
        try:
            forecast_data["horizon_days"] = int(horizon_override)
        except ValueError:
            pass

    decision_data: Dict[str, float] = dict(data.get("decision") or {})
    prefix = "SNOWBOARD_DECISION_"
    for key, value in env.items():
        if key.startswith(prefix):
            field_name = key.removeprefix(prefix).lower()
            try:
                decision_data[field_name] = float(value)
            except ValueError:
                continue

    return AppConfig(
        mountain=MountainSettings(**data.get("mountain", {})),
        sources=SourceSettings(**data.get("sources", {})),
        browser=BrowserSettings(**data.get("browser", {})),
        forecast=ForecastConfig(**forecast_data),
        decision=decision_data,
        output=OutputSettings(**output_data),
        logging=LoggingConfig(**logging_data),
    )


app_config = load_config()
