from pathlib import Path

from snowboard_next.config import load_config


def test_defaults_come_from_packaged_yaml() -> None:
    config = load_config(env={})

    assert config.mountain.name == "Cypress Mountain"
    assert config.mountain.timezone == "America/Vancouver"
    assert config.forecast.horizon_days == 14
    assert config.forecast.rain_cutoff_hour == 15
    assert config.browser.settle_ms == 3500
    assert config.decision == {"lift_open_ratio": 0.67, "snow_7_days_cm": 10, "base_depth_cm": 80}
    assert config.output.path == "data.json"
    assert config.sources.open_meteo == "https://api.open-meteo.com/v1/forecast"


def test_override_file_merges_into_defaults(tmp_path: Path) -> None:
    override = tmp_path / "override.yaml"
    override.write_text("mountain:\n  name: Grouse\nforecast:\n  horizon_days: 7\n")

    config = load_config(config_path=str(override), env={})

    assert config.mountain.name == "Grouse"
    assert config.mountain.timezone == "America/Vancouver"
    assert config.forecast.horizon_days == 7
    assert config.forecast.snow_temperature_c == 1.0


def test_override_file_from_env(tmp_path: Path) -> None:
    override = tmp_path / "override.yaml"
    override.write_text("output:\n  path: site/data.json\n")

    config = load_config(env={"SNOWBOARD_CONFIG_PATH": str(override)})

    assert config.output.path == "site/data.json"


def test_missing_override_file_is_ignored(tmp_path: Path) -> None:
    config = load_config(config_path=str(tmp_path / "nope.yaml"), env={})

    assert config.mountain.name == "Cypress Mountain"


def test_env_overrides() -> None:
    config = load_config(
        env={
            "SNOWBOARD_LOG_LEVEL": "debug",
            "SNOWBOARD_LOG_JSON": "off",
            "SNOWBOARD_OUTPUT_PATH": "/tmp/out.json",
            "SNOWBOARD_FORECAST_DAYS": "7",
            "SNOWBOARD_DECISION_BASE_DEPTH_CM": "120",
            "SNOWBOARD_DECISION_SNOW_7_DAYS_CM": "lots",
        }
    )

    assert config.logging.level == "debug"
    assert config.logging.json is False
    assert config.output.path == "/tmp/out.json"
    assert config.forecast.horizon_days == 7
    assert config.decision["base_depth_cm"] == 120
    assert config.decision["snow_7_days_cm"] == 10


def test_invalid_env_values_keep_defaults() -> None:
    config = load_config(env={"SNOWBOARD_FORECAST_DAYS": "two weeks", "SNOWBOARD_LOG_JSON": "maybe"})

    assert config.forecast.horizon_days == 14
    assert config.logging.json is True
