"""One batch run: fetch every source, decide, write ``data.json``."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Union
from zoneinfo import ZoneInfo

import httpx

from snowboard_next.config import AppConfig, app_config
from snowboard_next.logging import bind_run, get_logger
from snowboard_next.models import (
    Forecast,
    LiftStatus,
    Recommendation,
    SnowpackBulletin,
    SnowReport,
    SourceError,
)
from snowboard_next.schemas import (
    ReportArtifact,
    SourceLink,
    current_payload,
    forecast_payload,
    recommendation_payload,
    snowpack_payload,
)
from snowboard_next.scrapers import SnapshotCapture, capture_report_snapshots, fetch_bulletin, fetch_report
from snowboard_next.services.decision import DecisionConfig, decide_next
from snowboard_next.services.forecast import fetch_forecast
from snowboard_next.storage import ArtifactStore

logger = get_logger(__name__)

LOCAL_TIME_FORMAT = "%Y-%m-%d, %H:%M:%S"


@dataclass
class SourceResults:
    lifts: LiftStatus
    snow: SnowReport
    report_error: Optional[str]
    forecast: Union[Forecast, SourceError]
    bulletin: Union[SnowpackBulletin, SourceError]

    @property
    def forecast_days(self):
        return self.forecast.days if isinstance(self.forecast, Forecast) else []


def source_links(config: AppConfig) -> List[SourceLink]:
    sources = config.sources
    return [
        SourceLink(label=f"{config.mountain.name} Report", url=sources.mountain_report),
        SourceLink(label="Snow-Forecast (mid mountain)", url=sources.snow_forecast),
        SourceLink(label="Open-Meteo forecast (no key)", url=sources.open_meteo_home),
        SourceLink(label="BC Snow conditions commentary", url=sources.bc_snow_commentary),
    ]


def gather_sources(
    config: AppConfig,
    *,
    capture: SnapshotCapture = capture_report_snapshots,
    client: Optional[httpx.Client] = None,
) -> SourceResults:
    """Fetch the three sources independently; a failure only blanks its own slot."""
    lifts, snow, report_error = LiftStatus(), SnowReport(), None
    logger.info("source.start", source="mountain_report")
    try:
        lifts, snow = fetch_report(config.sources.mountain_report, config.browser, capture=capture)
        logger.info("source.success", source="mountain_report")
    except Exception as exc:
        logger.error("source.failure", source="mountain_report", error=str(exc))
        report_error = str(exc)

    forecast: Union[Forecast, SourceError]
    logger.info("source.start", source="forecast")
    try:
        forecast = fetch_forecast(
            config.mountain,
            url=config.sources.open_meteo,
            client=client,
            config=config.forecast,
        )
        logger.info("source.success", source="forecast", days=len(forecast.days))
    except Exception as exc:
        logger.error("source.failure", source="forecast", error=str(exc))
        forecast = SourceError(error=str(exc))

    bulletin: Union[SnowpackBulletin, SourceError]
    logger.info("source.start", source="bc_snowpack")
    try:
        bulletin = fetch_bulletin(config.sources.bc_snow_commentary, client=client)
        logger.info("source.success", source="bc_snowpack")
    except Exception as exc:
        logger.error("source.failure", source="bc_snowpack", error=str(exc))
        bulletin = SourceError(error=str(exc), source_url=config.sources.bc_snow_commentary)

    return SourceResults(lifts=lifts, snow=snow, report_error=report_error, forecast=forecast, bulletin=bulletin)


def build_artifact(
    results: SourceResults,
    recommendation: Recommendation,
    *,
    now: datetime,
    config: AppConfig,
) -> ReportArtifact:
    local_now = now.astimezone(ZoneInfo(config.mountain.timezone))
    return ReportArtifact(
        generated_at=now.astimezone(timezone.utc),
        generated_at_local=local_now.strftime(LOCAL_TIME_FORMAT),
        current=current_payload(results.lifts, results.snow, error=results.report_error),
        forecast=forecast_payload(results.forecast),
        bc_snowpack=snowpack_payload(results.bulletin),
        next=recommendation_payload(recommendation),
        sources=source_links(config),
    )


def run(
    config: Optional[AppConfig] = None,
    *,
    now: Optional[datetime] = None,
    capture: SnapshotCapture = capture_report_snapshots,
    client: Optional[httpx.Client] = None,
    store: Optional[ArtifactStore] = None,
) -> ReportArtifact:
    """Run the whole job once and persist the artifact.

    Raises :class:`~snowboard_next.storage.ArtifactWriteError` when the output
    cannot be written; every source failure is absorbed into the artifact.
    """
    config = config or app_config
    now = now or datetime.now(timezone.utc)
    store = store or ArtifactStore(config.output.path)
    bind_run(config.mountain.name)
    logger.info("run.start", output=str(store.path))

    results = gather_sources(config, capture=capture, client=client)
    today = now.astimezone(ZoneInfo(config.mountain.timezone)).date()
    recommendation = decide_next(
        results.lifts,
        results.snow,
        results.forecast_days,
        results.bulletin,
        today=today,
        config=DecisionConfig.from_mapping(config.decision),
    )

    artifact = build_artifact(results, recommendation, now=now, config=config)
    store.write(artifact)
    logger.info("run.complete", confidence=recommendation.confidence.value, label=recommendation.label)
    return artifact
