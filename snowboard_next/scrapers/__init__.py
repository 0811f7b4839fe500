from __future__ import annotations

from typing import Callable, Tuple

import httpx

from snowboard_next.config import BrowserSettings
from snowboard_next.logging import get_logger

from ..http_client import HttpFetcher
from ..models import LiftStatus, SnowpackBulletin, SnowReport
from .browser import ReportSnapshots, capture_report_snapshots
from .mountain_report import parse_lift_status, parse_snow_report
from .snowpack_bulletin import parse_bulletin

logger = get_logger(__name__)

SnapshotCapture = Callable[[str, BrowserSettings], ReportSnapshots]


def fetch_report(
    url: str,
    settings: BrowserSettings,
    *,
    capture: SnapshotCapture = capture_report_snapshots,
) -> Tuple[LiftStatus, SnowReport]:
    logger.info("scrape.request", source="mountain_report", url=url)
    try:
        snapshots = capture(url, settings)
        lifts = parse_lift_status(snapshots.lift_status)
        snow = parse_snow_report(snapshots.snow)
    except Exception as exc:
        logger.error("scrape.failure", source="mountain_report", url=url, error=str(exc))
        raise
    logger.info(
        "scrape.success",
        source="mountain_report",
        url=url,
        lifts_open=lifts.open,
        lifts_total=lifts.total,
        snow_7_days_cm=snow.snow_7_days_cm,
    )
    return lifts, snow


def fetch_bulletin(url: str, *, client: httpx.Client | None = None) -> SnowpackBulletin:
    logger.info("scrape.request", source="bc_snowpack", url=url)
    try:
        html = HttpFetcher(client=client).fetch_text(url)
        bulletin = parse_bulletin(html, source_url=url)
    except Exception as exc:
        logger.error("scrape.failure", source="bc_snowpack", url=url, error=str(exc))
        raise
    logger.info(
        "scrape.success",
        source="bc_snowpack",
        url=url,
        updated_on=bulletin.updated_on.isoformat() if bulletin.updated_on else None,
        provincial_pct_median=bulletin.provincial_pct_median,
    )
    return bulletin


__all__ = [
    "ReportSnapshots",
    "capture_report_snapshots",
    "fetch_bulletin",
    "fetch_report",
    "parse_bulletin",
    "parse_lift_status",
    "parse_snow_report",
]
