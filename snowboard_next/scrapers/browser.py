"""Headless browser capture of the client-rendered mountain report panels."""
from __future__ import annotations

from dataclasses import dataclass

from playwright.sync_api import Page, sync_playwright
from playwright.sync_api import TimeoutError as PlaywrightTimeout

from ..config import BrowserSettings
from ..http_client import DEFAULT_USER_AGENT
from ..logging import get_logger

logger = get_logger(__name__)

NAVIGATION_TIMEOUT_MS = 30000
REGION_TIMEOUT_MS = 5000


@dataclass(frozen=True)
class ReportSnapshots:
    lift_status: str
    snow: str


def _region_snapshot(page: Page, selector: str) -> str:
    # A missing panel degrades to empty text; the parser then reports nulls.
    try:
        return page.locator(selector).aria_snapshot(timeout=REGION_TIMEOUT_MS)
    except PlaywrightTimeout:
        logger.warning("browser.region_missing", selector=selector)
        return ""


def capture_report_snapshots(url: str, settings: BrowserSettings) -> ReportSnapshots:
    """Open the report page, let its scripts render, and snapshot both panels."""
    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(headless=settings.headless)
        try:
            page = browser.new_page(user_agent=DEFAULT_USER_AGENT)
            logger.info("browser.open", url=url)
            page.goto(url, wait_until="domcontentloaded", timeout=NAVIGATION_TIMEOUT_MS)
            page.wait_for_timeout(settings.settle_ms)
            return ReportSnapshots(
                lift_status=_region_snapshot(page, settings.lift_selector),
                snow=_region_snapshot(page, settings.snow_selector),
            )
        finally:
            browser.close()
