from datetime import date
from pathlib import Path

from snowboard_next.scrapers.base import html_to_text
from snowboard_next.scrapers.snowpack_bulletin import BLURB_MAX_LENGTH, parse_bulletin, truncate_blurb

FIXTURES = Path(__file__).parent / "fixtures"
SOURCE_URL = "https://example.com/snow-conditions-commentary"


def _fixture_text(name: str) -> str:
    return (FIXTURES / name).read_text()


def test_bulletin_fixture() -> None:
    bulletin = parse_bulletin(_fixture_text("bc_snow_commentary.html"), source_url=SOURCE_URL)

    assert bulletin.source_url == SOURCE_URL
    assert bulletin.updated_on == date(2026, 2, 5)
    assert bulletin.provincial_pct_median == 127
    assert bulletin.vancouver_island_pct_median == 78
    assert bulletin.blurb is not None
    assert bulletin.blurb.startswith("Snow accumulation across the province")
    assert bulletin.blurb.endswith("…")
    assert len(bulletin.blurb) == BLURB_MAX_LENGTH + 1


def test_scripts_and_styles_are_ignored() -> None:
    text = html_to_text(_fixture_text("bc_snow_commentary.html"))

    assert "dataLayer" not in text
    assert "font-size" not in text
    assert "12%" not in text
    assert "  " not in text


def test_provincial_percentage_from_plain_blob() -> None:
    html = (
        "<p>As of February 1, the provincial average snow water equivalent across all sites "
        "is 127% of the period-of-record median.</p>"
    )

    bulletin = parse_bulletin(html, source_url=SOURCE_URL)

    assert bulletin.provincial_pct_median == 127
    assert bulletin.vancouver_island_pct_median is None
    assert bulletin.updated_on is None


def test_short_blurb_is_not_truncated() -> None:
    html = (
        "<h2>March 2, 2026</h2><p>Cold and snowy week on the coast.</p>"
        "<p>The provincial average across all ASWS sites is 98% of the period-of-record median.</p>"
    )

    bulletin = parse_bulletin(html, source_url=SOURCE_URL)

    assert bulletin.blurb == "Cold and snowy week on the coast."
    assert bulletin.provincial_pct_median == 98


def test_unrelated_page_yields_empty_bulletin() -> None:
    bulletin = parse_bulletin("<html><body><p>Page not found</p></body></html>", source_url=SOURCE_URL)

    assert bulletin.updated_on is None
    assert bulletin.provincial_pct_median is None
    assert bulletin.vancouver_island_pct_median is None
    assert bulletin.blurb is None


def test_truncate_blurb_boundary() -> None:
    exact = "x" * BLURB_MAX_LENGTH

    assert truncate_blurb(exact) == exact
    assert truncate_blurb(exact + "y") == exact + "…"
