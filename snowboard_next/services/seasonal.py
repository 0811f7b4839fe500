"""Calendar-based fallback for when no forecast or current-conditions day qualifies.

This is a climatology heuristic for the coastal North Shore mountains, not a
model. Regional snowpack figures nudge the suggested window earlier or later.
"""
from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple, Union

from snowboard_next.models import Recommendation, SnowpackBulletin, SourceError, Stoke

REGIONAL_STRONG_PCT = 110
REGIONAL_WEAK_PCT = 85
PROVINCIAL_STRONG_PCT = 115
PROVINCIAL_WEAK_PCT = 95

OFF_SEASON_MONTHS = range(5, 11)  # May-Oct
PRE_SEASON_MONTH = 11
PEAK_MONTHS = (1, 2)

BulletinInput = Union[SnowpackBulletin, SourceError, None]


def snowpack_bias(bulletin: BulletinInput) -> Tuple[int, List[str]]:
    """Score snowpack health and describe the figures it was based on.

    Positive bias means a strong season (aim earlier), negative a weak one.
    """
    if not isinstance(bulletin, SnowpackBulletin):
        return 0, []

    as_of = bulletin.updated_on.isoformat() if bulletin.updated_on else "unknown date"
    bias = 0
    notes: List[str] = []

    regional = bulletin.vancouver_island_pct_median
    if regional is not None:
        notes.append(f"BC ASWS Vancouver Island avg: {regional:g}% of median ({as_of}).")
        if regional >= REGIONAL_STRONG_PCT:
            bias += 1
        if regional <= REGIONAL_WEAK_PCT:
            bias -= 1

    provincial = bulletin.provincial_pct_median
    if provincial is not None:
        notes.append(f"BC ASWS provincial avg: {provincial:g}% of median ({as_of}).")
        if provincial >= PROVINCIAL_STRONG_PCT:
            bias += 1
        if provincial <= PROVINCIAL_WEAK_PCT:
            bias -= 1

    return bias, notes


def _pick(bias: int, *, strong: str, weak: str, neutral: str) -> str:
    if bias > 0:
        return strong
    if bias < 0:
        return weak
    return neutral


def seasonal_guess(today: date, bulletin: Optional[BulletinInput] = None) -> Recommendation:
    bias, notes = snowpack_bias(bulletin)
    month = today.month

    if month in OFF_SEASON_MONTHS:
        target = _pick(bias, strong="late Nov (maybe early)", weak="mid/late Dec", neutral="late Nov / Dec")
        return Recommendation(
            label=f"Next season (aim for {target}), check again in fall",
            confidence=Stoke.BAD,
            reasons=[
                "Out of typical Cypress snow season (May-Oct).",
                "Historical pattern: first reliably rideable windows tend to show up late Nov-Dec.",
                *notes,
            ],
        )

    if month == PRE_SEASON_MONTH:
        target = _pick(bias, strong="mid/late Nov", weak="early/mid Dec", neutral="late Nov / early Dec")
        return Recommendation(
            label=f"Likely {target} (watch for first storms)",
            confidence=Stoke.MEH,
            reasons=[
                "Early season: openings depend on first significant snow + sustained cold.",
                *notes,
            ],
        )

    if month in PEAK_MONTHS:
        return Recommendation(
            label="This week / next week (prime season), watch for fresh snow + cold nights",
            confidence=Stoke.MEH,
            reasons=[
                "Jan/Feb is historically the most reliable window for Cypress.",
                *notes,
            ],
        )

    # Dec, Mar, Apr
    if month == 12:
        climatology = "December is hit or miss: storms can build the base fast, but rain events are common."
    else:
        climatology = "Spring conditions are volatile; base can be fine but rain/warmth ruins it fast."
    return Recommendation(
        label="Next 1-2 weeks (variable), prioritize cold nights + fresh snow",
        confidence=Stoke.MEH,
        reasons=[climatology, *notes],
    )
