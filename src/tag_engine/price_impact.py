"""Price impact scoring against a baseline price.

Maps how far a tag's median price deviates from the baseline into a
bounded integer score. The positive side is coarser near zero and
reserves +10 for 5x-and-above premiums.
"""

from __future__ import annotations

import re

from .models import safe_float

# (minimum % change, score), checked top to bottom
PRICE_IMPACT_THRESHOLDS: tuple[tuple[float, int], ...] = (
    (400, 10),   # 5x price and above
    (200, 8),
    (100, 6),
    (50, 4),
    (20, 2),
    (-20, 0),    # within ±20% is neutral
    (-50, -2),
    (-60, -4),
    (-70, -6),
    (-80, -8),
)
FLOOR_SCORE = -10

_NON_NUMERIC = re.compile(r"[^\d.]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def percent_change(price: float, baseline: float) -> float:
    """Signed percentage change from baseline, 0 when baseline is 0."""
    if baseline == 0:
        return 0.0
    return (price - baseline) / baseline * 100


def price_impact(tag_median_price: float, baseline: float) -> int:
    """Score a tag's median price against the baseline, in [-10, 10]."""
    if baseline == 0:
        return 0

    pct = percent_change(tag_median_price, baseline)
    for threshold, score in PRICE_IMPACT_THRESHOLDS:
        if pct >= threshold:
            return score
    return FLOOR_SCORE


def price_impact_percentage(tag_median_price: float, baseline: float) -> float:
    """Absolute percentage change, used only for tie-breaking."""
    return abs(percent_change(tag_median_price, baseline))


def parse_price_label(label) -> float:
    """Extract the numeric part of a price label such as ``"1 200 kr"``.

    Everything except digits and dots is stripped; the leading number
    is used. Anything unparsable yields 0.
    """
    if label is None:
        return 0.0
    if isinstance(label, (int, float)) and not isinstance(label, bool):
        return max(0.0, safe_float(label))

    cleaned = _NON_NUMERIC.sub("", str(label))
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return 0.0
    return safe_float(match.group())
