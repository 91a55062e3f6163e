"""Display helpers: score colours and the tag detail string."""

from __future__ import annotations

from .models import ScoreColor, Tag

# (minimum score, colour), checked top to bottom
_COLOR_THRESHOLDS: tuple[tuple[float, ScoreColor], ...] = (
    (8, ScoreColor.STRONG_POSITIVE),
    (5, ScoreColor.POSITIVE),
    (2, ScoreColor.MILD_POSITIVE),
    (-1, ScoreColor.NEUTRAL),
    (-4, ScoreColor.MILD_NEGATIVE),
    (-7, ScoreColor.NEGATIVE),
)

CURRENCY_SUFFIX = "kr"


def score_color(score: float) -> ScoreColor:
    for threshold, color in _COLOR_THRESHOLDS:
        if score >= threshold:
            return color
    return ScoreColor.STRONG_NEGATIVE


def format_listing_count(count: int) -> str:
    """9900 -> "9.9k", 950 -> "950"."""
    if count >= 1000:
        return f"{count / 1000:.1f}k"
    return str(count)


def format_score(score: float) -> str:
    return f"+{score:.1f}" if score >= 0 else f"{score:.1f}"


def _format_price(price: float) -> str:
    if price == int(price):
        return str(int(price))
    return f"{price:g}"


def format_tag_display(tag: Tag, score: float | None = None) -> str:
    """Compose "+8.0 | 800-1500kr | 2.0k listings".

    The score part is omitted when ``score`` is None and the price range
    when both quartiles are unknown.
    """
    parts: list[str] = []
    if score is not None:
        parts.append(format_score(score))

    p25 = tag.p25_price or 0
    p75 = tag.p75_price or 0
    if p25 or p75:
        parts.append(f"{_format_price(p25)}-{_format_price(p75)}{CURRENCY_SUFFIX}")

    parts.append(f"{format_listing_count(tag.listing_count or 0)} listings")
    return " | ".join(parts)
