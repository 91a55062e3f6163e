"""Data models for the tag ranking engine.

All models use @dataclass with to_dict() for JSON serialization.
Tags are frozen: the engine returns annotated copies and never mutates
the records it receives.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

__all__ = [
    "PolarityFiltering",
    "ScoreColor",
    "SortMode",
    "Tag",
    "TagState",
    "baseline_from_stats",
    "safe_float",
    "safe_int",
    "tags_from_upstream",
]


class PolarityFiltering(str, Enum):
    """How negative-score tags are balanced against positive ones."""
    CAP = "cap"        # throttle negatives, hard cap on total output
    SPREAD = "spread"  # no throttle, spread negatives across buckets
    NONE = "none"


class SortMode(str, Enum):
    """Ordering modes for the ranked tag list."""
    SMART = "smart"
    LISTING_COUNT = "listing_count"


class TagState(str, Enum):
    """Selection state of a tag."""
    INCLUDED = "included"
    EXCLUDED = "excluded"
    UNSELECTED = "unselected"


class ScoreColor(str, Enum):
    """Display category derived from a tag's rank score."""
    STRONG_POSITIVE = "strong-positive"
    POSITIVE = "positive"
    MILD_POSITIVE = "mild-positive"
    NEUTRAL = "neutral"
    MILD_NEGATIVE = "mild-negative"
    NEGATIVE = "negative"
    STRONG_NEGATIVE = "strong-negative"


def safe_float(value) -> float:
    """Convert an upstream value to a finite float, 0.0 on failure."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        cleaned = value.replace(",", "").strip()
        try:
            result = float(cleaned)
        except ValueError:
            return 0.0
    else:
        return 0.0
    if math.isnan(result) or math.isinf(result):
        return 0.0
    return result


def safe_int(value) -> int:
    """Convert an upstream value to an int, 0 on failure."""
    return int(safe_float(value))


@dataclass(frozen=True)
class Tag:
    """A market tag with its price statistics.

    ``rank_score``, ``price_impact_percentage``, ``color`` and
    ``display`` are filled in by the ranker on the copies it returns.
    Prices of 0 mean "unknown".
    """

    name: str
    state: TagState = TagState.UNSELECTED
    listing_count: int = 0
    median_price: float = 0.0
    p25_price: float = 0.0
    p75_price: float = 0.0
    rank_score: float | None = None
    price_impact_percentage: float = 0.0
    color: ScoreColor | None = None
    display: str = ""

    @property
    def key(self) -> str:
        """Case-insensitive identity of the tag."""
        return self.name.lower().strip()

    @classmethod
    def from_upstream(cls, record: dict) -> Tag:
        """Build an unselected tag from a market API tag record.

        Numeric fields may arrive as strings; anything unparsable or
        negative becomes 0.
        """
        return cls(
            name=str(record.get("tag_name") or record.get("name") or ""),
            listing_count=max(0, safe_int(record.get("listing_count", 0))),
            median_price=max(0.0, safe_float(record.get("median_price", 0))),
            p25_price=max(0.0, safe_float(record.get("p25_price", 0))),
            p75_price=max(0.0, safe_float(record.get("p75_price", 0))),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "state": self.state.value,
            "listing_count": self.listing_count,
            "median_price": self.median_price,
            "p25_price": self.p25_price,
            "p75_price": self.p75_price,
            "rank_score": self.rank_score,
            "price_impact_percentage": round(self.price_impact_percentage, 2),
            "color": self.color.value if self.color else None,
            "display": self.display,
        }


def tags_from_upstream(records: list[dict] | None) -> list[Tag]:
    """Parse a list of upstream tag records, skipping nameless ones."""
    tags: list[Tag] = []
    for record in records or []:
        if not isinstance(record, dict):
            continue
        name = record.get("tag_name") or record.get("name")
        if not name or not isinstance(name, str):
            continue
        tags.append(Tag.from_upstream(record))
    return tags


def baseline_from_stats(stats: dict | None) -> float:
    """Extract the brand-level median price from an upstream stats block."""
    if not stats:
        return 0.0
    return max(0.0, safe_float(stats.get("median_price", 0)))
