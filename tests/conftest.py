"""Shared test fixtures for the tag engine."""

import sys
from pathlib import Path

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.tag_engine.models import Tag


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def make_tag():
    """Factory for tags with sensible market defaults."""

    def _make(
        name: str,
        median_price: float = 1000,
        listing_count: int = 300,
        p25_price: float = 0,
        p75_price: float = 0,
    ) -> Tag:
        return Tag(
            name=name,
            listing_count=listing_count,
            median_price=median_price,
            p25_price=p25_price,
            p75_price=p75_price,
        )

    return _make


@pytest.fixture
def sample_listings() -> dict:
    """Return a market listings response as the upstream API sends it."""
    return {
        "stats": {
            "median_price": "1000",
            "p25_price": "600",
            "p75_price": "1500",
            "listing_count": "5400",
        },
        "tags": [
            {"tag_name": "travis scott", "listing_count": "120",
             "median_price": "5200", "p25_price": "4000", "p75_price": "6500"},
            {"tag_name": "jordan 1", "listing_count": "1200",
             "median_price": "1600", "p25_price": "1100", "p75_price": "2200"},
            {"tag_name": "air jordan 1", "listing_count": "1000",
             "median_price": "1600", "p25_price": "1000", "p75_price": "2100"},
            {"tag_name": "dunk low", "listing_count": "900",
             "median_price": "1300", "p25_price": "900", "p75_price": "1700"},
            {"tag_name": "air max", "listing_count": "2500",
             "median_price": "700", "p25_price": "450", "p75_price": "950"},
            {"tag_name": "str 42", "listing_count": "500",
             "median_price": "950", "p25_price": "600", "p75_price": "1300"},
            {"tag_name": "barn", "listing_count": "800",
             "median_price": "300", "p25_price": "150", "p75_price": "450"},
            {"tag_name": "", "listing_count": "10", "median_price": "10"},
        ],
    }
