"""Verbose tag detection.

A verbose tag is a longer name for a product that a shorter tag in the
same result set already covers, e.g. "air zoom alphafly" next to
"alphafly". Verbose tags are kept but pushed to the end of the list.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from .exclusions import DEFAULT_RULES, ExclusionRules
from .models import Tag

_TERM_SPLIT = re.compile(r"[\s\-_]+")

MIN_VERBOSE_LENGTH = 5
MIN_TERM_LENGTH = 3
# Median prices this far apart (relative to the larger) mean different products
MAX_RELATED_PRICE_DIFF = 0.1


def extract_core_terms(name: str) -> list[str]:
    """Split a tag name into meaningful terms (no short words or bare numbers)."""
    words = _TERM_SPLIT.split(name.lower().strip())
    return [w for w in words if len(w) >= MIN_TERM_LENGTH and not w.isdigit()]


def shares_core_product(a: Tag, b: Tag) -> bool:
    """True if two tags name the same product family.

    They must share a core term. When both median prices are known they
    must also be within 10% of each other.
    """
    terms_a = set(extract_core_terms(a.name))
    terms_b = set(extract_core_terms(b.name))
    if not terms_a & terms_b:
        return False

    price_a = a.median_price or 0
    price_b = b.median_price or 0
    if price_a > 0 and price_b > 0:
        return abs(price_a - price_b) / max(price_a, price_b) < MAX_RELATED_PRICE_DIFF
    return True


def is_verbose(tag: Tag, all_tags: Sequence[Tag]) -> bool:
    """True if a strictly shorter tag for the same product exists."""
    name = tag.name.strip()
    if len(name) < MIN_VERBOSE_LENGTH:
        return False

    key = tag.key
    return any(
        other.key != key
        and len(other.name.strip()) < len(name)
        and shares_core_product(tag, other)
        for other in all_tags
    )


def partition_tags(
    tags: Sequence[Tag],
    rules: ExclusionRules = DEFAULT_RULES,
) -> tuple[list[Tag], list[Tag], list[Tag]]:
    """Split tags into (normal, verbose, excluded), preserving order.

    Verbosity is judged against the whole input, excluded tags included.
    """
    normal: list[Tag] = []
    verbose: list[Tag] = []
    excluded: list[Tag] = []
    for tag in tags:
        if rules.is_excluded(tag.name):
            excluded.append(tag)
        elif is_verbose(tag, tags):
            verbose.append(tag)
        else:
            normal.append(tag)
    return normal, verbose, excluded
