"""String similarity between tag names.

Similarity is the normalized Levenshtein distance of the lower-cased
names, expressed as a percentage (100 = identical).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import Tag

DEFAULT_PENALTIES: tuple[tuple[float, int], ...] = (
    (85.0, -6),
    (70.0, -4),
    (55.0, -2),
    (40.0, -1),
)


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit cost for insertion, deletion and substitution."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(min(
                current[j - 1] + 1,      # insertion
                previous[j] + 1,         # deletion
                previous[j - 1] + cost,  # substitution
            ))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Return similarity of two names in [0, 100]; two empty names are 100."""
    a, b = a.lower(), b.lower()
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 100.0
    return (max_len - levenshtein_distance(a, b)) / max_len * 100


def max_similarity(name: str, selected: Iterable[Tag]) -> float:
    """Highest similarity between ``name`` and any selected tag (0 if none)."""
    return max((similarity(name, tag.name) for tag in selected), default=0.0)


def similarity_penalty(
    name: str,
    selected: Sequence[Tag],
    penalties: Sequence[tuple[float, int]] = DEFAULT_PENALTIES,
) -> int:
    """Penalty (<= 0) for a candidate that looks like an already selected tag.

    ``penalties`` holds (minimum similarity, penalty) pairs checked in
    order; the first threshold met by the best match wins.
    """
    if not selected:
        return 0

    best = max_similarity(name, selected)
    for threshold, penalty in penalties:
        if best >= threshold:
            return penalty
    return 0
