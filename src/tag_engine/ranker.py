"""Smart tag ranking.

Turns a flat list of market tags into a display order driven by price
impact against a baseline, with a penalty for tags that look like the
ones already selected.

Smart mode pipeline:
1. Score every candidate: price impact (-10..10) plus similarity penalty.
2. Balance polarity (cap variant): keep only reliable negative tags,
   at most 10 of them, and at most 150 tags overall.
3. Split off excluded (noise) and verbose (longer duplicate) tags.
4. Bucket the rest by |score| into S/A/B/C/D, spreading negatives at
   most 2 per bucket.
5. Sort inside each bucket and concatenate: S..D, verbose, excluded.

Listing-count mode drops excluded tags and orders purely by listing count.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from functools import cmp_to_key

from .classifier import partition_tags
from .config import RankingConfig
from .display import format_tag_display, score_color
from .exclusions import DEFAULT_RULES, ExclusionRules
from .models import PolarityFiltering, SortMode, Tag, safe_float, safe_int
from .price_impact import parse_price_label, price_impact, price_impact_percentage
from .similarity import similarity_penalty

logger = logging.getLogger(__name__)

SCORE_MIN = -10
SCORE_MAX = 10

# Bucket name -> minimum |rank_score|, best bucket first
BUCKETS: tuple[tuple[str, float], ...] = (
    ("S", 10),
    ("A", 8),
    ("B", 5),
    ("C", 2),
    ("D", 0),
)


def clamp_score(score: float) -> float:
    return float(max(SCORE_MIN, min(SCORE_MAX, score)))


def _sanitize(tag: Tag) -> Tag:
    """Copy of ``tag`` with NaN, infinite or negative numbers replaced by 0."""
    return replace(
        tag,
        listing_count=max(0, safe_int(tag.listing_count)),
        median_price=max(0.0, safe_float(tag.median_price)),
        p25_price=max(0.0, safe_float(tag.p25_price)),
        p75_price=max(0.0, safe_float(tag.p75_price)),
    )


class TagRanker:
    """Ranks candidate tags for display.

    The ranker holds no per-call state; one instance can serve any
    number of concurrent calls.

    Usage:
        ranker = TagRanker()
        ranked = ranker.rank(candidates, selected, "1200 kr")
        # ranked[0].rank_score -> 8.0, ranked[0].color -> ScoreColor.STRONG_POSITIVE
    """

    def __init__(
        self,
        config: RankingConfig | None = None,
        rules: ExclusionRules = DEFAULT_RULES,
    ):
        self.config = config or RankingConfig()
        self.rules = rules

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def rank(
        self,
        candidate_tags: Sequence[Tag],
        selected_tags: Sequence[Tag] = (),
        baseline_price_label: str | float | None = "",
        sort_mode: SortMode | str = SortMode.SMART,
        original_brand_estimate: float | None = None,
    ) -> list[Tag]:
        """Return annotated copies of ``candidate_tags`` in display order.

        Args:
            candidate_tags: Unselected tags from the market data.
            selected_tags: Tags the user has included.
            baseline_price_label: Current estimate, e.g. "1200 kr".
            sort_mode: "smart" or "listing_count".
            original_brand_estimate: Brand-level baseline that, when a
                positive finite number, replaces the label so scores stay
                stable while filtering.
        """
        if not candidate_tags:
            return []

        baseline = max(0.0, safe_float(original_brand_estimate))
        if baseline == 0:
            baseline = parse_price_label(baseline_price_label)
        if baseline == 0:
            logger.info(
                "Baseline price %r parsed to 0; all price impacts are neutral",
                baseline_price_label,
            )

        scored = self.score_tags(candidate_tags, selected_tags, baseline)

        try:
            mode = SortMode(sort_mode)
        except ValueError:
            logger.warning("Unknown sort mode %r, using smart ranking", sort_mode)
            mode = SortMode.SMART

        if mode is SortMode.LISTING_COUNT:
            return self._rank_by_listing_count(scored)
        return self._rank_smart(scored)

    def score_tags(
        self,
        tags: Sequence[Tag],
        selected_tags: Sequence[Tag],
        baseline: float,
    ) -> list[Tag]:
        """Attach rank_score and price_impact_percentage to copies of ``tags``."""
        return [self.score_tag(tag, selected_tags, baseline) for tag in tags]

    def score_tag(self, tag: Tag, selected_tags: Sequence[Tag], baseline: float) -> Tag:
        """Score one tag against ``baseline``.

        Malformed numbers count as 0, and a 0 median is unknown: its
        price impact is neutral instead of -100%.
        """
        tag = _sanitize(tag)
        baseline = max(0.0, safe_float(baseline))
        median = tag.median_price
        impact = price_impact(median, baseline) if median > 0 else 0
        penalty = 0
        if self.config.apply_similarity_penalty:
            penalty = similarity_penalty(
                tag.name, selected_tags, self.config.similarity_penalties
            )
        return replace(
            tag,
            rank_score=clamp_score(impact + penalty),
            price_impact_percentage=(
                price_impact_percentage(median, baseline) if median > 0 else 0.0
            ),
        )

    # ------------------------------------------------------------------
    # Modes
    # ------------------------------------------------------------------

    def _rank_by_listing_count(self, scored: list[Tag]) -> list[Tag]:
        kept = self.rules.filter_excluded(scored)
        ranked = sorted(
            kept,
            key=lambda t: (-(t.listing_count or 0), t.name.lower(), t.name),
        )
        logger.debug(
            "Ranked %d tags by listing count (%d excluded)",
            len(ranked), len(scored) - len(kept),
        )
        return [self._annotate(t) for t in ranked]

    def _rank_smart(self, scored: list[Tag]) -> list[Tag]:
        cfg = self.config

        tags = scored
        if cfg.polarity_filtering is PolarityFiltering.CAP:
            tags = self._filter_by_polarity(scored)

        normal, verbose, excluded = partition_tags(tags, self.rules)
        buckets = self._bucket(normal)

        ranked: list[Tag] = []
        for name, _ in BUCKETS:
            ranked.extend(self._sort_bucket(buckets[name]))
        ranked.extend(self._sort_bucket(verbose))
        if cfg.demote_excluded:
            ranked.extend(self._sort_bucket(excluded))

        logger.debug(
            "Smart ranking: %d candidates -> %d shown | buckets %s | verbose=%d excluded=%d%s",
            len(scored),
            len(ranked),
            {name: len(buckets[name]) for name, _ in BUCKETS},
            len(verbose),
            len(excluded),
            "" if cfg.demote_excluded else " (dropped)",
        )
        return [self._annotate(t) for t in ranked]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _filter_by_polarity(self, tags: list[Tag]) -> list[Tag]:
        """Keep mostly positive tags plus a few reliable negative ones."""
        cfg = self.config
        positive = [t for t in tags if t.rank_score >= 0]
        negative = [
            t for t in tags
            if t.rank_score < 0 and (
                (t.listing_count or 0) >= cfg.negative_min_listings
                or (
                    t.rank_score <= cfg.strong_negative_score
                    and (t.listing_count or 0) >= cfg.strong_negative_min_listings
                )
            )
        ]

        eps = cfg.polarity_score_epsilon

        def by_score_desc(a: Tag, b: Tag) -> float:
            diff = b.rank_score - a.rank_score
            if abs(diff) > eps:
                return diff
            return (b.listing_count or 0) - (a.listing_count or 0)

        def by_score_asc(a: Tag, b: Tag) -> float:
            diff = a.rank_score - b.rank_score
            if abs(diff) > eps:
                return diff
            return (b.listing_count or 0) - (a.listing_count or 0)

        positive.sort(key=cmp_to_key(by_score_desc))
        negative.sort(key=cmp_to_key(by_score_asc))

        total = min(cfg.max_total_tags, len(tags))
        negative_count = min(cfg.max_negative_tags, len(negative), total)
        kept_positive = positive[:total - negative_count]
        kept_negative = negative[:negative_count]

        logger.debug(
            "Polarity filter: kept %d positive, %d of %d reliable negative (from %d)",
            len(kept_positive), len(kept_negative), len(negative), len(tags),
        )
        return kept_positive + kept_negative

    def _bucket(self, tags: list[Tag]) -> dict[str, list[Tag]]:
        """Group tags by |rank_score|, optionally spreading negatives."""
        cfg = self.config
        buckets: dict[str, list[Tag]] = {name: [] for name, _ in BUCKETS}
        negative_counts = {name: 0 for name, _ in BUCKETS}

        per_bucket = cfg.max_negative_per_bucket
        spread = per_bucket is not None and cfg.polarity_filtering in (
            PolarityFiltering.CAP,
            PolarityFiltering.SPREAD,
        )

        dropped = 0
        for tag in tags:
            magnitude = abs(tag.rank_score)
            if spread and tag.rank_score < 0:
                for name, minimum in BUCKETS:
                    if magnitude >= minimum and negative_counts[name] < per_bucket:
                        buckets[name].append(tag)
                        negative_counts[name] += 1
                        break
                else:
                    dropped += 1
                continue

            for name, minimum in BUCKETS:
                if magnitude >= minimum:
                    buckets[name].append(tag)
                    break

        if dropped:
            logger.debug("Dropped %d negative tags: all buckets at capacity", dropped)
        return buckets

    def _sort_bucket(self, tags: list[Tag]) -> list[Tag]:
        """Score, then price impact, then listing count, then shorter name."""
        cfg = self.config

        def compare(a: Tag, b: Tag) -> float:
            score_diff = b.rank_score - a.rank_score
            if abs(score_diff) > cfg.score_epsilon:
                return score_diff

            impact_diff = b.price_impact_percentage - a.price_impact_percentage
            if abs(impact_diff) > cfg.impact_epsilon:
                return impact_diff

            listing_diff = (b.listing_count or 0) - (a.listing_count or 0)
            if abs(listing_diff) > cfg.listing_epsilon:
                return listing_diff

            return len(a.name) - len(b.name)

        return sorted(tags, key=cmp_to_key(compare))

    @staticmethod
    def _annotate(tag: Tag) -> Tag:
        score = tag.rank_score or 0.0
        return replace(
            tag,
            color=score_color(score),
            display=format_tag_display(tag, score),
        )


def rank_tags(
    candidate_tags: Sequence[Tag],
    selected_tags: Sequence[Tag] = (),
    baseline_price_label: str | float | None = "",
    sort_mode: SortMode | str = SortMode.SMART,
    original_brand_estimate: float | None = None,
    config: RankingConfig | None = None,
    rules: ExclusionRules = DEFAULT_RULES,
) -> list[Tag]:
    """Functional shortcut for ``TagRanker(config, rules).rank(...)``."""
    return TagRanker(config, rules).rank(
        candidate_tags,
        selected_tags,
        baseline_price_label,
        sort_mode,
        original_brand_estimate=original_brand_estimate,
    )
