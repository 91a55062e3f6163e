"""Tag Engine - price-impact ranking of resale market tags."""

from .classifier import extract_core_terms, is_verbose, partition_tags, shares_core_product
from .config import RankingConfig
from .display import format_listing_count, format_tag_display, score_color
from .exclusions import DEFAULT_RULES, ExclusionRules, is_excluded
from .models import PolarityFiltering, ScoreColor, SortMode, Tag, TagState, tags_from_upstream
from .price_impact import parse_price_label, price_impact, price_impact_percentage
from .ranker import TagRanker, rank_tags
from .selection import TagSelection
from .similarity import levenshtein_distance, similarity, similarity_penalty

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_RULES",
    "ExclusionRules",
    "PolarityFiltering",
    "RankingConfig",
    "ScoreColor",
    "SortMode",
    "Tag",
    "TagRanker",
    "TagSelection",
    "TagState",
    "extract_core_terms",
    "format_listing_count",
    "format_tag_display",
    "is_excluded",
    "is_verbose",
    "levenshtein_distance",
    "parse_price_label",
    "partition_tags",
    "price_impact",
    "price_impact_percentage",
    "rank_tags",
    "score_color",
    "shares_core_product",
    "similarity",
    "similarity_penalty",
    "tags_from_upstream",
]
