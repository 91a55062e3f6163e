"""CLI entry point for the tag ranking engine.

Usage:
    python -m src.tag_engine.main --input data/nike_listings.json
    python -m src.tag_engine.main --input data/nike_listings.json --selected "air max" --exclude "dunk"
    python -m src.tag_engine.main --input data/nike_listings.json --sort listing_count --limit 20
    python -m src.tag_engine.main --input data/nike_listings.json --variant spread --output ranked.json

The input is a market listings response: ``{"tags": [...], "stats": {...}}``
or a bare list of tag records.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from src.common.config import Settings
from src.common.logging import setup_logging

from .exclusions import load_rules
from .models import SortMode, Tag, baseline_from_stats, tags_from_upstream
from .ranker import TagRanker
from .selection import TagSelection

logger = logging.getLogger(__name__)


def _load_listings(path: Path) -> tuple[list[dict], dict]:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, list):
        return data, {}
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object or list")
    return data.get("tags") or [], data.get("stats") or {}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Resale Market Tag Ranker")
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Listings response JSON (tags + stats)",
    )
    parser.add_argument(
        "--estimate",
        type=str,
        help="Current price estimate label, e.g. '1200 kr' (default: stats median)",
    )
    parser.add_argument(
        "--brand-estimate",
        type=float,
        help="Original brand-level estimate to score against",
    )
    parser.add_argument(
        "--selected",
        type=str,
        nargs="*",
        default=[],
        help="Tag names already included",
    )
    parser.add_argument(
        "--exclude",
        type=str,
        nargs="*",
        default=[],
        help="Tag names already excluded",
    )
    parser.add_argument(
        "--sort",
        type=str,
        choices=[m.value for m in SortMode],
        help="Ordering mode (default: from settings)",
    )
    parser.add_argument(
        "--variant",
        type=str,
        choices=["cap", "spread"],
        help="Engine variant: similarity penalty + polarity cap, or spread negatives "
        "(default: from settings)",
    )
    parser.add_argument(
        "--exclusions",
        type=Path,
        help="YAML file with custom exclusion tokens/patterns",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        help="Settings YAML (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=0,
        help="Show only the first N ranked tags (default: all)",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Output JSON file path (default: stdout)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings.load(args.settings)
    setup_logging(settings.log_level)

    try:
        raw_tags, stats = _load_listings(args.input)
    except (OSError, ValueError) as e:
        parser.error(f"cannot read {args.input}: {e}")

    exclusions_path = args.exclusions or settings.exclusions_abs_path
    rules = load_rules(exclusions_path)

    config = settings.ranking
    if args.variant:
        config = config.with_variant(args.variant)
    variant = config.polarity_filtering.value

    tags = tags_from_upstream(raw_tags)
    by_key = {t.key: t for t in tags}

    selection = TagSelection()
    for name in args.selected:
        selection = selection.include(by_key.get(name.lower().strip(), Tag(name=name)))
    for name in args.exclude:
        selection = selection.exclude(by_key.get(name.lower().strip(), Tag(name=name)))

    estimate = args.estimate or f"{baseline_from_stats(stats):g} kr"
    sort_mode = args.sort or settings.default_sort_mode

    logger.info(
        "Ranking %d tags (%d raw) | estimate=%s | sort=%s | variant=%s",
        len(tags), len(raw_tags), estimate, SortMode(sort_mode).value, variant,
    )

    ranker = TagRanker(config, rules)
    ranked = ranker.rank(
        selection.unselected(tags),
        selection.included,
        estimate,
        sort_mode,
        original_brand_estimate=args.brand_estimate,
    )
    if args.limit > 0:
        ranked = ranked[:args.limit]

    for tag in ranked[:10]:
        logger.info("  %-30s %s", tag.name[:30], tag.display)

    output_data = {
        "estimate": estimate,
        "sort": SortMode(sort_mode).value,
        "variant": variant,
        "selection": selection.to_dict(),
        "total_candidates": len(tags),
        "total_ranked": len(ranked),
        "tags": [t.to_dict() for t in ranked],
    }

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(output_data, f, ensure_ascii=False, indent=2)
        logger.info("Output written to %s", args.output)
    else:
        json.dump(output_data, sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
