"""Noise filter for market tags.

Tags that describe sizes, colours, quantities, condition or generic
Norwegian filler words say nothing about price and are filtered out of
the ranking. The rules are an immutable value so callers can inject
their own lists (e.g. for another market language).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar

import yaml

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SIZE_LETTERS = ("s", "m", "l", "xl", "xxl", "xs")
_EU_SIZES = [str(n) for n in range(35, 49)]
_HALF_SIZES = [f"{n}5" for n in range(36, 46)]  # "365" == 36.5

DEFAULT_EXCLUDED_TOKENS: tuple[str, ...] = (
    # Sizes and measurements
    "str", "størrelse", "size", "strl", "strls",
    "s", "m", "l", "xl", "xxl", "xs", "xxs",
    *_EU_SIZES, "49", "50",
    *[f"{n}.5" for n in range(35, 49)],
    *_HALF_SIZES,
    *[f"str {n}" for n in _EU_SIZES],
    *[f"str {s}" for s in _SIZE_LETTERS],
    *[f"str {n}" for n in _HALF_SIZES[:-1]],
    "small", "medium", "large", "extra large",
    "sko str", "fotballsko str", "joggesko str", "treningssko str",
    "us", "eu", "eur",
    # Generic Norwegian words
    "i", "på", "til", "fra", "med", "uten", "og", "eller", "som", "av",
    "for", "nye", "ny", "brukt", "pent", "godt", "lite", "helt", "fin",
    "flott", "pen", "selges", "kjøpt", "kr", "nok", "pris", "billig", "dyr",
    # Demographics
    "herre", "dame", "barn", "jente", "gutt", "unisex", "voksen", "baby",
    "junior",
    # Bare numbers
    "1", "2", "3", "4", "5", "6", "7", "8", "9", "10", "11", "12",
    "20", "21", "22", "23", "24", "25", "30", "100", "200", "500", "1000",
    # Colours
    "svart", "hvit", "blå", "rød", "grønn", "gul", "rosa", "lilla", "grå",
    "brun", "orange", "black", "white", "blue", "red", "green", "yellow",
    "pink", "purple", "gray", "grey", "brown", "navy", "beige", "cream",
    "gold", "silver",
    # Quantities and packaging
    "stk", "pak", "sett", "par", "pakke", "bundle", "lot",
    "1stk", "2stk", "3stk", "4stk", "5stk",
    # Condition
    "ubrukt", "slitt", "ødelagt", "reparert", "vintage", "retro", "new",
    "used", "worn", "damaged", "broken", "mint", "excellent", "good",
    "fair", "poor",
)

DEFAULT_EXCLUDED_PATTERNS: tuple[str, ...] = (
    r"^(str|strl)\s*\d+",         # "str 42", "strl31"
    r"^(str|strl)\s+\w+",         # "str us", "strl xl"
    r"^\d+\s*str$",               # "3 str", "26str"
    r"[()]",                      # "dunk (low)"
    r"^[a-z]+\s+str$",            # "xl str"
    r"^(us|eu|eur)\s*\d+$",       # "us 9", "eu44", "eur 39"
    r"størrelse",
    r"billig",
    r"str\s*\d+",                 # "i str 385", "skostr42"
)



def _compile(patterns: Iterable[str]) -> tuple[re.Pattern, ...]:
    # Names are lower-cased before matching, patterns may not be
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


def _or_default(value, default: tuple[str, ...]) -> Iterable[str]:
    if value is None:
        return default
    if isinstance(value, str):
        return (value,)
    return [str(v) for v in value]


@dataclass(frozen=True)
class ExclusionRules:
    """Literal denylist tokens plus regex rules, matched case-insensitively."""

    tokens: frozenset[str] = field(
        default_factory=lambda: frozenset(DEFAULT_EXCLUDED_TOKENS)
    )
    patterns: tuple[re.Pattern, ...] = field(
        default_factory=lambda: _compile(DEFAULT_EXCLUDED_PATTERNS)
    )

    @classmethod
    def build(
        cls,
        tokens: Iterable[str] = DEFAULT_EXCLUDED_TOKENS,
        patterns: Iterable[str] = DEFAULT_EXCLUDED_PATTERNS,
    ) -> ExclusionRules:
        """Create rules from plain strings; tokens are normalized."""
        return cls(
            tokens=frozenset(t.lower().strip() for t in tokens),
            patterns=_compile(patterns),
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> ExclusionRules:
        """Load rules from a YAML file with ``tokens`` and ``patterns`` lists.

        Missing or null keys fall back to the built-in defaults.
        """
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        rules = cls.build(
            tokens=_or_default(data.get("tokens"), DEFAULT_EXCLUDED_TOKENS),
            patterns=_or_default(data.get("patterns"), DEFAULT_EXCLUDED_PATTERNS),
        )
        logger.info(
            "Loaded exclusion rules from %s: %d tokens, %d patterns",
            path, len(rules.tokens), len(rules.patterns),
        )
        return rules

    def is_excluded(self, name) -> bool:
        """Return True if the tag name is noise."""
        if not name or not isinstance(name, str):
            return False

        lowered = name.lower().strip()
        if lowered in self.tokens:
            return True
        return any(p.search(lowered) for p in self.patterns)

    def filter_excluded(self, tags: Sequence[T]) -> list[T]:
        """Drop tags whose ``name`` is excluded."""
        return [t for t in tags if not self.is_excluded(t.name)]


DEFAULT_RULES = ExclusionRules()


def is_excluded(name, rules: ExclusionRules = DEFAULT_RULES) -> bool:
    """Module-level shortcut for ``rules.is_excluded(name)``."""
    return rules.is_excluded(name)


def load_rules(path: str | Path | None) -> ExclusionRules:
    """Return rules from ``path`` if given, otherwise the defaults."""
    if path is None:
        return DEFAULT_RULES
    return ExclusionRules.from_yaml(path)
