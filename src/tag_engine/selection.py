"""Include/exclude selection state for one brand.

Every operation returns a new TagSelection. A tag name lives in at most
one of ``included`` / ``excluded``; names compare case-insensitively.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from .models import Tag, TagState


def _without(tags: tuple[Tag, ...], key: str) -> tuple[Tag, ...]:
    return tuple(t for t in tags if t.key != key)


@dataclass(frozen=True)
class TagSelection:
    """The brand being analysed plus the tags the user refined it with."""

    brand: str = ""
    included: tuple[Tag, ...] = ()
    excluded: tuple[Tag, ...] = ()

    def set_brand(self, brand: str) -> TagSelection:
        """Switch brand; moving to a different brand clears all tags."""
        new_brand = brand.lower().strip()
        if self.brand and new_brand != self.brand:
            return TagSelection(brand=new_brand)
        return replace(self, brand=new_brand)

    def include(self, tag: Tag) -> TagSelection:
        key = tag.key
        return replace(
            self,
            included=_without(self.included, key) + (replace(tag, state=TagState.INCLUDED),),
            excluded=_without(self.excluded, key),
        )

    def exclude(self, tag: Tag) -> TagSelection:
        key = tag.key
        return replace(
            self,
            included=_without(self.included, key),
            excluded=_without(self.excluded, key) + (replace(tag, state=TagState.EXCLUDED),),
        )

    def unselect(self, tag: Tag | str) -> TagSelection:
        key = tag.key if isinstance(tag, Tag) else tag.lower().strip()
        return replace(
            self,
            included=_without(self.included, key),
            excluded=_without(self.excluded, key),
        )

    def clear_tags(self) -> TagSelection:
        return TagSelection(brand=self.brand)

    def clear_brand(self) -> TagSelection:
        return TagSelection()

    def tag_state(self, name: str) -> TagState:
        key = name.lower().strip()
        if any(t.key == key for t in self.included):
            return TagState.INCLUDED
        if any(t.key == key for t in self.excluded):
            return TagState.EXCLUDED
        return TagState.UNSELECTED

    def unselected(self, candidates: Sequence[Tag]) -> list[Tag]:
        """Candidates that are neither included nor excluded yet."""
        taken = {t.key for t in self.included} | {t.key for t in self.excluded}
        return [t for t in candidates if t.key not in taken]

    def to_dict(self) -> dict:
        return {
            "brand": self.brand,
            "included": [t.name for t in self.included],
            "excluded": [t.name for t in self.excluded],
        }
