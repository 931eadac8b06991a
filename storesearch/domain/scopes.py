"""Selectable media scopes and their query/layout mapping."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal


ScrollBehavior = Literal["none", "continuous_group_leading_boundary"]


@dataclass(frozen=True, slots=True)
class LayoutHint:
    """Grouping hint for renderers; the search core never reads it."""

    items_per_group: int
    group_width_fraction: float
    scroll_behavior: ScrollBehavior


class SearchScope(Enum):
    ALL = ("All", "all")
    MOVIES = ("Movies", "movie")
    MUSIC = ("Music", "music")
    APPS = ("Apps", "software")
    BOOKS = ("Books", "ebook")

    def __init__(self, title: str, media_type: str) -> None:
        self.title = title
        self.media_type = media_type

    @property
    def is_meta(self) -> bool:
        return self is SearchScope.ALL

    @property
    def layout(self) -> LayoutHint:
        if self.is_meta:
            return LayoutHint(
                items_per_group=1,
                group_width_fraction=1 / 3,
                scroll_behavior="continuous_group_leading_boundary",
            )
        return LayoutHint(items_per_group=3, group_width_fraction=1.0, scroll_behavior="none")

    def expand(self) -> tuple[SearchScope, ...]:
        """Concrete scopes queried for this selection."""

        if self.is_meta:
            return CONCRETE_SCOPES
        return (self,)

    @classmethod
    def from_index(cls, index: int) -> SearchScope:
        members = list(cls)
        if not 0 <= index < len(members):
            raise ValueError(f"No search scope at index {index}.")
        return members[index]

    @classmethod
    def for_kind(cls, kind: str) -> SearchScope | None:
        """Category for a raw API ``kind``; ``None`` means the item is dropped."""

        return _KIND_CATEGORIES.get(kind)


# Fixed section order for results.
CONCRETE_SCOPES: tuple[SearchScope, ...] = (
    SearchScope.MOVIES,
    SearchScope.MUSIC,
    SearchScope.APPS,
    SearchScope.BOOKS,
)

# Exact, case-sensitive. Music videos, audiobooks, podcasts etc. are not listed.
_KIND_CATEGORIES: dict[str, SearchScope] = {
    "feature-movie": SearchScope.MOVIES,
    "song": SearchScope.MUSIC,
    "album": SearchScope.MUSIC,
    "software": SearchScope.APPS,
    "ebook": SearchScope.BOOKS,
}


__all__ = ["CONCRETE_SCOPES", "LayoutHint", "ScrollBehavior", "SearchScope"]
