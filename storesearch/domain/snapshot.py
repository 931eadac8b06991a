"""Immutable sectioned result snapshots handed to renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from storesearch.domain.models import StoreItem


@dataclass(frozen=True, slots=True)
class Section:
    title: str
    items: tuple[StoreItem, ...]

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Full result state of one search generation at one point in time.

    Snapshots are never mutated. Renderers compare successive snapshots by
    section title and item id to work out what changed.
    """

    sections: tuple[Section, ...] = ()
    generation: int = 0

    @classmethod
    def empty(cls, generation: int = 0) -> Snapshot:
        return cls(sections=(), generation=generation)

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)

    @property
    def is_empty(self) -> bool:
        return not self.sections

    @property
    def section_titles(self) -> tuple[str, ...]:
        return tuple(section.title for section in self.sections)

    @property
    def number_of_items(self) -> int:
        return sum(len(section) for section in self.sections)

    @property
    def item_identifiers(self) -> tuple[str, ...]:
        return tuple(item.id for section in self.sections for item in section.items)

    def title_for_section(self, index: int) -> str:
        return self.sections[index].title

    def items_in(self, title: str) -> tuple[StoreItem, ...]:
        for section in self.sections:
            if section.title == title:
                return section.items
        return ()


__all__ = ["Section", "Snapshot"]
