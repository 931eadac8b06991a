"""Merge incoming result batches into ordered category sections."""

from __future__ import annotations

from typing import Iterable

from storesearch.domain.models import StoreItem
from storesearch.domain.scopes import CONCRETE_SCOPES, SearchScope
from storesearch.domain.snapshot import Section, Snapshot
from storesearch.logging import logger


class ResultAggregator:
    """Accumulates one generation's results.

    Only the orchestrator's event loop mutates an aggregator, so it carries no
    locking of its own.
    """

    def __init__(self) -> None:
        self._generation = 0
        self._buckets: dict[SearchScope, list[StoreItem]] = {}
        self._seen_ids: set[str] = set()
        self._snapshot = Snapshot.empty()

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def generation(self) -> int:
        return self._generation

    def reset(self, generation: int | None = None) -> Snapshot:
        if generation is not None:
            self._generation = generation
        self._buckets = {}
        self._seen_ids = set()
        self._snapshot = Snapshot.empty(self._generation)
        return self._snapshot

    def merge(self, items: Iterable[StoreItem]) -> Snapshot:
        dropped = 0
        for item in items:
            category = SearchScope.for_kind(item.kind)
            if category is None:
                dropped += 1
                continue
            if item.id in self._seen_ids:
                continue
            self._seen_ids.add(item.id)
            self._buckets.setdefault(category, []).append(item)

        if dropped:
            logger.debug("unclassified_items_dropped", count=dropped, generation=self._generation)

        self._snapshot = Snapshot(sections=self._build_sections(), generation=self._generation)
        return self._snapshot

    def _build_sections(self) -> tuple[Section, ...]:
        sections: list[Section] = []
        for category in CONCRETE_SCOPES:
            bucket = self._buckets.get(category)
            if bucket:
                sections.append(Section(title=category.title, items=tuple(bucket)))
        return tuple(sections)


__all__ = ["ResultAggregator"]
