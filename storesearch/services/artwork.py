"""Identity-keyed artwork loads bound to renderer display slots."""

from __future__ import annotations

import asyncio
from functools import partial
from typing import Callable, Hashable, Protocol

from storesearch.domain.models import StoreItem
from storesearch.logging import logger
from storesearch.services.catalog import Artwork
from storesearch.services.exceptions import AssetMissing


ArtworkCallback = Callable[[Hashable, Artwork], None]


class ArtworkSource(Protocol):
    async def fetch_asset(self, url: str) -> Artwork: ...


class ArtworkLoader:
    """Tracks which item each display slot shows and loads its artwork once.

    Loads are keyed by item id. A finished load is delivered only to slots
    that are still bound to that id, so a slot reused for another item never
    receives stale artwork.
    """

    def __init__(self, source: ArtworkSource, on_artwork: ArtworkCallback | None = None) -> None:
        self._source = source
        self.on_artwork = on_artwork
        self._bindings: dict[Hashable, str] = {}
        self._tasks: dict[str, asyncio.Task[Artwork | None]] = {}

    @property
    def in_flight(self) -> frozenset[str]:
        return frozenset(self._tasks)

    def bound_item(self, slot: Hashable) -> str | None:
        return self._bindings.get(slot)

    def bind(self, slot: Hashable, item: StoreItem) -> asyncio.Task[Artwork | None] | None:
        if self._bindings.get(slot) == item.id:
            return self._tasks.get(item.id)

        self._release(slot)
        if not item.artwork_url:
            return None

        self._bindings[slot] = item.id
        task = self._tasks.get(item.id)
        if task is None:
            task = asyncio.get_running_loop().create_task(
                self._load(item.id, item.artwork_url),
                name=f"artwork:{item.id}",
            )
            self._tasks[item.id] = task
            task.add_done_callback(partial(self._forget, item.id))
        return task

    def unbind(self, slot: Hashable) -> None:
        self._release(slot)

    def cancel_all(self) -> list[asyncio.Task[Artwork | None]]:
        """Cancel every load; returns the cancelled tasks."""

        tasks = list(self._tasks.values())
        self._tasks.clear()
        self._bindings.clear()
        for task in tasks:
            task.cancel()
        return tasks

    def _release(self, slot: Hashable) -> None:
        item_id = self._bindings.pop(slot, None)
        if item_id is None or item_id in self._bindings.values():
            return
        task = self._tasks.pop(item_id, None)
        if task is not None:
            task.cancel()

    async def _load(self, item_id: str, url: str) -> Artwork | None:
        try:
            artwork = await self._source.fetch_asset(url)
        except AssetMissing as exc:
            logger.debug("artwork_missing", item_id=item_id, error=str(exc))
            return None

        callback = self.on_artwork
        if callback is not None:
            for slot, bound_id in list(self._bindings.items()):
                if bound_id == item_id:
                    callback(slot, artwork)
        return artwork

    def _forget(self, item_id: str, task: asyncio.Task) -> None:
        if self._tasks.get(item_id) is task:
            del self._tasks[item_id]
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("artwork_load_failed", item_id=item_id, exc_info=exc)


__all__ = ["ArtworkCallback", "ArtworkLoader", "ArtworkSource"]
