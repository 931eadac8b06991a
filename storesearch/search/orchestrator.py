"""Debounced, generation-tagged fan-out search over the catalog."""

from __future__ import annotations

import asyncio
from enum import Enum
from functools import partial
from typing import Callable, Protocol, Sequence

from storesearch.config import SearchSettings, get_settings
from storesearch.domain.models import SearchQuery, StoreItem
from storesearch.domain.scopes import SearchScope
from storesearch.domain.snapshot import Snapshot
from storesearch.logging import logger
from storesearch.search.aggregator import ResultAggregator
from storesearch.services.artwork import ArtworkLoader
from storesearch.services.catalog import Artwork
from storesearch.services.exceptions import CatalogError


SnapshotListener = Callable[[Snapshot], None]


class Catalog(Protocol):
    async def search(self, query: SearchQuery) -> Sequence[StoreItem]: ...

    async def fetch_asset(self, url: str) -> Artwork: ...


class SearchState(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    QUERYING = "querying"


class SearchOrchestrator:
    """Owns the current search input and turns it into published snapshots.

    Every input change restarts the debounce timer. When the timer fires a new
    generation begins: earlier scope queries and artwork loads are cancelled,
    the aggregator is reset, and one query per effective scope is started.
    Each scope's results are merged as soon as they arrive, provided the
    generation and the input that produced them are still current.

    All state lives on the event loop that calls ``update``; scope tasks only
    hand their results back to that loop.
    """

    def __init__(
        self,
        catalog: Catalog,
        *,
        settings: SearchSettings | None = None,
        scope: SearchScope = SearchScope.ALL,
        aggregator: ResultAggregator | None = None,
        artwork: ArtworkLoader | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._catalog = catalog
        self._aggregator = aggregator or ResultAggregator()
        self.artwork = artwork or ArtworkLoader(catalog)
        self._listeners: list[SnapshotListener] = []
        self._term = ""
        self._scope = scope
        self._generation = 0
        self._debounce_task: asyncio.Task[None] | None = None
        self._inflight: dict[SearchScope, asyncio.Task[None]] = {}

    async def __aenter__(self) -> SearchOrchestrator:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @property
    def term(self) -> str:
        return self._term

    @property
    def scope(self) -> SearchScope:
        return self._scope

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def snapshot(self) -> Snapshot:
        return self._aggregator.snapshot

    @property
    def state(self) -> SearchState:
        if self._debounce_task is not None and not self._debounce_task.done():
            return SearchState.DEBOUNCING
        if self._inflight:
            return SearchState.QUERYING
        return SearchState.IDLE

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def update(self, *, term: str | None = None, scope: SearchScope | None = None) -> None:
        """Record an input change and (re)start the debounce timer."""

        if term is not None:
            self._term = term
        if scope is not None:
            self._scope = scope
        self._cancel_debounce()
        self._debounce_task = asyncio.get_running_loop().create_task(
            self._debounce(self.settings.debounce_seconds),
            name="search-debounce",
        )

    def search_now(self) -> int:
        """Skip the remaining debounce delay and start a generation immediately."""

        self._cancel_debounce()
        return self._begin_cycle()

    async def wait_idle(self) -> None:
        """Wait until no debounce timer or scope query is pending."""

        while True:
            debounce = self._debounce_task
            if debounce is not None and not debounce.done():
                await asyncio.wait({debounce})
                continue
            pending = [task for task in self._inflight.values() if not task.done()]
            if not pending:
                return
            await asyncio.wait(pending)

    async def close(self) -> None:
        tasks = [task for task in self._inflight.values() if not task.done()]
        if self._debounce_task is not None:
            tasks.append(self._debounce_task)
        self._cancel_debounce()
        self._cancel_inflight()
        tasks.extend(self.artwork.cancel_all())
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _debounce(self, delay: float) -> None:
        await asyncio.sleep(delay)
        self._debounce_task = None
        self._begin_cycle()

    def _cancel_debounce(self) -> None:
        if self._debounce_task is not None:
            self._debounce_task.cancel()
            self._debounce_task = None

    def _cancel_inflight(self) -> None:
        tasks = list(self._inflight.values())
        self._inflight.clear()
        for task in tasks:
            task.cancel()

    def _begin_cycle(self) -> int:
        self._generation += 1
        generation = self._generation
        self._cancel_inflight()
        self.artwork.cancel_all()

        raw_term = self._term
        selection = self._scope
        self._publish(self._aggregator.reset(generation))

        term = raw_term.strip()
        if not term:
            logger.debug("search_cleared", generation=generation)
            return generation

        scopes = selection.expand()
        limit = self.settings.fan_out_limit if selection.is_meta else self.settings.single_scope_limit
        logger.info(
            "search_cycle_started",
            generation=generation,
            term=term,
            scope=selection.title,
            media=[target.media_type for target in scopes],
            limit=limit,
        )

        loop = asyncio.get_running_loop()
        for target in scopes:
            query = SearchQuery(
                term=term,
                scope=target,
                lang=self.settings.catalog.lang,
                limit=limit,
            )
            task = loop.create_task(
                self._run_scope(generation, raw_term, selection, query),
                name=f"search:{generation}:{target.media_type}",
            )
            self._inflight[target] = task
            task.add_done_callback(partial(self._scope_finished, target))
        return generation

    async def _run_scope(
        self,
        generation: int,
        raw_term: str,
        selection: SearchScope,
        query: SearchQuery,
    ) -> None:
        try:
            items = await self._catalog.search(query)
        except CatalogError as exc:
            logger.warning(
                "scope_search_failed",
                generation=generation,
                media=query.scope.media_type,
                term=query.term,
                error=str(exc),
            )
            return

        if not self._is_current(generation, raw_term, selection):
            logger.debug(
                "stale_result_discarded",
                generation=generation,
                current_generation=self._generation,
                media=query.scope.media_type,
            )
            return

        self._publish(self._aggregator.merge(items))

    def _is_current(self, generation: int, raw_term: str, selection: SearchScope) -> bool:
        return (
            generation == self._generation
            and raw_term == self._term
            and selection is self._scope
        )

    def _scope_finished(self, scope: SearchScope, task: asyncio.Task) -> None:
        if self._inflight.get(scope) is task:
            del self._inflight[scope]
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("scope_task_crashed", media=scope.media_type, exc_info=exc)

    def _publish(self, snapshot: Snapshot) -> None:
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("snapshot_listener_failed", generation=snapshot.generation)


__all__ = ["Catalog", "SearchOrchestrator", "SearchState", "SnapshotListener"]
