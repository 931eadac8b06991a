"""HTTP client lifecycle and orchestrator wiring."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from storesearch.config import SearchSettings, get_settings
from storesearch.domain.scopes import SearchScope
from storesearch.logging import configure_logging, logger
from storesearch.search.orchestrator import SearchOrchestrator
from storesearch.services.catalog import CatalogClient


class SearchSession:
    """Owns the shared ``httpx.AsyncClient`` behind catalog and artwork requests."""

    def __init__(
        self,
        settings: SearchSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._transport = transport

    @asynccontextmanager
    async def orchestrator(
        self, scope: SearchScope = SearchScope.ALL
    ) -> AsyncIterator[SearchOrchestrator]:
        configure_logging(
            self.settings.log_level,
            json_output=self.settings.environment != "dev",
        )
        async with httpx.AsyncClient(
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            catalog = CatalogClient(client, settings=self.settings.catalog)
            logger.info(
                "search_session_opened",
                environment=self.settings.environment,
                search_url=str(self.settings.catalog.search_url),
            )
            async with SearchOrchestrator(catalog, settings=self.settings, scope=scope) as orchestrator:
                yield orchestrator


def get_search_session(settings: SearchSettings | None = None) -> SearchSession:
    return SearchSession(settings=settings)


__all__ = ["SearchSession", "get_search_session"]
