"""Debounced fan-out catalog search with incremental sectioned snapshots."""

from storesearch.domain.models import SearchQuery, StoreItem
from storesearch.domain.scopes import SearchScope
from storesearch.domain.snapshot import Section, Snapshot
from storesearch.search.aggregator import ResultAggregator
from storesearch.search.orchestrator import SearchOrchestrator, SearchState

__all__ = [
    "ResultAggregator",
    "SearchOrchestrator",
    "SearchQuery",
    "SearchScope",
    "SearchState",
    "Section",
    "Snapshot",
    "StoreItem",
]
