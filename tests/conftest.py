"""Shared fixtures for orchestrator and artwork tests."""

from __future__ import annotations

import pytest

from factories import FakeCatalog
from storesearch.config import SearchSettings


@pytest.fixture
def settings() -> SearchSettings:
    return SearchSettings(debounce_seconds=0.01)


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog()
