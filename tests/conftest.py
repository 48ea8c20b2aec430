"""Shared pytest fixtures.

Each test gets its own ``MetadataStore`` and ``EntityRegistry`` so declarations
made in one test never leak into another. The process default store is only
used by the application entity/DTO definitions.
"""

from __future__ import annotations

import pytest

from entity_metadata.config import Settings, get_settings
from entity_metadata.schema import EntityRegistry, MetadataStore


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """Keep ambient EM_* variables from leaking into tests."""
    for name in ("EM_VERIFY_ON_BOOTSTRAP", "EM_FREEZE_ON_BOOTSTRAP", "LOG_LEVEL", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> MetadataStore:
    return MetadataStore()


@pytest.fixture
def registry(store: MetadataStore) -> EntityRegistry:
    return EntityRegistry(store)


@pytest.fixture
def unfrozen_settings() -> Settings:
    """Settings that verify foreign keys but leave the metadata writable."""
    return Settings(verify_on_bootstrap=True, freeze_on_bootstrap=False)
