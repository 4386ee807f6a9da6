"""Shared pytest fixtures and configuration."""

from pathlib import Path

import pytest

from slugsmith.models.config import ResolverSettings, SlugSettings
from slugsmith.stores import JsonFileStore, MemoryStore
from slugsmith.stores.base import RowStore


@pytest.fixture
def fast_settings() -> SlugSettings:
    """Settings with no wait between conflict retries."""
    return SlugSettings(resolver=ResolverSettings(retry_wait_seconds=0.0))


@pytest.fixture
def memory_store() -> MemoryStore:
    """Empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    """Temporary directory for JSON store files."""
    directory = tmp_path / "store"
    directory.mkdir()
    return directory


@pytest.fixture(params=["memory", "json"])
def store(request: pytest.FixtureRequest, store_dir: Path) -> RowStore:
    """Each bundled store implementation, empty."""
    if request.param == "memory":
        return MemoryStore()
    return JsonFileStore(store_dir=store_dir)
