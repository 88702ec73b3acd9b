"""Shared test fixtures for imagefeed.

Provides stores, spies and isolated configuration directories.  These
fixtures are automatically discovered by pytest and available to all test
modules without explicit imports.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from helpers import FeedStoreSpy, HTTPClientSpy
from imagefeed.cache import InMemoryFeedStore, JsonFeedStore


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    """A snapshot path inside a fresh, empty directory."""
    return tmp_path / "feed-store.json"


@pytest.fixture
def json_store(store_path: Path) -> JsonFeedStore:
    """A JsonFeedStore writing to ``store_path``; closed after the test."""
    store = JsonFeedStore(store_path)
    yield store
    store.close()


@pytest.fixture
def memory_store() -> InMemoryFeedStore:
    """An InMemoryFeedStore; closed after the test."""
    store = InMemoryFeedStore()
    yield store
    store.close()


@pytest.fixture
def store_spy() -> FeedStoreSpy:
    return FeedStoreSpy()


@pytest.fixture
def client_spy() -> HTTPClientSpy:
    return HTTPClientSpy()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_CACHE_HOME at subdirectories of
    tmp_path, forces the XDG code path, and clears every IMAGEFEED_*
    variable so tests never touch real user config.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("imagefeed.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    for var in ["IMAGEFEED_FEED_URL", "IMAGEFEED_STORE_PATH"]:
        monkeypatch.delenv(var, raising=False)
    return tmp_path
