"""Build configured loaders from a :class:`~imagefeed.models.FeedConfig`."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from imagefeed.cache.json_store import JsonFeedStore
from imagefeed.cache.local_loader import LocalFeedLoader
from imagefeed.cache.store import FeedStore
from imagefeed.client.http_client import HTTPClient
from imagefeed.client.remote_loader import RemoteFeedLoader
from imagefeed.config import resolve_store_path
from imagefeed.exceptions import ConfigError
from imagefeed.models import FeedConfig


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def create_remote_loader(config: FeedConfig, client: HTTPClient) -> RemoteFeedLoader:
    """Create a :class:`RemoteFeedLoader` for ``config.feed_url``.

    Raises:
        ConfigError: If no feed URL is configured.
    """
    if not config.feed_url:
        raise ConfigError("No feed URL configured (set feed_url or IMAGEFEED_FEED_URL)")
    return RemoteFeedLoader(config.feed_url, client)


def create_local_loader(
    config: FeedConfig,
    store: Optional[FeedStore] = None,
    current_date: Optional[Callable[[], datetime]] = None,
) -> LocalFeedLoader:
    """Create a :class:`LocalFeedLoader` using the configured store path and policy.

    Args:
        config: Effective configuration.
        store: Store to use instead of a :class:`JsonFeedStore` at
            :func:`~imagefeed.config.resolve_store_path`.
        current_date: Clock; defaults to the current UTC time.

    A store created here is owned by the loader: close it with
    :meth:`LocalFeedLoader.close` or by using the loader as a context
    manager.  A store passed in stays the caller's to close.
    """
    owns_store = store is None
    if store is None:
        store = JsonFeedStore(resolve_store_path(config))
    return LocalFeedLoader(store, current_date or utc_now, config.cache, owns_store=owns_store)
