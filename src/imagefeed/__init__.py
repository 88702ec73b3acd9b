"""imagefeed -- load an image feed from a remote API or a local cache.

The library has two loaders that share the
:class:`~imagefeed.loader.FeedLoader` interface:

- :class:`~imagefeed.client.RemoteFeedLoader` fetches ``{"items": [...]}``
  from an HTTP endpoint and maps it to :class:`~imagefeed.models.FeedImage`
  values.
- :class:`~imagefeed.cache.LocalFeedLoader` reads, saves and validates a
  single cached snapshot.  The snapshot expires after seven calendar days.

Every operation returns a :class:`concurrent.futures.Future`.  Failures are
:class:`~imagefeed.exceptions.FeedError` subclasses set on that future.

Typical usage::

    from imagefeed import HttpxHTTPClient, RemoteFeedLoader, load_config
    from imagefeed.factory import create_local_loader

    config = load_config()
    with HttpxHTTPClient(config.request) as client:
        remote = RemoteFeedLoader(config.feed_url, client)
        images = remote.load().result()
    with create_local_loader(config) as local:
        local.save(images).result()

Loaders hold themselves only weakly while an operation is pending, so keep
each loader referenced (as above) until its future resolves.

Modules:
    models: Pydantic models for feed records and configuration.
    exceptions: Exception hierarchy.
    config: XDG-aware configuration loading and saving.
    cache: Feed store, cache policy and local loader.
    client: HTTP client, response mapper and remote loader.
    factory: Wiring helpers that build loaders from configuration.
"""

from imagefeed.cache import InMemoryFeedStore, JsonFeedStore, LocalFeedLoader
from imagefeed.client import HttpxHTTPClient, RemoteFeedLoader
from imagefeed.config import load_config, save_config
from imagefeed.exceptions import (
    ConfigError,
    ConnectivityError,
    FeedError,
    InvalidDataError,
    StoreDeleteError,
    StoreRetrievalError,
    StoreWriteError,
)
from imagefeed.models import FeedImage, LocalFeedImage

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "ConnectivityError",
    "FeedError",
    "FeedImage",
    "HttpxHTTPClient",
    "InMemoryFeedStore",
    "InvalidDataError",
    "JsonFeedStore",
    "LocalFeedImage",
    "LocalFeedLoader",
    "RemoteFeedLoader",
    "StoreDeleteError",
    "StoreRetrievalError",
    "StoreWriteError",
    "load_config",
    "save_config",
]
