"""Local feed caching for imagefeed.

This package keeps one feed snapshot on disk (or in memory) and decides
whether it is still fresh:

- :class:`FeedStore` -- the store interface.
- :class:`JsonFeedStore` / :class:`InMemoryFeedStore` -- implementations,
  both serialising writes through a :class:`BarrierExecutor`.
- :class:`LocalFeedLoader` -- the load / save / validate use cases.
- :mod:`imagefeed.cache.policy` -- the calendar-day expiration rule.
"""

from imagefeed.cache.barrier import BarrierExecutor
from imagefeed.cache.json_store import JsonFeedStore
from imagefeed.cache.local_loader import LocalFeedLoader
from imagefeed.cache.memory_store import InMemoryFeedStore
from imagefeed.cache.store import FeedStore

__all__ = [
    "BarrierExecutor",
    "FeedStore",
    "InMemoryFeedStore",
    "JsonFeedStore",
    "LocalFeedLoader",
]
