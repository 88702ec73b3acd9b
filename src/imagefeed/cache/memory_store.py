"""Feed store that keeps its snapshot in process memory."""

from __future__ import annotations

from concurrent.futures import Future
from datetime import datetime
from typing import Optional, Sequence

from imagefeed.cache.barrier import BarrierExecutor
from imagefeed.cache.store import FeedStore
from imagefeed.models import CachedFeed, LocalFeedImage


class InMemoryFeedStore(FeedStore):
    """Non-durable :class:`FeedStore` with the same ordering guarantees as the JSON store.

    Never fails.  The snapshot lives as long as the store object.
    """

    def __init__(self, max_workers: Optional[int] = None) -> None:
        self._snapshot: Optional[CachedFeed] = None
        self._executor = BarrierExecutor(max_workers=max_workers, thread_name_prefix="memory-feed-store")

    def __enter__(self) -> InMemoryFeedStore:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        self._executor.close()

    def retrieve(self) -> Future[Optional[CachedFeed]]:
        return self._executor.submit(lambda: self._snapshot)

    def insert(self, feed: Sequence[LocalFeedImage], timestamp: datetime) -> Future[None]:
        snapshot = CachedFeed(feed=tuple(feed), timestamp=timestamp)
        return self._executor.submit(self._replace, snapshot, barrier=True)

    def delete(self) -> Future[None]:
        return self._executor.submit(self._replace, None, barrier=True)

    def _replace(self, snapshot: Optional[CachedFeed]) -> None:
        self._snapshot = snapshot
