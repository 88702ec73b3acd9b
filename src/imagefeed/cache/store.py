"""The feed store interface.

A feed store keeps at most one :class:`~imagefeed.models.CachedFeed`
snapshot.  Every operation is asynchronous and returns a
:class:`~concurrent.futures.Future`; failures are delivered as the future's
exception rather than raised from the call.

Implementations must serialise mutating operations: ``insert`` and
``delete`` run one at a time, in the order they were issued, and never
overlap a ``retrieve``.  Retrievals may run concurrently with each other.

Implementations:
    :class:`~imagefeed.cache.json_store.JsonFeedStore` -- a JSON file on disk.
    :class:`~imagefeed.cache.memory_store.InMemoryFeedStore` -- process memory.
"""

from __future__ import annotations

import abc
from concurrent.futures import Future
from datetime import datetime
from typing import Optional, Sequence

from imagefeed.models import CachedFeed, LocalFeedImage


class FeedStore(abc.ABC):
    """Durable storage for a single feed snapshot."""

    @abc.abstractmethod
    def retrieve(self) -> Future[Optional[CachedFeed]]:
        """Read the current snapshot.

        Resolves to ``None`` when nothing is stored.  Fails with
        :class:`~imagefeed.exceptions.StoreRetrievalError` when the stored
        data cannot be decoded.  Never modifies the stored data.
        """

    @abc.abstractmethod
    def insert(self, feed: Sequence[LocalFeedImage], timestamp: datetime) -> Future[None]:
        """Replace the stored snapshot with *feed* saved at *timestamp*.

        Fails with :class:`~imagefeed.exceptions.StoreWriteError` when the
        snapshot cannot be written.
        """

    @abc.abstractmethod
    def delete(self) -> Future[None]:
        """Remove the stored snapshot, succeeding if there is none.

        Fails with :class:`~imagefeed.exceptions.StoreDeleteError` when an
        existing snapshot cannot be removed.
        """

    def close(self) -> None:
        """Release resources held by the store.  The default holds none."""
