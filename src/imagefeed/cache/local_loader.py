"""Load, save and validate the locally cached feed.

:class:`LocalFeedLoader` composes a :class:`~imagefeed.cache.store.FeedStore`
with the cache policy in :mod:`imagefeed.cache.policy`.  It keeps no state
beyond its collaborators: the store, a ``current_date`` clock, and the
:class:`~imagefeed.models.CacheConfig` that parameterises the policy.  A
loader built with ``owns_store=True`` closes the store when it is closed.

Use cases:

- :meth:`~LocalFeedLoader.load` -- read the snapshot and return it only
  while it is valid.  Never deletes or inserts.
- :meth:`~LocalFeedLoader.save` -- delete the old snapshot, then insert the
  new one.  A failed delete aborts the save.
- :meth:`~LocalFeedLoader.validate_cache` -- delete an expired or
  unreadable snapshot.

Store completions reach the loader through a weak reference: if the loader
is released before the store answers, the answer is dropped and the future
returned to the caller is never resolved.  Keep the loader referenced until
its futures resolve.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from datetime import datetime
from typing import Callable, Optional, Sequence

from imagefeed.cache import policy
from imagefeed.cache.store import FeedStore
from imagefeed.loader import FeedLoader, bind_weak, resolve
from imagefeed.models import CacheConfig, CachedFeed, FeedImage, to_local, to_models

logger = logging.getLogger(__name__)


class LocalFeedLoader(FeedLoader):
    """Feed loader and saver backed by a :class:`FeedStore`.

    Args:
        store: Where the snapshot is kept.
        current_date: Clock returning the current (preferably aware) datetime.
        config: Policy settings (``max_age_days`` and ``timezone``).
        owns_store: Close *store* when the loader is closed.

    Example::

        with LocalFeedLoader(store, lambda: datetime.now(timezone.utc), owns_store=True) as loader:
            loader.save(images).result()
            cached = loader.load().result()
    """

    def __init__(
        self,
        store: FeedStore,
        current_date: Callable[[], datetime],
        config: Optional[CacheConfig] = None,
        *,
        owns_store: bool = False,
    ) -> None:
        self._store = store
        self._current_date = current_date
        self._config = config or CacheConfig()
        self._owns_store = owns_store

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> LocalFeedLoader:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the store if this loader owns it; otherwise do nothing.

        Pending store work, including the insert of an in-flight save, is
        finished first.
        """
        if self._owns_store:
            self._store.close()

    # ------------------------------------------------------------------ #
    # Load
    # ------------------------------------------------------------------ #

    def load(self) -> Future[list[FeedImage]]:
        """Return the cached feed if it is still valid, otherwise an empty list.

        Retrieval errors are delivered unchanged.
        """
        completion: Future[list[FeedImage]] = Future()

        def on_retrieved(loader: LocalFeedLoader, retrieval: Future[Optional[CachedFeed]]) -> None:
            error = retrieval.exception()
            if error is not None:
                resolve(completion, error=error)
                return
            cache = retrieval.result()
            if cache is not None and loader._is_valid(cache):
                resolve(completion, to_models(cache.feed))
                return
            if cache is not None:
                logger.debug("Cached feed from %s has expired", cache.timestamp.isoformat())
            resolve(completion, [])

        self._store.retrieve().add_done_callback(bind_weak(self, on_retrieved))
        return completion

    # ------------------------------------------------------------------ #
    # Save
    # ------------------------------------------------------------------ #

    def save(self, feed: Sequence[FeedImage]) -> Future[None]:
        """Replace the cached feed with *feed*, stamped with the current date.

        The old snapshot is deleted first; if that fails the error is
        delivered and nothing is inserted.
        """
        completion: Future[None] = Future()
        images = list(feed)

        def on_inserted(loader: LocalFeedLoader, insertion: Future[None]) -> None:
            resolve(completion, error=insertion.exception())

        def on_deleted(loader: LocalFeedLoader, deletion: Future[None]) -> None:
            error = deletion.exception()
            if error is not None:
                resolve(completion, error=error)
                return
            insertion = loader._store.insert(to_local(images), loader._current_date())
            insertion.add_done_callback(bind_weak(loader, on_inserted))

        self._store.delete().add_done_callback(bind_weak(self, on_deleted))
        return completion

    # ------------------------------------------------------------------ #
    # Validate
    # ------------------------------------------------------------------ #

    def validate_cache(self) -> None:
        """Delete the snapshot if it cannot be read or has expired.

        The deletion is fire-and-forget: its outcome is not reported.
        """

        def on_retrieved(loader: LocalFeedLoader, retrieval: Future[Optional[CachedFeed]]) -> None:
            if retrieval.exception() is not None:
                logger.debug("Deleting unreadable feed cache")
                loader._store.delete()
                return
            cache = retrieval.result()
            if cache is not None and not loader._is_valid(cache):
                logger.debug("Deleting feed cache saved at %s", cache.timestamp.isoformat())
                loader._store.delete()

        self._store.retrieve().add_done_callback(bind_weak(self, on_retrieved))

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _is_valid(self, cache: CachedFeed) -> bool:
        return policy.validate(
            cache.timestamp,
            self._current_date(),
            max_age_days=self._config.max_age_days,
            tz=self._config.tzinfo,
        )
