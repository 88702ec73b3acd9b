"""Feed store backed by a single JSON file.

The snapshot is written as::

    {
      "feed": [{"id": "...", "description": "...", "location": "...", "url": "..."}],
      "timestamp": "2024-11-26T10:00:00Z"
    }

Writes go to a temp file in the same directory followed by
:func:`os.replace`, so a concurrent or later reader sees either the old
snapshot or the new one.  Missing parent directories are *not* created: an
unwritable destination is reported as
:class:`~imagefeed.exceptions.StoreWriteError`.

All file access happens on the worker threads of a
:class:`~imagefeed.cache.barrier.BarrierExecutor`; ``insert`` and
``delete`` are barriers.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import Future
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence
from uuid import UUID

from pydantic import AnyUrl, BaseModel, ValidationError

from imagefeed.cache.barrier import BarrierExecutor
from imagefeed.cache.store import FeedStore
from imagefeed.config import atomic_write
from imagefeed.exceptions import StoreDeleteError, StoreRetrievalError, StoreWriteError
from imagefeed.models import CachedFeed, LocalFeedImage

logger = logging.getLogger(__name__)


class _StoredImage(BaseModel):
    id: UUID
    description: Optional[str]
    location: Optional[str]
    url: AnyUrl


class _StoredFeed(BaseModel):
    feed: list[_StoredImage]
    timestamp: datetime

    @classmethod
    def from_local(cls, feed: Sequence[LocalFeedImage], timestamp: datetime) -> _StoredFeed:
        return cls(
            feed=[
                _StoredImage(
                    id=image.id,
                    description=image.description,
                    location=image.location,
                    url=image.url,
                )
                for image in feed
            ],
            timestamp=timestamp,
        )

    def to_cached_feed(self) -> CachedFeed:
        return CachedFeed(
            feed=tuple(
                LocalFeedImage(
                    id=image.id,
                    description=image.description,
                    location=image.location,
                    url=image.url,
                )
                for image in self.feed
            ),
            timestamp=self.timestamp,
        )


class JsonFeedStore(FeedStore):
    """Disk-backed feed store holding one JSON snapshot file.

    Args:
        store_path: Path of the snapshot file.  Its directory must exist.
        max_workers: Worker threads used for file access.

    Example::

        with JsonFeedStore("/tmp/feed-store.json") as store:
            store.insert(local_images, datetime.now(timezone.utc)).result()
            snapshot = store.retrieve().result()
    """

    def __init__(self, store_path: str | Path, max_workers: Optional[int] = None) -> None:
        self._path = Path(store_path)
        self._executor = BarrierExecutor(max_workers=max_workers, thread_name_prefix="json-feed-store")

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> JsonFeedStore:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Wait for pending operations and stop the worker threads."""
        self._executor.close()

    # ------------------------------------------------------------------ #
    # FeedStore
    # ------------------------------------------------------------------ #

    def retrieve(self) -> Future[Optional[CachedFeed]]:
        return self._executor.submit(self._read_snapshot)

    def insert(self, feed: Sequence[LocalFeedImage], timestamp: datetime) -> Future[None]:
        document = _StoredFeed.from_local(feed, timestamp)
        return self._executor.submit(self._write_snapshot, document, barrier=True)

    def delete(self) -> Future[None]:
        return self._executor.submit(self._remove_snapshot, barrier=True)

    # ------------------------------------------------------------------ #
    # Worker functions
    # ------------------------------------------------------------------ #

    def _read_snapshot(self) -> Optional[CachedFeed]:
        try:
            data = self._path.read_bytes()
        except OSError as exc:
            # Unreadable or absent location: nothing has been cached.
            logger.debug("No feed snapshot at %s (%s)", self._path, exc.__class__.__name__)
            return None

        try:
            document = _StoredFeed.model_validate_json(data)
        except ValidationError as exc:
            raise StoreRetrievalError(
                f"Cannot decode feed snapshot at {self._path}: {exc.error_count()} error(s)"
            ) from exc

        logger.debug("Read feed snapshot with %d image(s) from %s", len(document.feed), self._path)
        return document.to_cached_feed()

    def _write_snapshot(self, document: _StoredFeed) -> None:
        try:
            atomic_write(self._path, document.model_dump_json())
        except OSError as exc:
            raise StoreWriteError(f"Cannot write feed snapshot to {self._path}: {exc}") from exc
        logger.debug("Wrote feed snapshot with %d image(s) to %s", len(document.feed), self._path)

    def _remove_snapshot(self) -> None:
        if not os.path.lexists(self._path):
            return
        try:
            self._path.unlink()
        except OSError as exc:
            raise StoreDeleteError(f"Cannot delete feed snapshot at {self._path}: {exc}") from exc
        logger.debug("Deleted feed snapshot at %s", self._path)
