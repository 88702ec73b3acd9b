"""Test doubles and factories shared by the imagefeed test suite."""

from __future__ import annotations

import uuid
from concurrent.futures import Future
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Sequence

import httpx

from imagefeed.cache.store import FeedStore
from imagefeed.client.http_client import HTTPClient
from imagefeed.models import CachedFeed, FeedImage, LocalFeedImage, to_local

ANY_URL = "https://any-url.com/feed"


class AnyError(Exception):
    """Stand-in for an arbitrary collaborator failure."""


def unique_image(description: Optional[str] = "a description", location: Optional[str] = "a location") -> FeedImage:
    return FeedImage(
        id=uuid.uuid4(),
        description=description,
        location=location,
        url="https://any-url.com/image.png",
    )


def unique_images() -> tuple[list[FeedImage], list[LocalFeedImage]]:
    """Return two unique images as domain models and as local records."""
    models = [unique_image(), unique_image(description=None, location=None)]
    return models, to_local(models)


def fixed_now() -> datetime:
    return datetime(2024, 11, 28, 12, 30, 15, tzinfo=timezone.utc)


def minus_cache_max_age(date: datetime) -> datetime:
    """Return the timestamp at which a snapshot expires exactly at *date*."""
    return date - timedelta(days=7)


def items_payload(*images: FeedImage) -> dict[str, Any]:
    """Build the remote ``{"items": [...]}`` payload for *images*."""
    return {
        "items": [
            {
                "id": str(image.id),
                "description": image.description,
                "location": image.location,
                "image": str(image.url),
            }
            for image in images
        ]
    }


# ---------------------------------------------------------------------------
# FeedStore spy
# ---------------------------------------------------------------------------


class FeedStoreSpy(FeedStore):
    """Records store messages and lets tests complete each one by hand.

    ``messages`` holds ``("retrieve",)``, ``("delete",)`` and
    ``("insert", feed, timestamp)`` tuples in call order.
    """

    def __init__(self) -> None:
        self.messages: list[tuple[Any, ...]] = []
        self.closed = False
        self._retrievals: list[Future[Optional[CachedFeed]]] = []
        self._insertions: list[Future[None]] = []
        self._deletions: list[Future[None]] = []

    def retrieve(self) -> Future[Optional[CachedFeed]]:
        self.messages.append(("retrieve",))
        future: Future[Optional[CachedFeed]] = Future()
        self._retrievals.append(future)
        return future

    def insert(self, feed: Sequence[LocalFeedImage], timestamp: datetime) -> Future[None]:
        self.messages.append(("insert", list(feed), timestamp))
        future: Future[None] = Future()
        self._insertions.append(future)
        return future

    def delete(self) -> Future[None]:
        self.messages.append(("delete",))
        future: Future[None] = Future()
        self._deletions.append(future)
        return future

    def close(self) -> None:
        self.closed = True

    def complete_retrieval(self, error: Exception, index: int = 0) -> None:
        self._retrievals[index].set_exception(error)

    def complete_retrieval_with_empty_cache(self, index: int = 0) -> None:
        self._retrievals[index].set_result(None)

    def complete_retrieval_with(
        self, feed: Sequence[LocalFeedImage], timestamp: datetime, index: int = 0
    ) -> None:
        self._retrievals[index].set_result(CachedFeed(feed=tuple(feed), timestamp=timestamp))

    def complete_deletion(self, error: Exception, index: int = 0) -> None:
        self._deletions[index].set_exception(error)

    def complete_deletion_successfully(self, index: int = 0) -> None:
        self._deletions[index].set_result(None)

    def complete_insertion(self, error: Exception, index: int = 0) -> None:
        self._insertions[index].set_exception(error)

    def complete_insertion_successfully(self, index: int = 0) -> None:
        self._insertions[index].set_result(None)


# ---------------------------------------------------------------------------
# HTTPClient spy
# ---------------------------------------------------------------------------


class HTTPClientSpy(HTTPClient):
    """Records requested URLs and lets tests complete each request by hand."""

    def __init__(self) -> None:
        self.requested_urls: list[str] = []
        self._requests: list[Future[httpx.Response]] = []

    def get(self, url: str) -> Future[httpx.Response]:
        self.requested_urls.append(url)
        future: Future[httpx.Response] = Future()
        self._requests.append(future)
        return future

    def complete_with_error(self, error: Exception, index: int = 0) -> None:
        self._requests[index].set_exception(error)

    def complete_with_status(self, status_code: int, data: bytes = b"", index: int = 0) -> None:
        response = httpx.Response(
            status_code=status_code,
            content=data,
            request=httpx.Request("GET", self.requested_urls[index]),
        )
        self._requests[index].set_result(response)
