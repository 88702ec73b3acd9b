"""The feed-loading interface shared by the remote and local loaders.

Loaders are asynchronous in the :mod:`concurrent.futures` sense: every
operation returns a :class:`~concurrent.futures.Future` that is resolved
exactly once, either with the loaded images or with a
:class:`~imagefeed.exceptions.FeedError` set as its exception.  Callers
that prefer callbacks use ``future.add_done_callback``; asyncio callers can
wrap the future with :func:`asyncio.wrap_future`.

Loaders only keep a weak reference to themselves in pending callbacks.
When a loader is released while an operation is still in flight, the late
completion is dropped and the returned future is never resolved.  Callers
must therefore keep the loader referenced until its future resolves::

    loader = RemoteFeedLoader(url, client)
    images = loader.load().result()

rather than ``RemoteFeedLoader(url, client).load().result()``, which
releases the loader as soon as ``load()`` returns.
"""

from __future__ import annotations

import abc
import logging
import weakref
from concurrent.futures import Future
from typing import Any, Callable, TypeVar

from imagefeed.models import FeedImage

logger = logging.getLogger(__name__)

T = TypeVar("T")
L = TypeVar("L")


class FeedLoader(abc.ABC):
    """Something that can load a list of :class:`~imagefeed.models.FeedImage`.

    Keep a reference to the loader while a returned future is pending; a
    loader that is garbage-collected drops its late completions.
    """

    @abc.abstractmethod
    def load(self) -> Future[list[FeedImage]]:
        """Start loading the feed and return a future for the result."""


def resolve(future: Future[T], result: Any = None, error: BaseException | None = None) -> None:
    """Deliver *result* (or *error*) to *future* unless the caller cancelled it."""
    if not future.set_running_or_notify_cancel():
        return
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(result)


def bind_weak(
    owner: L, callback: Callable[[L, Future[Any]], None]
) -> Callable[[Future[Any]], None]:
    """Wrap *callback* so it only runs while *owner* is still alive.

    The returned function is suitable for ``Future.add_done_callback``.  It
    holds *owner* through a :func:`weakref.ref`; once the owner has been
    garbage-collected the completion is silently dropped.
    """
    owner_ref = weakref.ref(owner)

    def _on_done(done: Future[Any]) -> None:
        alive = owner_ref()
        if alive is None:
            logger.debug("Dropping completion for released %s", callback.__qualname__)
            return
        callback(alive, done)

    return _on_done
