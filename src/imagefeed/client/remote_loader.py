"""Load the feed from the remote API.

:class:`RemoteFeedLoader` sends exactly one GET per :meth:`~RemoteFeedLoader.load`
and maps the outcome:

- transport failure -> :class:`~imagefeed.exceptions.ConnectivityError`
- response -> :func:`~imagefeed.client.mapper.map_feed_items`, whose images or
  :class:`~imagefeed.exceptions.InvalidDataError` are delivered unchanged.

Concurrent loads are independent requests.  As with the local loader, a
response that arrives after the loader has been released is dropped.
"""

from __future__ import annotations

from concurrent.futures import Future

import httpx

from imagefeed.client.http_client import HTTPClient
from imagefeed.client.mapper import map_feed_items
from imagefeed.exceptions import ConnectivityError, InvalidDataError
from imagefeed.loader import FeedLoader, bind_weak, resolve
from imagefeed.models import FeedImage


class RemoteFeedLoader(FeedLoader):
    """Feed loader that fetches ``url`` through an :class:`HTTPClient`.

    Args:
        url: Endpoint serving the ``{"items": [...]}`` payload.
        client: Transport used for the request.
    """

    def __init__(self, url: str, client: HTTPClient) -> None:
        self._url = url
        self._client = client

    @property
    def url(self) -> str:
        return self._url

    def load(self) -> Future[list[FeedImage]]:
        completion: Future[list[FeedImage]] = Future()

        def on_response(loader: RemoteFeedLoader, request: Future[httpx.Response]) -> None:
            transport_error = request.exception()
            if transport_error is not None:
                error = ConnectivityError(f"GET {loader._url} failed: {transport_error}")
                error.__cause__ = transport_error
                resolve(completion, error=error)
                return
            response = request.result()
            try:
                images = map_feed_items(response.status_code, response.content)
            except InvalidDataError as exc:
                resolve(completion, error=exc)
            else:
                resolve(completion, images)

        self._client.get(self._url).add_done_callback(bind_weak(self, on_response))
        return completion
