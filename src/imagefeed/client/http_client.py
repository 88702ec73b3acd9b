"""HTTP client interface and its :mod:`httpx` implementation.

:class:`HTTPClient` is the single seam between the remote feed loader and
the network: one ``get(url)`` that returns a
:class:`~concurrent.futures.Future` of an :class:`httpx.Response`.  A
transport failure is the future's exception; every HTTP status, error
statuses included, is a successful response.  Interpreting the status is
the job of :func:`~imagefeed.client.mapper.map_feed_items`.

:class:`HttpxHTTPClient` runs each GET on a small thread pool around a
shared :class:`httpx.Client`.
"""

from __future__ import annotations

import abc
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

import httpx

from imagefeed.models import RequestConfig

logger = logging.getLogger(__name__)


class HTTPClient(abc.ABC):
    """Asynchronous GET-only HTTP client."""

    @abc.abstractmethod
    def get(self, url: str) -> Future[httpx.Response]:
        """Send a GET request to *url* and return a future for the response."""


class HttpxHTTPClient(HTTPClient):
    """:class:`HTTPClient` backed by :class:`httpx.Client`.

    Can be used as a context manager; :meth:`close` releases both the
    worker threads and the underlying connection pool.

    Args:
        config: Timeout and SSL settings.
        transport: Optional custom transport (e.g. :class:`httpx.MockTransport`
            in tests).
        max_workers: Number of requests that may be in flight at once.

    Example::

        with HttpxHTTPClient(RequestConfig(timeout=10)) as client:
            response = client.get("https://example.com/feed").result()
    """

    def __init__(
        self,
        config: Optional[RequestConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
        max_workers: int = 4,
    ) -> None:
        config = config or RequestConfig()
        self._client: Optional[httpx.Client] = httpx.Client(
            timeout=config.timeout,
            verify=config.verify_ssl,
            follow_redirects=True,
            transport=transport,
        )
        self._executor: Optional[ThreadPoolExecutor] = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="feed-http"
        )

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> HttpxHTTPClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Wait for in-flight requests, then close the connection pool."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        if self._client is not None:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # HTTPClient
    # ------------------------------------------------------------------ #

    def get(self, url: str) -> Future[httpx.Response]:
        """Send a GET request on a worker thread.

        Raises:
            RuntimeError: If the client has been closed.
        """
        if self._executor is None or self._client is None:
            raise RuntimeError("Cannot send requests on a closed HttpxHTTPClient")
        logger.debug("GET %s", url)
        return self._executor.submit(self._client.get, url)
