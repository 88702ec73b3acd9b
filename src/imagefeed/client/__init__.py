"""Remote feed loading for imagefeed.

Classes and functions:
    :class:`HTTPClient` -- the GET-only transport interface.
    :class:`HttpxHTTPClient` -- the :mod:`httpx` implementation.
    :func:`map_feed_items` -- status + body to :class:`~imagefeed.models.FeedImage` list.
    :class:`RemoteFeedLoader` -- one request per ``load()``.

Example::

    from imagefeed.client import HttpxHTTPClient, RemoteFeedLoader

    with HttpxHTTPClient() as client:
        loader = RemoteFeedLoader("https://example.com/feed", client)
        images = loader.load().result()
"""

from imagefeed.client.http_client import HTTPClient, HttpxHTTPClient
from imagefeed.client.mapper import map_feed_items
from imagefeed.client.remote_loader import RemoteFeedLoader

__all__ = ["HTTPClient", "HttpxHTTPClient", "RemoteFeedLoader", "map_feed_items"]
