"""Map a remote feed HTTP response to domain images.

The remote endpoint answers with::

    {"items": [{"id": "<uuid>", "description": "...", "location": "...", "image": "<url>"}]}

Only a ``200`` status with a body of that shape is accepted.  Every other
status, and any body that fails to decode (including a 200 with a
malformed body), is reported as :class:`~imagefeed.exceptions.InvalidDataError`.
"""

from __future__ import annotations

from pydantic import BaseModel, ValidationError

from imagefeed.exceptions import InvalidDataError
from imagefeed.models import FeedImage, RemoteFeedItem

OK_200 = 200


class _Root(BaseModel):
    items: list[RemoteFeedItem]


def map_feed_items(status_code: int, body: bytes) -> list[FeedImage]:
    """Decode a feed response into :class:`~imagefeed.models.FeedImage` values.

    Args:
        status_code: HTTP status of the response.
        body: Raw response body.

    Returns:
        The mapped images, in payload order.  An empty ``items`` array gives
        an empty list.

    Raises:
        InvalidDataError: On any status other than 200, or an undecodable body.
    """
    if status_code != OK_200:
        raise InvalidDataError(f"Unexpected HTTP status {status_code}")
    try:
        root = _Root.model_validate_json(body)
    except ValidationError as exc:
        raise InvalidDataError(f"Malformed feed payload: {exc.error_count()} error(s)") from exc
    return [item.to_model() for item in root.items]
