"""Canonical Pydantic models shared across all imagefeed modules.

The models fall into two groups:

**Feed models** -- immutable values passed between loaders, stores and
mappers:
    :class:`FeedImage` (the domain record), :class:`LocalFeedImage` (the
    persistence-layer record), :class:`CachedFeed` (one stored snapshot), and
    :class:`RemoteFeedItem` (the wire record decoded from the remote API).

**Configuration models** -- serialised as JSON in the user's config
directory:
    :class:`RequestConfig`, :class:`CacheConfig`, and :class:`FeedConfig`.

``LocalFeedImage`` deliberately duplicates ``FeedImage`` so the storage
schema can change without touching the domain type.  :func:`to_local` and
:func:`to_models` convert between the two field for field.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Iterable, Optional
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, field_validator


# --- Feed models ---


class FeedImage(BaseModel):
    """A single image in the feed, as seen by the rest of the application.

    ``url`` must be absolute (it carries a scheme); relative references are
    rejected.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    description: Optional[str] = None
    location: Optional[str] = None
    url: AnyUrl


class LocalFeedImage(BaseModel):
    """Persistence-layer representation of a :class:`FeedImage`."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    description: Optional[str] = None
    location: Optional[str] = None
    url: AnyUrl


class CachedFeed(BaseModel):
    """The single snapshot a feed store holds: an ordered feed and when it was saved.

    The feed keeps the order it was inserted in.  A store holds at most one
    ``CachedFeed``; inserting a new one replaces the previous snapshot.
    """

    model_config = ConfigDict(frozen=True)

    feed: tuple[LocalFeedImage, ...] = ()
    timestamp: datetime


class RemoteFeedItem(BaseModel):
    """One entry of the remote ``items`` array.

    Unknown keys in the payload are ignored.  ``image`` is renamed to
    ``url`` when mapped to :class:`FeedImage`.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    description: Optional[str] = None
    location: Optional[str] = None
    image: AnyUrl

    def to_model(self) -> FeedImage:
        return FeedImage(
            id=self.id,
            description=self.description,
            location=self.location,
            url=self.image,
        )


def to_local(images: Iterable[FeedImage]) -> list[LocalFeedImage]:
    """Map domain images to their local (persisted) representation."""
    return [
        LocalFeedImage(
            id=image.id,
            description=image.description,
            location=image.location,
            url=image.url,
        )
        for image in images
    ]


def to_models(images: Iterable[LocalFeedImage]) -> list[FeedImage]:
    """Map local (persisted) images back to domain images."""
    return [
        FeedImage(
            id=image.id,
            description=image.description,
            location=image.location,
            url=image.url,
        )
        for image in images
    ]


# --- Configuration models ---


class RequestConfig(BaseModel):
    """HTTP settings applied to every request the remote client sends."""

    timeout: float = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class CacheConfig(BaseModel):
    """Local cache settings: where the snapshot lives and how long it stays valid."""

    store_path: Optional[str] = Field(
        default=None,
        description="Path of the snapshot file (defaults to the user cache dir)",
    )
    max_age_days: int = Field(
        default=7, ge=1, description="Calendar days a snapshot stays valid"
    )
    timezone: str = Field(
        default="UTC",
        description="IANA time zone used for calendar-day arithmetic",
    )

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        if value == "UTC":
            return value
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone: {value!r}") from exc
        return value

    @property
    def tzinfo(self) -> tzinfo:
        """The configured zone as a :class:`~datetime.tzinfo`."""
        if self.timezone == "UTC":
            return timezone.utc
        return ZoneInfo(self.timezone)


class FeedConfig(BaseModel):
    """Top-level configuration persisted at ``~/.config/imagefeed/config.json``.

    Loaded and saved by :func:`~imagefeed.config.load_config` and
    :func:`~imagefeed.config.save_config`.
    """

    feed_url: Optional[str] = Field(
        default=None, description="Endpoint serving the remote feed"
    )
    request: RequestConfig = Field(default_factory=RequestConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
