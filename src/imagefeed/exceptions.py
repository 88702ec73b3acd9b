"""Exception hierarchy for imagefeed.

All exceptions inherit from :class:`FeedError`.  Loaders and stores never
raise these into the caller's stack: they are set as the exception of the
:class:`~concurrent.futures.Future` returned by the operation, so a failure
is a value the caller inspects with ``future.exception()`` or observes by
calling ``future.result()``.

Subclass hierarchy::

    FeedError
    +-- ConnectivityError
    +-- InvalidDataError
    +-- StoreError
    |   +-- StoreRetrievalError
    |   +-- StoreWriteError
    |   +-- StoreDeleteError
    +-- ConfigError
"""


class FeedError(Exception):
    """Base exception for all imagefeed errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__doc__)


class ConnectivityError(FeedError):
    """The HTTP transport failed before a response was received."""


class InvalidDataError(FeedError):
    """The remote response had a non-200 status or an undecodable body."""


class StoreError(FeedError):
    """Base class for feed store failures."""


class StoreRetrievalError(StoreError):
    """The persisted snapshot could not be decoded."""


class StoreWriteError(StoreError):
    """The snapshot could not be written to the store location."""


class StoreDeleteError(StoreError):
    """An existing snapshot could not be removed."""


class ConfigError(FeedError):
    """Raised for configuration problems (unreadable file, invalid JSON, bad fields)."""
