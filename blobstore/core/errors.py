"""Exceptions raised by blobstore drivers.

Every driver failure is wrapped in one of these types, carrying the key
and/or filesystem path involved. The originating exception is chained
with ``raise ... from`` so the cause stays available to callers.
"""

from typing import Optional


class StorageError(RuntimeError):
    """Base class for all storage errors.

    Attributes:
        key: Key the failing operation addressed, if any
        path: Local path or bucket location involved, if any
    """

    def __init__(
        self,
        message: str,
        *,
        key: Optional[str] = None,
        path: Optional[str] = None,
    ) -> None:
        self.key = key
        self.path = path
        super().__init__(message)


class KeyNotFoundError(StorageError):
    """No blob is stored under the requested key."""
    pass


class StorageIOError(StorageError):
    """Disk I/O failure or remote transport/provider failure."""
    pass


class MimeTypeError(StorageError):
    """Content type detection could not process the input stream."""
    pass
