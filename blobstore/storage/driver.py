"""Storage contract shared by all blobstore backends.

Callers depend on this protocol only, never on a concrete backend, so a
local directory and an S3 bucket can be swapped without code changes.
"""

from typing import BinaryIO, List, Protocol, runtime_checkable


@runtime_checkable
class Driver(Protocol):
    """Protocol for key-addressed blob storage backends."""

    def read(self, key: str) -> BinaryIO:
        """Return the full contents stored under key.

        Raises:
            KeyNotFoundError: If no blob is stored under key
            StorageIOError: If the read fails for any other reason
        """
        ...

    def write(self, key: str, value: BinaryIO) -> None:
        """Store the contents of value under key, replacing any existing blob."""
        ...

    def delete(self, key: str) -> None:
        """Remove the blob stored under key."""
        ...

    def exists(self, key: str) -> bool:
        """Report whether a blob is stored under key.

        Raises instead of returning False when the check itself cannot be
        performed.
        """
        ...

    def list(self) -> List[str]:
        """Return all keys known to the store."""
        ...
