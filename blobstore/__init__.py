"""Key-addressed blob storage over a local directory or an S3 bucket.

Both backends implement the Driver protocol, so callers can swap them
without code changes:

    from blobstore import LocalStorage

    store = LocalStorage("/var/lib/blobs")
    with open("report.pdf", "rb") as f:
        store.write("report.pdf", f)
"""

from blobstore.core.config import S3Config, StorageSettings
from blobstore.core.errors import KeyNotFoundError, MimeTypeError, StorageError, StorageIOError
from blobstore.storage import Driver, LocalStorage, S3Storage, make_storage

__all__ = [
    "Driver",
    "KeyNotFoundError",
    "LocalStorage",
    "MimeTypeError",
    "S3Config",
    "S3Storage",
    "StorageError",
    "StorageIOError",
    "StorageSettings",
    "make_storage",
]
