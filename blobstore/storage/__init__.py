"""Storage package for local and S3-compatible blob storage.

This package provides the Driver protocol and its two implementations,
plus a factory that builds the configured one from settings.
"""

from blobstore.storage.driver import Driver
from blobstore.storage.factory import make_storage
from blobstore.storage.local_storage import LocalStorage
from blobstore.storage.s3_storage import S3Storage

__all__ = ["Driver", "LocalStorage", "S3Storage", "make_storage"]
