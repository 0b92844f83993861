"""Factory for creating storage drivers from settings."""

import logging
from typing import Optional

from blobstore.core.config import StorageSettings
from blobstore.storage.driver import Driver
from blobstore.storage.local_storage import LocalStorage
from blobstore.storage.s3_storage import S3Storage

logger = logging.getLogger(__name__)


def make_storage(settings: Optional[StorageSettings] = None) -> Driver:
    """
    Create the storage driver selected by settings.

    Args:
        settings: Storage settings; loaded from the environment when omitted

    Returns:
        LocalStorage or S3Storage

    Raises:
        ValueError: If the backend is not supported
    """
    if settings is None:
        settings = StorageSettings()

    logger.debug(f"Creating {settings.backend} storage driver")

    if settings.backend == "local":
        return LocalStorage(settings.local_path, settings.local_permissions)

    elif settings.backend == "s3":
        return S3Storage.from_config(settings.to_s3_config())

    else:
        raise ValueError(f"Unsupported storage backend: {settings.backend}")
