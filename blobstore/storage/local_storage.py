"""Local filesystem storage driver.

Keys map to files directly inside a root directory. The key is joined onto
the root as a single path segment; no subdirectories are ever created, so
callers must pass keys that are safe file names.
"""

import io
import logging
import os
import stat
from typing import BinaryIO, List, Optional

from blobstore.core.errors import KeyNotFoundError, StorageIOError

logger = logging.getLogger(__name__)

DEFAULT_PERMISSIONS = 0o644


class LocalStorage:
    """Storage driver backed by a directory on the local filesystem.

    Attributes:
        path: Root directory holding one file per key
        permissions: Mode for newly created files, or None for 0o644
    """

    def __init__(self, path: str, permissions: Optional[int] = None) -> None:
        """Initialize LocalStorage.

        The root directory is not created; operations fail until it exists.

        Args:
            path: Root directory of the store
            permissions: Optional file mode applied when a file is created
        """
        self._path = os.fspath(path)
        self._permissions = permissions
        logger.info(f"Local storage rooted at {self._path}")

    @property
    def path(self) -> str:
        return self._path

    @property
    def permissions(self) -> Optional[int]:
        return self._permissions

    def _full_path(self, key: str) -> str:
        return os.path.join(self._path, key)

    def _file_permissions(self) -> int:
        if self._permissions is not None:
            return self._permissions
        return DEFAULT_PERMISSIONS

    def read(self, key: str) -> BinaryIO:
        """Read the file stored under key.

        Args:
            key: File name inside the root directory

        Returns:
            Buffered file contents

        Raises:
            KeyNotFoundError: If the file does not exist
            StorageIOError: If the path is a directory or cannot be read
        """
        path = self._full_path(key)
        try:
            with open(path, "rb") as f:
                data = f.read()
        except FileNotFoundError as e:
            raise KeyNotFoundError(f"{e.strerror}: {path}", key=key, path=path) from e
        except OSError as e:
            raise StorageIOError(f"{e.strerror or e}: {path}", key=key, path=path) from e

        logger.debug(f"Read {len(data)} bytes from {path}")
        return io.BytesIO(data)

    def write(self, key: str, value: BinaryIO) -> None:
        """Write value to the file for key, truncating any existing content.

        The whole stream is read into memory first. The write is not atomic:
        a crash midway can leave a partially written file behind.

        Args:
            key: File name inside the root directory
            value: Readable binary stream

        Raises:
            StorageIOError: If the stream or the file cannot be read/written
        """
        path = self._full_path(key)
        try:
            data = value.read()
        except (OSError, ValueError) as e:
            raise StorageIOError(f"unable to read input for {key!r}: {e}", key=key, path=path) from e

        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, self._file_permissions())
            with os.fdopen(fd, "wb") as f:
                f.write(data)
        except OSError as e:
            raise StorageIOError(f"{e.strerror or e}: {path}", key=key, path=path) from e

        logger.debug(f"Wrote {len(data)} bytes to {path}")

    def delete(self, key: str) -> None:
        """Remove the file for key.

        Raises:
            KeyNotFoundError: If the file (or the root directory) is missing
            StorageIOError: If the file cannot be removed
        """
        path = self._full_path(key)
        try:
            os.remove(path)
        except FileNotFoundError as e:
            raise KeyNotFoundError(f"{e.strerror}: {path}", key=key, path=path) from e
        except OSError as e:
            raise StorageIOError(f"{e.strerror or e}: {path}", key=key, path=path) from e

        logger.debug(f"Deleted {path}")

    def exists(self, key: str) -> bool:
        """Check whether a regular blob is stored under key.

        A missing path raises rather than returning False. A directory is
        never a blob and reports False.

        Raises:
            KeyNotFoundError: If the path (or the root directory) is missing
            StorageIOError: If the path cannot be statted
        """
        path = self._full_path(key)
        try:
            st = os.stat(path)
        except FileNotFoundError as e:
            raise KeyNotFoundError(f"{e.strerror}: {path}", key=key, path=path) from e
        except OSError as e:
            raise StorageIOError(f"{e.strerror or e}: {path}", key=key, path=path) from e

        return not stat.S_ISDIR(st.st_mode)

    def list(self) -> List[str]:
        """List file names directly inside the root directory.

        Subdirectories are skipped. Names are sorted.

        Raises:
            StorageIOError: If the root directory cannot be read
        """
        try:
            with os.scandir(self._path) as entries:
                names = [entry.name for entry in entries if not entry.is_dir(follow_symlinks=False)]
        except OSError as e:
            raise StorageIOError(f"{e.strerror or e}: {self._path}", path=self._path) from e

        return sorted(names)
