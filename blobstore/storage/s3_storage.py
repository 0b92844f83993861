"""S3-compatible object storage driver.

This module provides an S3Storage class that implements the storage
contract on top of boto3. It works with any S3-compatible service
including MinIO, LocalStack and AWS S3.

Key mapping:
- Keys are used verbatim as object keys inside the bucket
- The configured path prefix only scopes list(); point operations
  (read, write, delete, exists) never apply it
"""

import io
import logging
from typing import BinaryIO, List, Optional

import boto3
from botocore.client import BaseClient
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from blobstore.core.config import S3Config
from blobstore.core.errors import KeyNotFoundError, StorageIOError
from blobstore.utils.mimetype import detect_mime_type

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


class S3Storage:
    """Storage driver backed by an S3 bucket.

    The client (and session, when built from config) is created once and
    reused for the lifetime of the store.

    Attributes:
        bucket: Name of the S3 bucket
        path_prefix: Prefix scoping list()
        client: Boto3 S3 client instance
        session: Boto3 session the client came from, if known
    """

    def __init__(
        self,
        bucket: str,
        path_prefix: str,
        client: BaseClient,
        session: Optional[boto3.session.Session] = None,
    ) -> None:
        """Initialize S3Storage around an existing client.

        Use this to inject credentials or share one client between stores.

        Args:
            bucket: Bucket name
            path_prefix: Prefix scoping list(); "" lists the whole bucket
            client: Boto3 S3 client
            session: Optional boto3 session that created client
        """
        self.bucket = bucket
        self.path_prefix = path_prefix
        self.client = client
        self.session = session

    @classmethod
    def from_config(cls, config: S3Config) -> "S3Storage":
        """Create S3Storage with a new session and client built from config.

        Uses static credentials, path-style addressing and SigV4 so that
        MinIO and other S3-compatible services work without DNS buckets.

        Args:
            config: S3 connection settings

        Returns:
            S3Storage bound to config.bucket

        Raises:
            StorageIOError: If the session or client cannot be created
        """
        try:
            session = boto3.session.Session(
                aws_access_key_id=config.access_key_id,
                aws_secret_access_key=config.secret_access_key,
                region_name=config.region,
            )
            client = session.client(
                "s3",
                endpoint_url=config.endpoint_url(),
                use_ssl=not config.disable_ssl,
                config=Config(signature_version="s3v4", s3={"addressing_style": "path"}),
            )
        except (BotoCoreError, ValueError) as e:
            raise StorageIOError(f"unable to create s3 session by config: {e}") from e

        logger.info(
            f"S3 storage for bucket {config.bucket} at {config.endpoint_url() or 'AWS'} "
            f"({config.region})"
        )
        return cls(config.bucket, config.path_prefix, client, session)

    def _location(self, key: str) -> str:
        return f"s3://{self.bucket}/{key}"

    def read(self, key: str) -> BinaryIO:
        """Download the object stored under key.

        The body is fully buffered before returning.

        Args:
            key: Object key

        Returns:
            Buffered object contents

        Raises:
            KeyNotFoundError: If the object does not exist
            StorageIOError: If the download fails
        """
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                raise KeyNotFoundError(
                    f"unable to read object {key!r}: {e}", key=key, path=self._location(key)
                ) from e
            raise StorageIOError(
                f"unable to read object {key!r}: {e}", key=key, path=self._location(key)
            ) from e
        except BotoCoreError as e:
            raise StorageIOError(
                f"unable to read object {key!r}: {e}", key=key, path=self._location(key)
            ) from e

        body = response["Body"]
        try:
            data = body.read()
        except (BotoCoreError, OSError) as e:
            raise StorageIOError(
                f"unable to read bytes from object {key!r}: {e}", key=key, path=self._location(key)
            ) from e
        finally:
            body.close()

        logger.debug(f"Read {len(data)} bytes from {self._location(key)}")
        return io.BytesIO(data)

    def write(self, key: str, value: BinaryIO) -> None:
        """Upload value under key with its sniffed content type.

        The stream is fully read, its MIME type detected, and the content
        uploaded through boto3's managed transfer, which picks single-part
        or multipart on its own. No retry is attempted here. Sniffing runs on
        the buffered copy, so an unreadable input is reported as StorageIOError.

        Args:
            key: Object key
            value: Readable binary stream

        Raises:
            StorageIOError: If the input cannot be read or the upload fails
        """
        try:
            data = value.read()
        except (OSError, ValueError) as e:
            raise StorageIOError(
                f"unable to read input for {key!r}: {e}", key=key, path=self._location(key)
            ) from e

        content_type = detect_mime_type(io.BytesIO(data))

        try:
            self.client.upload_fileobj(
                io.BytesIO(data),
                self.bucket,
                key,
                ExtraArgs={"ContentType": content_type},
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageIOError(
                f"unable to upload {key!r}: {e}", key=key, path=self._location(key)
            ) from e

        logger.debug(f"Uploaded {len(data)} bytes to {self._location(key)} as {content_type}")

    def delete(self, key: str) -> None:
        """Delete the object stored under key.

        S3 deletes are idempotent: deleting a missing object succeeds.

        Raises:
            StorageIOError: If the delete request fails
        """
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise StorageIOError(
                f"unable to delete object {key!r}: {e}", key=key, path=self._location(key)
            ) from e

        logger.debug(f"Deleted {self._location(key)}")

    def exists(self, key: str) -> bool:
        """Check whether a non-empty object is stored under key.

        Issues a HEAD request, so no body is transferred. Existence is
        judged by content length: a zero-length object reports False.

        Raises:
            KeyNotFoundError: If the object does not exist
            StorageIOError: If the HEAD request fails
        """
        try:
            response = self.client.head_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                raise KeyNotFoundError(
                    f"unable to check if object {key!r} exists: {e}",
                    key=key,
                    path=self._location(key),
                ) from e
            raise StorageIOError(
                f"unable to check if object {key!r} exists: {e}", key=key, path=self._location(key)
            ) from e
        except BotoCoreError as e:
            raise StorageIOError(
                f"unable to check if object {key!r} exists: {e}", key=key, path=self._location(key)
            ) from e

        return response.get("ContentLength", 0) > 0

    def list(self) -> List[str]:
        """List object keys under the configured prefix.

        Only the first page of results is returned (at most 1000 keys on
        AWS); continuation tokens are not followed.

        Raises:
            StorageIOError: If the list request fails
        """
        try:
            response = self.client.list_objects_v2(Bucket=self.bucket, Prefix=self.path_prefix)
        except (BotoCoreError, ClientError) as e:
            raise StorageIOError(
                f"unable to list objects: {e}", path=f"s3://{self.bucket}/{self.path_prefix}"
            ) from e

        return [obj["Key"] for obj in response.get("Contents", [])]
