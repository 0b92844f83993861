"""Shared fixtures for blobstore tests.

S3 tests run against moto's in-process S3 implementation, so no MinIO or
LocalStack container is needed.
"""

from pathlib import Path
from typing import Generator

import boto3
import pytest
from moto import mock_aws

from blobstore.storage.local_storage import LocalStorage
from blobstore.storage.s3_storage import S3Storage

TEST_BUCKET = "test-bucket"
TEST_REGION = "us-east-1"


@pytest.fixture
def aws_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    """Point boto3 at fake credentials so nothing can reach real AWS."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)


@pytest.fixture
def s3_client(aws_credentials: None) -> Generator:
    """Create a mocked S3 client with an empty test bucket.

    Yields:
        Boto3 S3 client bound to the moto backend
    """
    with mock_aws():
        client = boto3.client("s3", region_name=TEST_REGION)
        client.create_bucket(Bucket=TEST_BUCKET)
        yield client


@pytest.fixture
def s3_storage(s3_client) -> S3Storage:
    """Create S3Storage over the mocked bucket with no prefix."""
    return S3Storage(TEST_BUCKET, "", s3_client)


@pytest.fixture
def local_root(tmp_path: Path) -> Path:
    """Create an empty root directory for LocalStorage."""
    root = tmp_path / "test"
    root.mkdir()
    return root


@pytest.fixture
def local_storage(local_root: Path) -> LocalStorage:
    """Create LocalStorage rooted at an empty temporary directory."""
    return LocalStorage(str(local_root))
