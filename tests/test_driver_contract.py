"""Behavior shared by every storage driver.

Each test runs once per backend through the Driver protocol only, the
way host applications use the stores. Backend-specific differences are
covered by the per-driver test modules.
"""

import io

import pytest

from blobstore.core.errors import KeyNotFoundError, StorageIOError
from blobstore.storage.driver import Driver


@pytest.fixture(params=["local", "s3"])
def driver(request) -> Driver:
    """Yield each backend in turn, typed as the protocol."""
    return request.getfixturevalue(f"{request.param}_storage")


@pytest.mark.parametrize(
    "key, value",
    [
        ("test.txt", b"test123"),
        ("image.bin", bytes(range(256))),
        ("unicode.txt", "grüße, мир".encode("utf-8")),
    ],
)
def test_round_trip(driver: Driver, key: str, value: bytes):
    driver.write(key, io.BytesIO(value))
    assert driver.read(key).read() == value


def test_overwrite(driver: Driver):
    driver.write("test.txt", io.BytesIO(b"v1-longer"))
    driver.write("test.txt", io.BytesIO(b"v2"))

    assert driver.read("test.txt").read() == b"v2"


def test_write_exists_list_delete(driver: Driver):
    driver.write("test.txt", io.BytesIO(b"test"))

    assert driver.exists("test.txt") is True
    assert driver.list() == ["test.txt"]

    driver.delete("test.txt")

    with pytest.raises(KeyNotFoundError):
        driver.read("test.txt")
    assert driver.list() == []


def test_empty_store_lists_nothing(driver: Driver):
    assert driver.list() == []


def test_missing_key_exists_raises(driver: Driver):
    with pytest.raises(KeyNotFoundError):
        driver.exists("missing.txt")


def test_read_returns_stream(driver: Driver):
    driver.write("test.txt", io.BytesIO(b"test123"))

    stream = driver.read("test.txt")

    assert stream.read(4) == b"test"
    assert stream.read() == b"123"


def test_write_closed_stream_raises_io_error(driver: Driver):
    stream = io.BytesIO(b"test123")
    stream.close()

    with pytest.raises(StorageIOError):
        driver.write("test.txt", stream)
