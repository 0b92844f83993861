"""Tests for content type sniffing."""

import io

import pytest

from blobstore.core.errors import MimeTypeError
from blobstore.utils.mimetype import HEADER_SIZE, detect_mime_type

from tests.test_s3_storage import PNG_DATA


class _BrokenStream(io.RawIOBase):
    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        raise OSError("device not ready")


class TestDetectMimeType:
    """Test detect_mime_type results for common inputs."""

    def test_plain_text(self) -> None:
        assert detect_mime_type(io.BytesIO(b"hello, world")) == "text/plain; charset=utf-8"

    def test_empty_input_is_plain_text(self) -> None:
        """Empty content gets the no-content default rather than an error."""
        assert detect_mime_type(io.BytesIO(b"")) == "text/plain"

    def test_png_signature(self) -> None:
        assert detect_mime_type(io.BytesIO(PNG_DATA)) == "image/png"

    def test_pdf_signature(self) -> None:
        assert detect_mime_type(io.BytesIO(b"%PDF-1.7\n%\xe2\xe3\xcf\xd3\n")) == "application/pdf"

    def test_unrecognised_binary(self) -> None:
        assert detect_mime_type(io.BytesIO(b"\x00\xff\x10\x80garbage")) == "application/octet-stream"

    def test_invalid_utf8_is_binary(self) -> None:
        assert detect_mime_type(io.BytesIO(b"abc\xff\xfe")) == "application/octet-stream"

    def test_multibyte_character_cut_at_header_boundary(self) -> None:
        """A UTF-8 sequence split by the header limit is still text."""
        data = b"a" * (HEADER_SIZE - 1) + "é".encode("utf-8")

        assert detect_mime_type(io.BytesIO(data)) == "text/plain; charset=utf-8"

    def test_only_header_is_consumed(self) -> None:
        stream = io.BytesIO(b"a" * (HEADER_SIZE * 2))

        detect_mime_type(stream)

        assert stream.tell() == HEADER_SIZE

    def test_unreadable_stream_raises(self) -> None:
        with pytest.raises(MimeTypeError) as exc_info:
            detect_mime_type(_BrokenStream())

        assert "unable to detect MimeType" in str(exc_info.value)
