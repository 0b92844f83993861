"""Content type sniffing for uploaded blobs.

Detection is delegated to the ``filetype`` library, which matches magic
number signatures. Content it does not recognise is classified as UTF-8
text or generic binary, and empty content is plain text.
"""

import codecs
from typing import BinaryIO

import filetype
from loguru import logger

from blobstore.core.errors import MimeTypeError

# Bytes inspected for a signature; filetype never looks further than this.
HEADER_SIZE = 8192

EMPTY_MIME_TYPE = "text/plain"
TEXT_MIME_TYPE = "text/plain; charset=utf-8"
BINARY_MIME_TYPE = "application/octet-stream"


def _looks_like_text(header: bytes) -> bool:
    if b"\x00" in header:
        return False
    # final=False tolerates a multi-byte character cut off at HEADER_SIZE
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        decoder.decode(header, final=False)
    except UnicodeDecodeError:
        return False
    return True


def detect_mime_type(stream: BinaryIO) -> str:
    """Return the MIME type of the content in stream.

    Only the first HEADER_SIZE bytes are consumed.

    Args:
        stream: Readable binary stream

    Returns:
        MIME type string, e.g. "image/png" or "text/plain; charset=utf-8"

    Raises:
        MimeTypeError: If the stream cannot be read
    """
    try:
        header = stream.read(HEADER_SIZE)
    except (OSError, ValueError) as e:
        raise MimeTypeError(f"unable to detect MimeType: {e}") from e

    if not header:
        return EMPTY_MIME_TYPE

    mime = filetype.guess_mime(header)
    if mime is not None:
        return mime

    if _looks_like_text(header):
        logger.debug("No signature matched, treating content as UTF-8 text")
        return TEXT_MIME_TYPE

    logger.debug("No signature matched, treating content as binary")
    return BINARY_MIME_TYPE
