"""zlib compression with an 8-byte little-endian original-size header."""

from __future__ import annotations

import zlib
from typing import Union

from cpframe.debug import log_error, log_warn

HEADER_SIZE = 8
DEFAULT_LEVEL = 1
DEFAULT_MAX_ALLOWED_SIZE = 4 * 1024 * 1024 * 1024

BytesLike = Union[bytes, bytearray, memoryview]


class CompressionError(ValueError):
    """Raised when data cannot be compressed or decompressed."""


def _fail(message: str) -> CompressionError:
    log_error(message)
    return CompressionError(message)


def compress_data(data: BytesLike, level: int = DEFAULT_LEVEL) -> bytes:
    """Compress ``data`` and prefix it with its original size; empty input gives b''."""
    payload = bytes(data)
    if not payload:
        log_warn("Invalid vector size")
        return b""
    if not 0 <= level <= 9:
        log_warn("Invalid compression level: {}. Using Z_BEST_SPEED.", level)
        level = DEFAULT_LEVEL
    try:
        body = zlib.compress(payload, level)
    except zlib.error as exc:
        raise _fail(f"zlib compression failed: {exc}") from exc
    return len(payload).to_bytes(HEADER_SIZE, "little") + body


def uncompress_data(compressed: BytesLike,
                    max_allowed_size: int = DEFAULT_MAX_ALLOWED_SIZE) -> bytes:
    """Decompress data produced by compress_data()."""
    blob = bytes(compressed)
    if len(blob) < HEADER_SIZE:
        raise _fail("Invalid header size")

    original_size = int.from_bytes(blob[:HEADER_SIZE], "little")
    if original_size == 0 or original_size > max_allowed_size:
        raise _fail(f"Invalid original size: {original_size}")

    decompressor = zlib.decompressobj()
    try:
        result = decompressor.decompress(blob[HEADER_SIZE:], original_size)
    except zlib.error as exc:
        raise _fail(f"Failed to uncompress data: {exc}") from exc
    if not decompressor.eof:
        raise _fail("Failed to uncompress data: buffer error")

    # The output buffer has the declared size even when the stream is shorter.
    return result.ljust(original_size, b"\x00")