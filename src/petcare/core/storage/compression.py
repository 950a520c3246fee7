"""
Compression utilities for storage backends.

Snapshots are JSON documents, optionally gzip-compressed. Decoding sniffs the
gzip magic number so a store can switch compression on or off without
migrating existing files.
"""

import gzip
import json
from enum import Enum
from io import BytesIO
from typing import Any

_GZIP_MAGIC = b"\x1f\x8b"


class CompressionType(Enum):
    """Supported compression types."""

    NONE = "none"
    GZIP = "gzip"


def compress_bytes(data: bytes, compression: CompressionType = CompressionType.GZIP) -> bytes:
    """Compress binary data."""
    if compression == CompressionType.NONE:
        return data
    if compression == CompressionType.GZIP:
        buffer = BytesIO()
        # mtime=0 keeps output deterministic for identical input
        with gzip.GzipFile(fileobj=buffer, mode="wb", compresslevel=6, mtime=0) as gz:
            gz.write(data)
        return buffer.getvalue()
    raise ValueError(f"Unsupported compression type: {compression}")


def decompress_bytes(data: bytes, compression: CompressionType = CompressionType.GZIP) -> bytes:
    """Decompress binary data."""
    if compression == CompressionType.NONE:
        return data
    if compression == CompressionType.GZIP:
        return gzip.decompress(data)
    raise ValueError(f"Unsupported compression type: {compression}")


def is_gzipped(data: bytes) -> bool:
    return data[:2] == _GZIP_MAGIC


def encode_json(obj: Any, compress: bool = True, indent: int | None = None) -> bytes:
    """JSON-serialize an object, gzip-compressing it when *compress* is set."""
    raw = json.dumps(obj, indent=indent, ensure_ascii=False).encode("utf-8")
    return compress_bytes(raw) if compress else raw


def decode_json(data: bytes) -> Any:
    """Parse JSON data, decompressing first if it is gzipped."""
    if is_gzipped(data):
        data = decompress_bytes(data)
    return json.loads(data.decode("utf-8"))
