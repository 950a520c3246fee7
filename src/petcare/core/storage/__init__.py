"""
Storage backends for petcare.

Async key/blob storage with optional gzip compression and a pluggable
backend interface (local filesystem by default). Entity encoding lives in
``petcare.models.codec``; this layer only moves bytes.
"""

from .base import (
    StorageBackend,
    StorageError,
    StorageKeyError,
    StoragePermissionError,
)
from .compression import (
    CompressionType,
    compress_bytes,
    decode_json,
    decompress_bytes,
    encode_json,
    is_gzipped,
)
from .local import LocalStorage

__all__ = [
    "CompressionType",
    "LocalStorage",
    "StorageBackend",
    "StorageError",
    "StorageKeyError",
    "StoragePermissionError",
    "compress_bytes",
    "decode_json",
    "decompress_bytes",
    "encode_json",
    "is_gzipped",
]
