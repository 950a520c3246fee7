"""
Local filesystem storage backend.

Each key maps to one file under ``base_path``. Writes go to a temporary
sibling first and are moved into place, so a crash mid-write leaves the
previous snapshot intact.
"""

from pathlib import Path

import aiofiles
import aiofiles.os
from loguru import logger

from .base import StorageBackend, StorageKeyError, StoragePermissionError


class LocalStorage(StorageBackend):
    """Local filesystem storage backend."""

    def __init__(self, base_path: str = "~/.petcare-data/storage", **config):
        super().__init__(**config)
        self.base_path = Path(base_path).expanduser().resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, key: str) -> Path:
        """Resolve a storage key to an absolute path under ``base_path``.

        Rejects unsafe keys (absolute paths, traversal, empty keys, and
        backslash-delimited paths) to prevent writes outside ``base_path``.
        """
        raw_key = key.strip()
        if not raw_key:
            raise StoragePermissionError("Storage key cannot be empty.")
        if "\x00" in raw_key:
            raise StoragePermissionError("Storage key cannot contain null bytes.")
        if "\\" in raw_key:
            raise StoragePermissionError("Storage key cannot contain backslashes. Use '/' separators.")

        key_path = Path(raw_key)
        if key_path.is_absolute() or raw_key.startswith("~"):
            raise StoragePermissionError(f"Unsafe storage key '{key}': absolute paths are not allowed.")

        full_path = (self.base_path / key_path).resolve()
        try:
            full_path.relative_to(self.base_path)
        except ValueError as e:
            raise StoragePermissionError(f"Unsafe storage key '{key}': path traversal is not allowed.") from e
        return full_path

    async def save(self, key: str, data: bytes) -> None:
        path = self._get_full_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(f".{path.name}.tmp")

        try:
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(data)
            await aiofiles.os.replace(tmp_path, path)
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot write to {path}: {e}") from e
        logger.debug(f"Stored {len(data)} bytes at {key}")

    async def load(self, key: str) -> bytes:
        path = self._get_full_path(key)
        if not path.exists():
            raise StorageKeyError(f"Key not found: {key}")

        try:
            async with aiofiles.open(path, "rb") as f:
                return await f.read()
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot read {path}: {e}") from e

