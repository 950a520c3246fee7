"""Persistence port implementations.

``StoragePersistence`` keeps one JSON document per collection in a
:class:`~petcare.core.storage.StorageBackend`; ``InMemoryPersistence`` keeps
encoded records in a dict and is meant for tests and throwaway sessions.
Both go through the codec, so what comes back out of ``load`` is always a
fresh, validated copy.
"""

from __future__ import annotations

import copy
from datetime import datetime
from typing import Any

from loguru import logger

from petcare.core.exceptions import PersistenceError, ValidationError
from petcare.core.storage import StorageBackend, StorageError, decode_json, encode_json
from petcare.core.utils.dt import utcnow
from petcare.models.codec import KINDS, decode_collection, encode_collection
from petcare.ports import PersistencePort

SNAPSHOT_VERSION = 1


def _check_kind(kind: str) -> None:
    if kind not in KINDS:
        raise PersistenceError(f"Unknown collection kind: {kind!r}")


class InMemoryPersistence:
    """Dict-backed persistence port."""

    def __init__(self, initial: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self._records: dict[str, list[dict[str, Any]]] = copy.deepcopy(initial or {})
        self.save_count = 0

    async def load(self, kind: str) -> list[Any]:
        _check_kind(kind)
        try:
            return decode_collection(kind, copy.deepcopy(self._records.get(kind, [])))
        except ValidationError as e:
            raise PersistenceError(f"Corrupt {kind} records: {e}") from e

    async def save(self, kind: str, entities: list[Any]) -> None:
        _check_kind(kind)
        self._records[kind] = encode_collection(entities)
        self.save_count += 1

    def records(self, kind: str) -> list[dict[str, Any]]:
        """Raw encoded records for *kind* (a copy)."""
        return copy.deepcopy(self._records.get(kind, []))


class StoragePersistence:
    """Stores each collection as ``<kind>.json`` in a storage backend.

    Args:
        backend: Where the bytes go (``LocalStorage`` by default in the app).
        compress: Gzip documents on write. Reads accept either form.
    """

    def __init__(self, backend: StorageBackend, compress: bool = True) -> None:
        self.backend = backend
        self.compress = compress

    @staticmethod
    def _key(kind: str) -> str:
        return f"{kind}.json"

    async def load(self, kind: str) -> list[Any]:
        _check_kind(kind)
        key = self._key(kind)
        try:
            raw = await self.backend.load_if_exists(key)
            if raw is None:
                return []
            document = decode_json(raw)
        except (StorageError, ValueError) as e:
            raise PersistenceError(f"Cannot read {kind}: {e}") from e

        records = document.get("records", []) if isinstance(document, dict) else document
        try:
            return decode_collection(kind, records)
        except ValidationError as e:
            raise PersistenceError(f"Corrupt {kind} records: {e}") from e

    async def save(self, kind: str, entities: list[Any]) -> None:
        _check_kind(kind)
        document = {
            "version": SNAPSHOT_VERSION,
            "kind": kind,
            "saved_at": utcnow().isoformat(),
            "records": encode_collection(entities),
        }
        try:
            await self.backend.save(self._key(kind), encode_json(document, compress=self.compress))
        except StorageError as e:
            raise PersistenceError(f"Cannot write {kind}: {e}") from e
        logger.debug(f"Saved {len(entities)} {kind}")

    async def export_data(self, now: datetime | None = None) -> dict[str, Any]:
        return await export_snapshot(self, now)

    async def import_data(self, data: dict[str, Any]) -> dict[str, int]:
        return await import_snapshot(self, data)


# ---------------------------------------------------------------------------
# Export / import
# ---------------------------------------------------------------------------


async def export_snapshot(port: PersistencePort, now: datetime | None = None) -> dict[str, Any]:
    """Full snapshot of every collection as one JSON-compatible dict."""
    data: dict[str, Any] = {"export_date": (now or utcnow()).isoformat()}
    for kind in KINDS:
        data[kind] = encode_collection(await port.load(kind))
    return data


async def import_snapshot(port: PersistencePort, data: dict[str, Any]) -> dict[str, int]:
    """Replace collections present in *data*. Returns counts per kind.

    Every collection is decoded before anything is written, so a bad
    record aborts the import without touching stored data.
    """
    if not isinstance(data, dict):
        raise PersistenceError("Import data must be a JSON object")
    decoded: dict[str, list[Any]] = {}
    for kind in KINDS:
        if kind not in data:
            continue
        if not isinstance(data[kind], list):
            raise PersistenceError(f"Invalid {kind} in import: expected a list")
        try:
            decoded[kind] = decode_collection(kind, data[kind])
        except (ValidationError, TypeError) as e:
            raise PersistenceError(f"Invalid {kind} in import: {e}") from e
    for kind, entities in decoded.items():
        await port.save(kind, entities)
    logger.info(f"Imported {', '.join(f'{len(v)} {k}' for k, v in decoded.items()) or 'nothing'}")
    return {kind: len(entities) for kind, entities in decoded.items()}
