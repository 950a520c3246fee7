"""Generic entity repository.

An in-memory collection backed by a persistence port. Mutations follow the
same shape: build a staged copy of the collection, persist it, and only then
swap it in. A failed or timed-out save leaves the in-memory collection
exactly as it was and surfaces ``PersistenceError``.

All mutations on one repository are serialized by an ``asyncio.Lock`` so two
concurrent edits cannot lose each other's changes. Reads never take the lock;
they see the last committed collection.
"""

from __future__ import annotations

import asyncio
import dataclasses
from collections.abc import Awaitable, Iterable
from typing import Any, ClassVar, Generic, TypeVar

from loguru import logger

from petcare.core.events import Event, EventBus, changed_event
from petcare.core.exceptions import NotFoundError, PersistenceError, PetCareError, ValidationError
from petcare.core.utils.dt import Clock, utcnow
from petcare.ports import PersistencePort

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_TIMEOUT = 10.0


class Repository(Generic[T]):
    """CRUD over one entity collection.

    Args:
        persistence: Storage port the collection is loaded from and saved to.
        bus: Receives a ``<kind>.changed`` event after every committed change.
        clock: Source of "now" for timestamps and time-relative queries.
        timeout: Seconds allowed for each persistence call.
    """

    kind: ClassVar[str]
    entity_type: ClassVar[type]

    def __init__(
        self,
        persistence: PersistencePort,
        *,
        bus: EventBus | None = None,
        clock: Clock = utcnow,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._persistence = persistence
        self._bus = bus
        self._clock = clock
        self._timeout = timeout
        self._items: dict[str, T] = {}
        self._lock = asyncio.Lock()

    # -- Reads ---------------------------------------------------------------

    @property
    def items(self) -> list[T]:
        return list(self._items.values())

    def snapshot(self) -> list[T]:
        """A point-in-time copy of the collection, safe to iterate while edits land."""
        return list(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._items

    def get(self, entity_id: str) -> T | None:
        return self._items.get(entity_id)

    def require(self, entity_id: str) -> T:
        try:
            return self._items[entity_id]
        except KeyError:
            raise NotFoundError(self.kind, entity_id) from None

    # -- Persistence ---------------------------------------------------------

    async def load(self) -> list[T]:
        """Replace the in-memory collection with what the port has stored."""
        async with self._lock:
            entities = await self._call(self._persistence.load(self.kind))
            for entity in entities:
                self._check_type(entity)
            self._items = {e.id: e for e in entities}
        logger.info(f"Loaded {len(self._items)} {self.kind}")
        await self._notify("loaded", list(self._items))
        return self.items

    async def _call(self, awaitable: Awaitable[R]) -> R:
        try:
            return await asyncio.wait_for(awaitable, self._timeout)
        except PetCareError:
            raise
        except TimeoutError as e:
            raise PersistenceError(f"{self.kind} storage timed out after {self._timeout}s") from e
        except Exception as e:
            raise PersistenceError(f"{self.kind} storage failed: {e}") from e

    async def _commit(self, staged: dict[str, T]) -> None:
        """Persist *staged* and adopt it. Caller holds the lock."""
        await self._call(self._persistence.save(self.kind, list(staged.values())))
        self._items = staged

    async def _notify(self, action: str, ids: list[str]) -> None:
        if self._bus is None:
            return
        await self._bus.emit(
            Event(name=changed_event(self.kind), payload={"action": action, "ids": ids}, source=self.kind)
        )

    def _check_type(self, entity: Any) -> None:
        if not isinstance(entity, self.entity_type):
            raise ValidationError(self.kind, f"expected {self.entity_type.__name__}, got {type(entity).__name__}")

    def _stamp(self, entity: T) -> T:
        return dataclasses.replace(entity, updated_at=self._clock())

    # -- Mutations -----------------------------------------------------------

    async def add(self, entity: T) -> T:
        self._check_type(entity)
        entity = self._stamp(entity)
        async with self._lock:
            if entity.id in self._items:
                raise ValidationError("id", f"{self.kind} {entity.id} already exists")
            staged = dict(self._items)
            staged[entity.id] = entity
            await self._commit(staged)
        await self._notify("added", [entity.id])
        return entity

    async def update(self, entity: T) -> T:
        self._check_type(entity)
        entity = self._stamp(entity)
        async with self._lock:
            if entity.id not in self._items:
                raise NotFoundError(self.kind, entity.id)
            staged = dict(self._items)
            staged[entity.id] = entity
            await self._commit(staged)
        await self._notify("updated", [entity.id])
        return entity

    async def delete(self, entity_id: str) -> T:
        async with self._lock:
            removed = self.require(entity_id)
            staged = dict(self._items)
            del staged[entity_id]
            await self._commit(staged)
        await self._notify("deleted", [entity_id])
        return removed

    async def merge(self, entities: Iterable[T]) -> list[T]:
        """Upsert *entities* by id with a single save.

        Incoming records replace local ones with the same id as-is
        (last write wins); timestamps are not restamped.
        """
        incoming = list(entities)
        for entity in incoming:
            self._check_type(entity)
        if not incoming:
            return []
        async with self._lock:
            staged = dict(self._items)
            for entity in incoming:
                staged[entity.id] = entity
            await self._commit(staged)
        await self._notify("merged", [e.id for e in incoming])
        return incoming

    async def clear(self) -> None:
        async with self._lock:
            await self._commit({})
        await self._notify("cleared", [])
