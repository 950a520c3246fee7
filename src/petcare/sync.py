"""Best-effort cloud sync.

The cloud is optional. Nothing in here raises into local operations: every
failure is logged and handed back as a :class:`SyncResult` carrying the
:class:`~petcare.core.exceptions.SyncError`.

Pulled entities are upserted by id (last write wins). Records arriving as
plain dicts go through the codec first, so a malformed record is rejected
before anything local changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from petcare.core.events import SYNC_COMPLETE, Event, EventBus
from petcare.core.exceptions import PetCareError, SyncError, SyncFailure, ValidationError
from petcare.models import Pet, Reminder, Task
from petcare.models.codec import from_record
from petcare.ports import CloudSyncPort, SyncBundle
from petcare.repositories import PetRepository, ReminderRepository, TaskRepository


@dataclass
class SyncResult:
    action: str  # "pull" | "push"
    counts: dict[str, int] = field(default_factory=dict)
    error: SyncError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _coerce(kind: str, cls: type, items: list[Any]) -> list[Any]:
    entities = []
    for item in items:
        if isinstance(item, dict):
            item = from_record(cls, item)
        if not isinstance(item, cls):
            raise ValidationError(kind, f"expected {cls.__name__}, got {type(item).__name__}")
        entities.append(item)
    return entities


class InMemoryCloud:
    """Cloud port holding a single bundle; handy for tests and demos."""

    def __init__(self, bundle: SyncBundle | None = None, *, available: bool = True) -> None:
        self.bundle = bundle or SyncBundle()
        self.available = available
        self.pushes = 0

    async def pull_all(self) -> SyncBundle:
        if not self.available:
            raise SyncError(SyncFailure.UNAVAILABLE, "cloud account unavailable")
        return SyncBundle(list(self.bundle.pets), list(self.bundle.tasks), list(self.bundle.reminders))

    async def push_all(self, bundle: SyncBundle) -> None:
        if not self.available:
            raise SyncError(SyncFailure.UNAVAILABLE, "cloud account unavailable")
        self.bundle = bundle
        self.pushes += 1


class SyncService:
    def __init__(
        self,
        cloud: CloudSyncPort | None,
        pets: PetRepository,
        tasks: TaskRepository,
        reminders: ReminderRepository,
        *,
        enabled: bool = True,
        bus: EventBus | None = None,
    ) -> None:
        self.cloud = cloud
        self.pets = pets
        self.tasks = tasks
        self.reminders = reminders
        self.enabled = enabled
        self.bus = bus

    @property
    def available(self) -> bool:
        return self.enabled and self.cloud is not None

    def _unavailable(self, action: str) -> SyncResult:
        return SyncResult(action, error=SyncError(SyncFailure.UNAVAILABLE, "cloud sync is disabled"))

    async def pull(self) -> SyncResult:
        """Fetch the cloud bundle and upsert it into the local repositories."""
        if not self.available:
            return self._unavailable("pull")
        try:
            bundle = await self.cloud.pull_all()
            pets = _coerce("pets", Pet, bundle.pets)
            tasks = _coerce("tasks", Task, bundle.tasks)
            reminders = _coerce("reminders", Reminder, bundle.reminders)
        except SyncError as e:
            return self._failed("pull", e)
        except ValidationError as e:
            return self._failed("pull", SyncError(SyncFailure.INVALID_RECORD, str(e)))
        except Exception as e:
            return self._failed("pull", SyncError(SyncFailure.FAILED, str(e)))

        try:
            await self.pets.merge(pets)
            await self.tasks.merge(tasks)
            await self.reminders.merge(reminders)
        except PetCareError as e:
            return self._failed("pull", SyncError(SyncFailure.FAILED, str(e)))

        counts = {"pets": len(pets), "tasks": len(tasks), "reminders": len(reminders)}
        return await self._done("pull", counts)

    async def push(self) -> SyncResult:
        """Send the current local snapshots to the cloud."""
        if not self.available:
            return self._unavailable("push")
        bundle = SyncBundle(self.pets.snapshot(), self.tasks.snapshot(), self.reminders.snapshot())
        try:
            await self.cloud.push_all(bundle)
        except SyncError as e:
            return self._failed("push", e)
        except Exception as e:
            return self._failed("push", SyncError(SyncFailure.FAILED, str(e)))
        counts = {"pets": len(bundle.pets), "tasks": len(bundle.tasks), "reminders": len(bundle.reminders)}
        return await self._done("push", counts)

    async def _done(self, action: str, counts: dict[str, int]) -> SyncResult:
        logger.info(f"Sync {action}: {counts['pets']} pets, {counts['tasks']} tasks, {counts['reminders']} reminders")
        if self.bus is not None:
            await self.bus.emit(Event(name=SYNC_COMPLETE, payload={"action": action, **counts}, source="sync"))
        return SyncResult(action, counts)

    @staticmethod
    def _failed(action: str, error: SyncError) -> SyncResult:
        logger.warning(f"Sync {action} failed ({error.reason.value}): {error}")
        return SyncResult(action, error=error)
