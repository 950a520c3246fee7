"""Collaborator interfaces consumed by the core.

Storage, notification delivery and cloud sync are injected at construction
time; the core never reaches for a process-wide service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from petcare.models import Pet, Reminder, Task
    from petcare.notifications import NotificationPayload


@runtime_checkable
class PersistencePort(Protocol):
    """Keyed entity collections ("pets", "tasks", "reminders", ...).

    Order is not significant; records are looked up by id. Implementations
    raise ``PersistenceError`` on failure.
    """

    async def load(self, kind: str) -> list[Any]:
        """Return every stored entity of *kind* (empty if none were saved)."""
        ...

    async def save(self, kind: str, entities: list[Any]) -> None:
        """Replace the stored collection of *kind* with *entities*."""
        ...


@runtime_checkable
class NotificationPort(Protocol):
    """OS-level notification scheduler. Delivery reliability is its own concern."""

    async def schedule(
        self,
        notification_id: str,
        payload: NotificationPayload,
        trigger_time: datetime,
        repeating: bool,
    ) -> None: ...

    async def cancel(self, notification_id: str) -> None: ...

    async def cancel_all(self) -> None: ...

    async def pending_count(self) -> int: ...


@dataclass
class SyncBundle:
    """Everything exchanged with the cloud in one pull or push."""

    pets: list[Pet] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)
    reminders: list[Reminder] = field(default_factory=list)


@runtime_checkable
class CloudSyncPort(Protocol):
    """Best-effort remote mirror. Implementations raise ``SyncError``."""

    async def pull_all(self) -> SyncBundle: ...

    async def push_all(self, bundle: SyncBundle) -> None: ...
