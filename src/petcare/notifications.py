"""Reminder notification payloads and an in-memory notifier.

The core decides *what* to show and *when*; delivering it is up to the
injected :class:`~petcare.ports.NotificationPort`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from petcare.models import Pet, Reminder

DEFAULT_BODY = "PetCare reminder"


@dataclass(frozen=True)
class NotificationPayload:
    title: str
    body: str
    subtitle: str | None = None
    user_info: dict[str, Any] = field(default_factory=dict)
    repeat_interval: float | None = None  # seconds


def build_payload(
    reminder: Reminder,
    pets: Mapping[str, Pet] | None = None,
    default_body: str = DEFAULT_BODY,
) -> NotificationPayload:
    """Notification content for *reminder*.

    The pet's name becomes the subtitle when the pet is known; a dangling
    pet id is simply left out.
    """
    user_info: dict[str, Any] = {"reminder_id": reminder.id}
    subtitle = None
    if reminder.pet_id is not None:
        user_info["pet_id"] = reminder.pet_id
        pet = (pets or {}).get(reminder.pet_id)
        if pet is not None:
            subtitle = pet.name
    if reminder.task_id is not None:
        user_info["task_id"] = reminder.task_id
    return NotificationPayload(
        title=reminder.title,
        body=reminder.message or default_body,
        subtitle=subtitle,
        user_info=user_info,
        repeat_interval=reminder.repeat_interval if reminder.is_repeating else None,
    )


@dataclass(frozen=True)
class ScheduledNotification:
    notification_id: str
    payload: NotificationPayload
    trigger_time: datetime
    repeating: bool


class InMemoryNotifier:
    """Notification port that only records what was requested."""

    def __init__(self) -> None:
        self.pending: dict[str, ScheduledNotification] = {}
        self.cancelled: list[str] = []

    async def schedule(
        self,
        notification_id: str,
        payload: NotificationPayload,
        trigger_time: datetime,
        repeating: bool,
    ) -> None:
        self.pending[notification_id] = ScheduledNotification(notification_id, payload, trigger_time, repeating)

    async def cancel(self, notification_id: str) -> None:
        self.pending.pop(notification_id, None)
        self.cancelled.append(notification_id)

    async def cancel_all(self) -> None:
        self.cancelled.extend(self.pending)
        self.pending.clear()

    async def pending_count(self) -> int:
        return len(self.pending)
