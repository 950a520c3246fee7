"""Reminder repository with notification scheduling.

Every change to a reminder is mirrored to the notification port: adds and
enables schedule, updates cancel then reschedule, deletes cancel first.
Notification failures are logged and do not undo a committed change; the
port owns delivery and retries.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable

from loguru import logger

from petcare.core.events import EventBus
from petcare.core.utils.dt import ONE_DAY, Clock, start_of_day, start_of_week, utcnow
from petcare.models import Reminder
from petcare.models.ids import new_id
from petcare.notifications import DEFAULT_BODY, build_payload
from petcare.ports import NotificationPort, PersistencePort

from .base import DEFAULT_TIMEOUT, Repository
from .pets import PetRepository


class ReminderRepository(Repository[Reminder]):
    kind = "reminders"
    entity_type = Reminder

    def __init__(
        self,
        persistence: PersistencePort,
        *,
        notifier: NotificationPort | None = None,
        pets: PetRepository | None = None,
        bus: EventBus | None = None,
        clock: Clock = utcnow,
        timeout: float = DEFAULT_TIMEOUT,
        default_body: str = DEFAULT_BODY,
    ) -> None:
        super().__init__(persistence, bus=bus, clock=clock, timeout=timeout)
        self._notifier = notifier
        self._pets = pets
        self._default_body = default_body

    # -- Notification plumbing ----------------------------------------------

    @staticmethod
    def _handle(reminder: Reminder) -> str:
        return reminder.notification_id or reminder.id

    async def _schedule(self, reminder: Reminder) -> None:
        if self._notifier is None or not reminder.is_enabled:
            return
        trigger = reminder.next_trigger_date(self._clock())
        if trigger is None:
            return
        payload = build_payload(reminder, self._pets.by_id() if self._pets else None, self._default_body)
        repeating = reminder.is_repeating and reminder.repeat_interval is not None
        try:
            await self._notifier.schedule(self._handle(reminder), payload, trigger, repeating)
        except Exception as e:
            logger.warning(f"Could not schedule notification for reminder {reminder.id}: {e}")

    async def _cancel(self, *handles: str) -> None:
        if self._notifier is None:
            return
        for handle in dict.fromkeys(handles):
            try:
                await self._notifier.cancel(handle)
            except Exception as e:
                logger.warning(f"Could not cancel notification {handle}: {e}")

    # -- Mutations -----------------------------------------------------------

    async def add(self, reminder: Reminder) -> Reminder:
        if reminder.notification_id is None:
            reminder = dataclasses.replace(reminder, notification_id=new_id())
        stored = await super().add(reminder)
        await self._schedule(stored)
        return stored

    async def update(self, reminder: Reminder) -> Reminder:
        previous = self.require(reminder.id)
        if reminder.notification_id is None:
            reminder = dataclasses.replace(reminder, notification_id=previous.notification_id)
        stored = await super().update(reminder)
        await self._cancel(self._handle(previous), self._handle(stored))
        await self._schedule(stored)
        return stored

    async def delete(self, reminder_id: str) -> Reminder:
        deleted = await super().delete(reminder_id)
        # Cancel only once the delete is committed.
        await self._cancel(self._handle(deleted))
        return deleted

    async def merge(self, reminders: Iterable[Reminder]) -> list[Reminder]:
        merged = await super().merge(reminders)
        for reminder in merged:
            await self._cancel(self._handle(reminder))
            await self._schedule(reminder)
        return merged

    async def toggle(self, reminder_id: str) -> Reminder:
        current = self.require(reminder_id)
        return await self.update(dataclasses.replace(current, is_enabled=not current.is_enabled))

    async def reschedule_all(self) -> int:
        """Drop every pending notification and request fresh triggers.

        Run after :meth:`load` so repeating reminders whose scheduled date has
        passed are re-armed at their next repetition.
        """
        if self._notifier is None:
            return 0
        await self._notifier.cancel_all()
        enabled = self.enabled_reminders
        for reminder in enabled:
            await self._schedule(reminder)
        return len(enabled)

    async def pending_notifications(self) -> int:
        if self._notifier is None:
            return len(self.enabled_reminders)
        return await self._notifier.pending_count()

    # -- Queries -------------------------------------------------------------

    @property
    def enabled_reminders(self) -> list[Reminder]:
        return [r for r in self._items.values() if r.is_enabled]

    @property
    def disabled_reminders(self) -> list[Reminder]:
        return [r for r in self._items.values() if not r.is_enabled]

    @property
    def todays_reminders(self) -> list[Reminder]:
        today = start_of_day(self._clock())
        tomorrow = today + ONE_DAY
        return [r for r in self._items.values() if r.is_enabled and today <= r.scheduled_date < tomorrow]

    @property
    def upcoming_reminders(self) -> list[Reminder]:
        tomorrow = start_of_day(self._clock()) + ONE_DAY
        return sorted(
            (r for r in self._items.values() if r.is_enabled and r.scheduled_date >= tomorrow),
            key=lambda r: r.scheduled_date,
        )

    @property
    def past_due_reminders(self) -> list[Reminder]:
        now = self._clock()
        return [r for r in self._items.values() if r.is_past_due(now)]

    @property
    def reminders_this_week(self) -> int:
        week_start = start_of_week(self._clock())
        week_end = week_start + 7 * ONE_DAY
        return sum(1 for r in self._items.values() if r.is_enabled and week_start <= r.scheduled_date < week_end)
