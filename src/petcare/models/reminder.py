"""Reminders delivered through the notification collaborator."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from petcare.core.utils.dt import utcnow
from petcare.enums import RepeatType
from petcare.scheduling import status
from petcare.scheduling.recurrence import repeat_interval_delta

from .ids import new_id
from .validation import coerce_enum, optional_text, require_datetime, require_text

MAX_TITLE_LENGTH = 100
MAX_MESSAGE_LENGTH = 250


@dataclass
class Reminder:
    id: str
    title: str
    scheduled_date: datetime
    message: str | None = None
    pet_id: str | None = None
    task_id: str | None = None
    is_repeating: bool = False
    repeat_interval: float | None = None  # seconds
    repeat_type: RepeatType | None = None
    is_enabled: bool = True
    notification_id: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        if self.repeat_type is not None:
            self.repeat_type = coerce_enum("repeat_type", RepeatType, self.repeat_type)
        require_text("title", self.title, MAX_TITLE_LENGTH)
        optional_text("message", self.message, MAX_MESSAGE_LENGTH)
        require_datetime("scheduled_date", self.scheduled_date)
        if self.repeat_interval is not None:
            repeat_interval_delta(self.repeat_interval)

    @classmethod
    def create(
        cls,
        title: str,
        scheduled_date: datetime,
        *,
        message: str | None = None,
        pet_id: str | None = None,
        task_id: str | None = None,
        is_repeating: bool = False,
        repeat_interval: float | None = None,
        repeat_type: RepeatType | str | None = None,
        is_enabled: bool = True,
        now: datetime | None = None,
    ) -> Reminder:
        """Build a new reminder, enabled by default.

        A repeating reminder given only a ``repeat_type`` takes that type's
        fixed spacing as its ``repeat_interval``.
        """
        now = now or utcnow()
        if repeat_type is not None:
            repeat_type = coerce_enum("repeat_type", RepeatType, repeat_type)
            if is_repeating and repeat_interval is None:
                repeat_interval = repeat_type.seconds
        return cls(
            id=new_id(),
            title=title,
            scheduled_date=scheduled_date,
            message=message,
            pet_id=pet_id,
            task_id=task_id,
            is_repeating=is_repeating,
            repeat_interval=repeat_interval,
            repeat_type=repeat_type,
            is_enabled=is_enabled,
            created_at=now,
            updated_at=now,
        )

    def is_past_due(self, now: datetime | None = None) -> bool:
        return status.reminder_is_past_due(self, now or utcnow())

    def next_trigger_date(self, now: datetime | None = None) -> datetime | None:
        return status.reminder_next_trigger(self, now or utcnow())
