"""Care tasks and their completion roll-forward."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime

from petcare.core.exceptions import ValidationError
from petcare.core.utils.dt import utcnow
from petcare.enums import RecurrenceType, TaskCategory, TaskPriority
from petcare.scheduling import status
from petcare.scheduling.recurrence import RecurrenceRule, next_occurrence

from .ids import new_id
from .validation import coerce_enum, optional_text, require_datetime, require_text

MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500


@dataclass
class Task:
    """A pet care task.

    ``recurrence`` carries the rule type and interval together, so a task is
    either recurring with both or with neither.

    Attributes:
        next_due_date: Due date of the following occurrence. Starts equal to
            ``due_date`` and is rolled forward by ``mark_completed`` for
            recurring tasks.
    """

    id: str
    title: str
    category: TaskCategory = TaskCategory.OTHER
    priority: TaskPriority = TaskPriority.MEDIUM
    description: str | None = None
    pet_id: str | None = None
    due_date: datetime | None = None
    is_completed: bool = False
    completed_at: datetime | None = None
    recurrence: RecurrenceRule | None = None
    next_due_date: datetime | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        self.category = coerce_enum("category", TaskCategory, self.category)
        self.priority = coerce_enum("priority", TaskPriority, self.priority)
        require_text("title", self.title, MAX_TITLE_LENGTH)
        optional_text("description", self.description, MAX_DESCRIPTION_LENGTH)
        require_datetime("due_date", self.due_date, optional=True)
        require_datetime("next_due_date", self.next_due_date, optional=True)
        if self.is_completed != (self.completed_at is not None):
            raise ValidationError("completed_at", "must be set exactly when the task is completed")

    @classmethod
    def create(
        cls,
        title: str,
        category: TaskCategory | str = TaskCategory.OTHER,
        *,
        priority: TaskPriority | str = TaskPriority.MEDIUM,
        description: str | None = None,
        pet_id: str | None = None,
        due_date: datetime | None = None,
        recurrence: RecurrenceRule | None = None,
        now: datetime | None = None,
    ) -> Task:
        """Build a new, incomplete task with a fresh id."""
        now = now or utcnow()
        return cls(
            id=new_id(),
            title=title,
            category=category,
            priority=priority,
            description=description,
            pet_id=pet_id,
            due_date=due_date,
            recurrence=recurrence,
            next_due_date=due_date,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_recurring(self) -> bool:
        return self.recurrence is not None

    @property
    def recurrence_type(self) -> RecurrenceType | None:
        return self.recurrence.type if self.recurrence else None

    @property
    def recurrence_interval(self) -> int | None:
        return self.recurrence.interval if self.recurrence else None

    def is_overdue(self, now: datetime | None = None) -> bool:
        return status.task_is_overdue(self, now or utcnow())

    def days_until_due(self, now: datetime | None = None) -> int | None:
        return status.days_until_due(self, now or utcnow())

    def mark_completed(self, now: datetime | None = None) -> Task:
        """Return a completed copy of this task.

        Recurring tasks get ``next_due_date`` advanced one rule step from the
        due date (or from *now* when there is none). The completion flag is
        not reset for the next occurrence.
        """
        now = now or utcnow()
        next_due = self.next_due_date
        if self.recurrence is not None:
            next_due = next_occurrence(self.due_date or now, self.recurrence)
        return dataclasses.replace(
            self,
            is_completed=True,
            completed_at=now,
            updated_at=now,
            next_due_date=next_due,
        )
