"""Home screen aggregates."""

from __future__ import annotations

from dataclasses import dataclass

from petcare.models import Pet, Reminder, Task
from petcare.repositories import PetRepository, ReminderRepository, TaskRepository

DEFAULT_UPCOMING_LIMIT = 5


@dataclass(frozen=True)
class DashboardSummary:
    todays_tasks: list[Task]
    upcoming_tasks: list[Task]
    active_pets: list[Pet]
    todays_reminders: list[Reminder]
    todays_completed_count: int
    overdue_count: int

    @property
    def todays_pending_count(self) -> int:
        return len(self.todays_tasks)

    @property
    def active_pets_count(self) -> int:
        return len(self.active_pets)

    @property
    def todays_active_reminders_count(self) -> int:
        return len(self.todays_reminders)

    @classmethod
    def collect(
        cls,
        pets: PetRepository,
        tasks: TaskRepository,
        reminders: ReminderRepository,
        upcoming_limit: int = DEFAULT_UPCOMING_LIMIT,
    ) -> DashboardSummary:
        return cls(
            todays_tasks=tasks.todays_tasks,
            upcoming_tasks=tasks.upcoming_tasks(upcoming_limit),
            active_pets=pets.active_pets,
            todays_reminders=reminders.todays_reminders,
            todays_completed_count=tasks.todays_completed_count,
            overdue_count=len(tasks.overdue_tasks),
        )
