"""Task repository: completion roll-forward and list-view queries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from petcare.core.utils.dt import ONE_DAY, start_of_day
from petcare.enums import TaskCategory
from petcare.models import Task

from .base import Repository


class TaskSort(StrEnum):
    DUE_DATE = "due_date"
    PRIORITY = "priority"
    CATEGORY = "category"
    CREATED_DATE = "created_date"


@dataclass(frozen=True)
class TaskFilter:
    """List-view options, applied in field order: category, pet, completed, sort."""

    category: TaskCategory | None = None
    pet_id: str | None = None
    show_completed: bool = False
    sort: TaskSort = TaskSort.DUE_DATE


def sort_tasks(tasks: list[Task], option: TaskSort) -> list[Task]:
    """Stable sort; tasks without a due date go last under DUE_DATE."""
    match TaskSort(option):
        case TaskSort.DUE_DATE:
            return sorted(tasks, key=lambda t: (t.due_date is None, t.due_date or datetime.min))
        case TaskSort.PRIORITY:
            return sorted(tasks, key=lambda t: t.priority.rank)
        case TaskSort.CATEGORY:
            return sorted(tasks, key=lambda t: t.category.value)
        case TaskSort.CREATED_DATE:
            return sorted(tasks, key=lambda t: t.created_at, reverse=True)


def apply_filter(tasks: list[Task], options: TaskFilter) -> list[Task]:
    filtered = tasks
    if options.category is not None:
        filtered = [t for t in filtered if t.category == options.category]
    if options.pet_id is not None:
        filtered = [t for t in filtered if t.pet_id == options.pet_id]
    if not options.show_completed:
        filtered = [t for t in filtered if not t.is_completed]
    return sort_tasks(filtered, options.sort)


class TaskRepository(Repository[Task]):
    kind = "tasks"
    entity_type = Task

    async def mark_completed(self, task: Task | str) -> Task:
        """Complete *task* (or the stored task with that id) and save it.

        Recurring tasks have their ``next_due_date`` rolled forward; see
        :meth:`Task.mark_completed`.
        """
        current = self.require(task) if isinstance(task, str) else task
        return await self.update(current.mark_completed(self._clock()))

    # -- Queries -------------------------------------------------------------

    def _today_window(self) -> tuple[datetime, datetime, datetime]:
        now = self._clock()
        today = start_of_day(now)
        return now, today, today + ONE_DAY

    @property
    def todays_tasks(self) -> list[Task]:
        """Incomplete tasks due between today's midnight and tomorrow's."""
        _, today, tomorrow = self._today_window()
        return [
            t
            for t in self._items.values()
            if t.due_date is not None and today <= t.due_date < tomorrow and not t.is_completed
        ]

    @property
    def todays_completed_count(self) -> int:
        """Tasks due today that are already done."""
        _, today, tomorrow = self._today_window()
        return sum(
            1
            for t in self._items.values()
            if t.is_completed and t.due_date is not None and today <= t.due_date < tomorrow
        )

    @property
    def overdue_tasks(self) -> list[Task]:
        now = self._clock()
        return [t for t in self._items.values() if t.is_overdue(now)]

    def upcoming_tasks(self, limit: int | None = None) -> list[Task]:
        """Incomplete tasks due from tomorrow on, soonest first."""
        now, _, tomorrow = self._today_window()
        upcoming = sorted(
            (
                t
                for t in self._items.values()
                if t.due_date is not None and t.due_date >= tomorrow and not t.is_completed and not t.is_overdue(now)
            ),
            key=lambda t: t.due_date,
        )
        return upcoming if limit is None else upcoming[:limit]

    @property
    def completed_count(self) -> int:
        return sum(1 for t in self._items.values() if t.is_completed)

    def tasks_for_pet(self, pet_id: str) -> list[Task]:
        return [t for t in self._items.values() if t.pet_id == pet_id]

    def filtered(self, options: TaskFilter | None = None) -> list[Task]:
        return apply_filter(self.snapshot(), options or TaskFilter())
