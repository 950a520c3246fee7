"""Derived statistics over the pet, task and reminder collections.

Nothing here is persisted. Every entry point takes one snapshot of its
sources up front and computes from that, so an edit landing mid-call can
neither skew nor break the result.

Period windows are half-open: ``[start, end)`` where ``end`` is the start of
the next week or month. A task due Sunday 23:59:59 belongs to its week; one
due the following Monday 00:00 does not.
"""

from __future__ import annotations

import asyncio
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any

from petcare.core.exceptions import ValidationError
from petcare.core.utils.dt import ONE_DAY, Clock, add_months, start_of_day, start_of_month, start_of_week, utcnow
from petcare.enums import TaskCategory
from petcare.models import Pet, Reminder, Task

DEFAULT_WINDOW_DAYS = 30
DEFAULT_STREAK_LIMIT_DAYS = 3650

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


# ---------------------------------------------------------------------------
# Result records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Period:
    start: datetime
    end: datetime  # exclusive

    def contains(self, moment: datetime | None) -> bool:
        return moment is not None and self.start <= moment < self.end


@dataclass(frozen=True)
class PeriodStatistics:
    total_tasks: int
    completed_tasks: int
    overdue_tasks: int
    active_reminders: int
    period: Period

    @property
    def progress(self) -> float:
        """Completed share of the period's tasks, as a percentage."""
        return _percent(self.completed_tasks, self.total_tasks)


@dataclass(frozen=True)
class PetStatistics:
    pet_id: str
    pet_name: str
    tasks_completed: int
    tasks_pending: int
    average_completion_time: timedelta | None
    favorite_category: TaskCategory | None


@dataclass(frozen=True)
class CompletionRatePoint:
    day: date
    rate: float  # 0.0 - 1.0


@dataclass(frozen=True)
class StatisticsReport:
    """Everything the statistics screen shows, computed from one snapshot."""

    generated_at: datetime
    weekly: PeriodStatistics
    monthly: PeriodStatistics
    pets: list[PetStatistics] = field(default_factory=list)
    categories: dict[TaskCategory, int] = field(default_factory=dict)
    completion_rate: list[CompletionRatePoint] = field(default_factory=list)
    current_streak: int = 0
    productive_days: dict[str, int] = field(default_factory=dict)
    average_tasks_per_day: float = 0.0

    @property
    def overall_completion_rate(self) -> float:
        # Weekly and monthly totals are pooled, so this-week tasks count twice.
        total = self.weekly.total_tasks + self.monthly.total_tasks
        completed = self.weekly.completed_tasks + self.monthly.completed_tasks
        return _percent(completed, total)

    @property
    def weekly_progress(self) -> float:
        return self.weekly.progress

    @property
    def monthly_progress(self) -> float:
        return self.monthly.progress

    @property
    def most_active_pet(self) -> PetStatistics | None:
        if not self.pets:
            return None
        return max(self.pets, key=lambda p: p.tasks_completed)

    @property
    def most_common_category(self) -> tuple[TaskCategory, int] | None:
        if not self.categories:
            return None
        return Counter(self.categories).most_common(1)[0]

    @property
    def average_tasks_per_pet(self) -> float:
        """Completed tasks per tracked pet."""
        if not self.pets:
            return 0.0
        return sum(p.tasks_completed for p in self.pets) / len(self.pets)

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible summary for the CLI and exports."""

        def period(stats: PeriodStatistics) -> dict[str, Any]:
            return {
                "start": stats.period.start.isoformat(),
                "end": stats.period.end.isoformat(),
                "total_tasks": stats.total_tasks,
                "completed_tasks": stats.completed_tasks,
                "overdue_tasks": stats.overdue_tasks,
                "active_reminders": stats.active_reminders,
                "progress": round(stats.progress, 1),
            }

        most_common = self.most_common_category
        return {
            "generated_at": self.generated_at.isoformat(),
            "weekly": period(self.weekly),
            "monthly": period(self.monthly),
            "overall_completion_rate": round(self.overall_completion_rate, 1),
            "current_streak": self.current_streak,
            "average_tasks_per_day": round(self.average_tasks_per_day, 2),
            "average_tasks_per_pet": round(self.average_tasks_per_pet, 2),
            "most_common_category": most_common[0].value if most_common else None,
            "categories": {c.value: n for c, n in self.categories.items()},
            "productive_days": dict(self.productive_days),
            "pets": [
                {
                    "pet_id": p.pet_id,
                    "name": p.pet_name,
                    "completed": p.tasks_completed,
                    "pending": p.tasks_pending,
                    "average_completion_hours": (
                        round(p.average_completion_time / timedelta(hours=1), 1)
                        if p.average_completion_time is not None
                        else None
                    ),
                    "favorite_category": p.favorite_category.value if p.favorite_category else None,
                }
                for p in self.pets
            ],
        }


def _percent(part: int, whole: int) -> float:
    return part / whole * 100 if whole else 0.0


# ---------------------------------------------------------------------------
# Snapshot + pure computations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _Snapshot:
    now: datetime
    pets: list[Pet]
    tasks: list[Task]
    reminders: list[Reminder]


def _take(source: Any) -> list[Any]:
    if source is None:
        return []
    if hasattr(source, "snapshot"):
        return source.snapshot()
    return list(source)


def _local_date(moment: datetime, now: datetime) -> date:
    return moment.astimezone(now.tzinfo).date()


def _period_statistics(snap: _Snapshot, period: Period) -> PeriodStatistics:
    in_period = [t for t in snap.tasks if period.contains(t.due_date)]
    return PeriodStatistics(
        total_tasks=len(in_period),
        completed_tasks=sum(1 for t in in_period if t.is_completed),
        overdue_tasks=sum(1 for t in in_period if t.is_overdue(snap.now)),
        # Enabled at call time, regardless of the window.
        active_reminders=sum(1 for r in snap.reminders if r.is_enabled),
        period=period,
    )


def _pet_statistics(snap: _Snapshot) -> list[PetStatistics]:
    by_pet: dict[str, list[Task]] = {}
    for task in snap.tasks:
        if task.pet_id is not None:
            by_pet.setdefault(task.pet_id, []).append(task)

    results = []
    for pet in snap.pets:
        pet_tasks = by_pet.get(pet.id, [])
        completed = [t for t in pet_tasks if t.is_completed]
        durations = [t.completed_at - t.created_at for t in completed if t.completed_at is not None]
        # most_common keeps first-encountered order among equal counts.
        favorite = Counter(t.category for t in pet_tasks).most_common(1)
        results.append(
            PetStatistics(
                pet_id=pet.id,
                pet_name=pet.name,
                tasks_completed=len(completed),
                tasks_pending=len(pet_tasks) - len(completed),
                average_completion_time=sum(durations, timedelta()) / len(durations) if durations else None,
                favorite_category=favorite[0][0] if favorite else None,
            )
        )
    return results


def _category_statistics(snap: _Snapshot) -> dict[TaskCategory, int]:
    return dict(Counter(t.category for t in snap.tasks))


def _completion_rate(snap: _Snapshot, days: int) -> list[CompletionRatePoint]:
    today = start_of_day(snap.now)
    due_by_day: dict[date, list[Task]] = {}
    for task in snap.tasks:
        if task.due_date is not None:
            due_by_day.setdefault(_local_date(task.due_date, snap.now), []).append(task)

    points = []
    for offset in reversed(range(days)):
        day = (today - offset * ONE_DAY).date()
        due = due_by_day.get(day, [])
        done = sum(1 for t in due if t.is_completed)
        points.append(CompletionRatePoint(day=day, rate=done / len(due) if due else 0.0))
    return points


def _current_streak(snap: _Snapshot, limit: int) -> int:
    completed_days = {
        _local_date(t.due_date, snap.now) for t in snap.tasks if t.is_completed and t.due_date is not None
    }
    day = snap.now.date()
    streak = 0
    while streak < limit and day in completed_days:
        streak += 1
        day -= ONE_DAY
    return streak


def _productive_days(snap: _Snapshot) -> dict[str, int]:
    counts = Counter(
        _local_date(t.completed_at, snap.now).weekday()
        for t in snap.tasks
        if t.is_completed and t.completed_at is not None
    )
    return {name: counts.get(i, 0) for i, name in enumerate(WEEKDAY_NAMES)}


def _average_tasks_per_day(snap: _Snapshot, days: int) -> float:
    since = snap.now - days * ONE_DAY
    return sum(1 for t in snap.tasks if t.created_at >= since) / days


def _check_days(days: int) -> int:
    if not isinstance(days, int) or isinstance(days, bool) or days < 1:
        raise ValidationError("days", f"must be a positive integer, got {days!r}")
    return days


# ---------------------------------------------------------------------------
# Aggregator
# ---------------------------------------------------------------------------


class AnalyticsAggregator:
    """Read-only statistics over injected collections.

    Sources may be repositories (anything with ``snapshot()``) or plain
    iterables of entities.

    Args:
        pets: Pet source.
        tasks: Task source.
        reminders: Reminder source.
        clock: Source of the reference instant; its tzinfo decides where
            days, weeks and months begin.
        window_days: Default N for the completion-rate series and the
            tasks-per-day average.
        streak_limit_days: Hard cap on how far back the streak walk goes.
    """

    def __init__(
        self,
        pets: Iterable[Pet] | Any = None,
        tasks: Iterable[Task] | Any = None,
        reminders: Iterable[Reminder] | Any = None,
        *,
        clock: Clock = utcnow,
        window_days: int = DEFAULT_WINDOW_DAYS,
        streak_limit_days: int = DEFAULT_STREAK_LIMIT_DAYS,
    ) -> None:
        self._pets = pets
        self._tasks = tasks
        self._reminders = reminders
        self._clock = clock
        self.window_days = _check_days(window_days)
        self.streak_limit_days = _check_days(streak_limit_days)

    def _snapshot(self, now: datetime | None = None) -> _Snapshot:
        return _Snapshot(
            now=now or self._clock(),
            pets=_take(self._pets),
            tasks=_take(self._tasks),
            reminders=_take(self._reminders),
        )

    @staticmethod
    def week_of(moment: datetime) -> Period:
        start = start_of_week(moment)
        return Period(start, start + 7 * ONE_DAY)

    @staticmethod
    def month_of(moment: datetime) -> Period:
        start = start_of_month(moment)
        return Period(start, add_months(start, 1))

    def weekly_statistics(self, now: datetime | None = None) -> PeriodStatistics:
        snap = self._snapshot(now)
        return _period_statistics(snap, self.week_of(snap.now))

    def monthly_statistics(self, now: datetime | None = None) -> PeriodStatistics:
        snap = self._snapshot(now)
        return _period_statistics(snap, self.month_of(snap.now))

    def pet_statistics(self) -> list[PetStatistics]:
        return _pet_statistics(self._snapshot())

    def category_statistics(self) -> dict[TaskCategory, int]:
        return _category_statistics(self._snapshot())

    def completion_rate_over_time(self, days: int | None = None) -> list[CompletionRatePoint]:
        """Daily completion rate for the last *days* days, oldest first, today last."""
        return _completion_rate(self._snapshot(), _check_days(self.window_days if days is None else days))

    def current_streak(self) -> int:
        """Consecutive days, ending today, with at least one completed task due that day."""
        return _current_streak(self._snapshot(), self.streak_limit_days)

    def most_productive_days(self) -> dict[str, int]:
        """Completed-task counts by weekday of completion, Monday first."""
        return _productive_days(self._snapshot())

    def average_tasks_per_day(self, days: int | None = None) -> float:
        return _average_tasks_per_day(self._snapshot(), _check_days(self.window_days if days is None else days))

    def report(self) -> StatisticsReport:
        snap = self._snapshot()
        return StatisticsReport(
            generated_at=snap.now,
            weekly=_period_statistics(snap, self.week_of(snap.now)),
            monthly=_period_statistics(snap, self.month_of(snap.now)),
            pets=_pet_statistics(snap),
            categories=_category_statistics(snap),
            completion_rate=_completion_rate(snap, self.window_days),
            current_streak=_current_streak(snap, self.streak_limit_days),
            productive_days=_productive_days(snap),
            average_tasks_per_day=_average_tasks_per_day(snap, self.window_days),
        )

    async def build_report(self) -> StatisticsReport:
        """Same as :meth:`report` but yields between sections.

        Cancelling the awaiting task abandons the build; no partial report
        is ever returned.
        """
        snap = self._snapshot()
        weekly = _period_statistics(snap, self.week_of(snap.now))
        monthly = _period_statistics(snap, self.month_of(snap.now))
        await asyncio.sleep(0)
        pets = _pet_statistics(snap)
        categories = _category_statistics(snap)
        await asyncio.sleep(0)
        series = _completion_rate(snap, self.window_days)
        await asyncio.sleep(0)
        streak = _current_streak(snap, self.streak_limit_days)
        productive = _productive_days(snap)
        average = _average_tasks_per_day(snap, self.window_days)
        return StatisticsReport(
            generated_at=snap.now,
            weekly=weekly,
            monthly=monthly,
            pets=pets,
            categories=categories,
            completion_rate=series,
            current_streak=streak,
            productive_days=productive,
            average_tasks_per_day=average,
        )
