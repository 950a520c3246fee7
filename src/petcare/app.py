"""Composition root.

``PetCareApp`` wires storage, repositories, notification scheduling,
analytics and sync from a :class:`~petcare.core.config.Config`. Every
collaborator can be overridden, which is how tests swap in in-memory ports.
"""

from __future__ import annotations

import os
from typing import Any

from loguru import logger

from petcare.analytics import AnalyticsAggregator, DashboardSummary, StatisticsReport, StatisticsService
from petcare.core.config import Config
from petcare.core.events import EventBus
from petcare.core.storage import LocalStorage
from petcare.core.utils.dt import Clock, utcnow
from petcare.notifications import InMemoryNotifier
from petcare.persistence import StoragePersistence, export_snapshot, import_snapshot
from petcare.ports import CloudSyncPort, NotificationPort, PersistencePort
from petcare.repositories import (
    MedicationRepository,
    PetRepository,
    ReminderRepository,
    Repository,
    TaskRepository,
    VaccineRepository,
)
from petcare.sync import SyncService


class PetCareApp:
    def __init__(
        self,
        config: Config | None = None,
        *,
        persistence: PersistencePort | None = None,
        notifier: NotificationPort | None = None,
        cloud: CloudSyncPort | None = None,
        bus: EventBus | None = None,
        clock: Clock = utcnow,
    ) -> None:
        self.config = config or Config()
        settings = self.config.validated()
        self.settings = settings
        self.clock = clock
        self.bus = bus or EventBus()

        if persistence is None:
            storage_dir = settings.paths.storage_dir or settings.paths.data_dir / "storage"
            persistence = StoragePersistence(LocalStorage(os.fspath(storage_dir)), compress=settings.storage.compress)
        self.persistence = persistence
        self.notifier = notifier or InMemoryNotifier()

        common: dict[str, Any] = {"bus": self.bus, "clock": clock, "timeout": settings.storage.timeout}
        self.pets = PetRepository(persistence, **common)
        self.tasks = TaskRepository(persistence, **common)
        self.reminders = ReminderRepository(
            persistence,
            notifier=self.notifier,
            pets=self.pets,
            default_body=settings.notifications.default_body,
            **common,
        )
        self.vaccines = VaccineRepository(persistence, **common)
        self.medications = MedicationRepository(persistence, **common)

        self.analytics = AnalyticsAggregator(
            self.pets,
            self.tasks,
            self.reminders,
            clock=clock,
            window_days=settings.analytics.window_days,
            streak_limit_days=settings.analytics.streak_limit_days,
        )
        self.statistics = StatisticsService(
            self.analytics, self.bus, debounce_seconds=settings.analytics.debounce_seconds
        )
        self.sync = SyncService(
            cloud, self.pets, self.tasks, self.reminders, enabled=settings.sync.enabled, bus=self.bus
        )

    @property
    def repositories(self) -> tuple[Repository, ...]:
        return (self.pets, self.tasks, self.reminders, self.vaccines, self.medications)

    async def load(self) -> None:
        """Load every collection and re-arm reminder notifications."""
        for repo in self.repositories:
            await repo.load()
        await self.reminders.reschedule_all()
        logger.info(f"PetCare loaded: {len(self.pets)} pets, {len(self.tasks)} tasks, {len(self.reminders)} reminders")

    async def start(self) -> None:
        """Load data and begin recomputing statistics on change."""
        await self.load()
        self.statistics.start()

    async def close(self) -> None:
        await self.statistics.stop()

    def dashboard(self) -> DashboardSummary:
        return DashboardSummary.collect(
            self.pets, self.tasks, self.reminders, upcoming_limit=self.settings.analytics.upcoming_limit
        )

    def report(self) -> StatisticsReport:
        return self.analytics.report()

    async def export_data(self) -> dict[str, Any]:
        return await export_snapshot(self.persistence, self.clock())

    async def import_data(self, data: dict[str, Any]) -> dict[str, int]:
        """Replace stored collections from an export and reload them."""
        counts = await import_snapshot(self.persistence, data)
        await self.load()
        return counts
