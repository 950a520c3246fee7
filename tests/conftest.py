"""Shared test fixtures for petcare."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from petcare.core.events import Event, EventBus
from petcare.notifications import InMemoryNotifier
from petcare.persistence import InMemoryPersistence
from petcare.repositories import (
    MedicationRepository,
    PetRepository,
    ReminderRepository,
    TaskRepository,
    VaccineRepository,
)

# Wednesday, 11 March 2026, 09:00 UTC
NOW = datetime(2026, 3, 11, 9, 0, tzinfo=UTC)


class FakeClock:
    """Callable clock pinned to a fixed instant until advanced."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


class FlakyPersistence(InMemoryPersistence):
    """In-memory port whose saves can be made to fail or stall."""

    def __init__(self, initial: dict[str, list[dict[str, Any]]] | None = None) -> None:
        super().__init__(initial)
        self.fail_saves = False
        self.save_delay = 0.0

    async def save(self, kind: str, entities: list[Any]) -> None:
        if self.save_delay:
            await asyncio.sleep(self.save_delay)
        if self.fail_saves:
            raise OSError("disk full")
        await super().save(kind, entities)


class Recorder:
    """Event hook that remembers what it saw."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    def __call__(self, event: Event) -> None:
        self.events.append(event)

    @property
    def names(self) -> list[str]:
        return [e.name for e in self.events]


@pytest.fixture
def tmp_dir(tmp_path):
    """A temporary directory path as a string."""
    return str(tmp_path)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def persistence():
    return FlakyPersistence()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def recorder(bus):
    rec = Recorder()
    bus.on_all(rec)
    return rec


@pytest.fixture
def notifier():
    return InMemoryNotifier()


@pytest.fixture
def pet_repo(persistence, bus, clock):
    return PetRepository(persistence, bus=bus, clock=clock, timeout=1.0)


@pytest.fixture
def task_repo(persistence, bus, clock):
    return TaskRepository(persistence, bus=bus, clock=clock, timeout=1.0)


@pytest.fixture
def reminder_repo(persistence, bus, clock, notifier, pet_repo):
    return ReminderRepository(persistence, notifier=notifier, pets=pet_repo, bus=bus, clock=clock, timeout=1.0)


@pytest.fixture
def vaccine_repo(persistence, bus, clock):
    return VaccineRepository(persistence, bus=bus, clock=clock, timeout=1.0)


@pytest.fixture
def medication_repo(persistence, bus, clock):
    return MedicationRepository(persistence, bus=bus, clock=clock, timeout=1.0)


@pytest.fixture
def now(clock):
    return clock.now
