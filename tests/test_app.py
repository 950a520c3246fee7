"""Tests for petcare.app."""

from datetime import timedelta
from pathlib import Path

import pytest

from petcare.app import PetCareApp
from petcare.core.config import Config
from petcare.core.events import STATISTICS_UPDATED, TASKS_CHANGED
from petcare.core.exceptions import ConfigurationError, PersistenceError
from petcare.models import Pet, Reminder, Task
from petcare.notifications import InMemoryNotifier
from petcare.persistence import InMemoryPersistence, StoragePersistence
from petcare.sync import InMemoryCloud


@pytest.fixture
def config(tmp_dir):
    return Config(data_dir=tmp_dir, env_prefix="")


@pytest.fixture
def app(config, clock):
    return PetCareApp(config, clock=clock)


class TestWiring:
    def test_defaults_to_file_storage(self, app, tmp_dir):
        assert isinstance(app.persistence, StoragePersistence)
        assert app.persistence.backend.base_path == (Path(tmp_dir) / "storage").resolve()
        assert isinstance(app.notifier, InMemoryNotifier)
        assert len(app.repositories) == 5

    def test_settings_flow_into_collaborators(self, config, clock):
        config.set("analytics.window_days", 7)
        config.set("analytics.debounce_seconds", 0)
        app = PetCareApp(config, persistence=InMemoryPersistence(), clock=clock)
        assert app.analytics.window_days == 7
        assert app.statistics.debounce_seconds == 0
        assert not app.sync.available

    def test_sync_enabled_with_cloud(self, config, clock):
        config.set("sync.enabled", True)
        app = PetCareApp(config, persistence=InMemoryPersistence(), cloud=InMemoryCloud(), clock=clock)
        assert app.sync.available

    def test_invalid_config(self, config):
        config.set("storage.timeout", -1)
        with pytest.raises(ConfigurationError):
            PetCareApp(config)


class TestLifecycle:
    async def test_data_survives_restart(self, config, clock):
        first = PetCareApp(config, clock=clock)
        await first.load()
        rex = await first.pets.add(Pet.create("Rex", now=clock.now))
        walk = Task.create("Walk", pet_id=rex.id, due_date=clock.now + timedelta(hours=1), now=clock.now)
        await first.tasks.add(walk)

        second = PetCareApp(config, clock=clock)
        await second.load()
        assert [p.name for p in second.pets.items] == ["Rex"]
        assert second.dashboard().todays_pending_count == 1

    async def test_load_rearms_reminders(self, config, clock):
        persistence = InMemoryPersistence()
        seed = PetCareApp(config, persistence=persistence, clock=clock)
        await seed.reminders.add(Reminder.create("Dinner", clock.now + timedelta(hours=8), now=clock.now))
        muted = Reminder.create("Off", clock.now + timedelta(hours=8), is_enabled=False, now=clock.now)
        await seed.reminders.add(muted)

        notifier = InMemoryNotifier()
        app = PetCareApp(config, persistence=persistence, notifier=notifier, clock=clock)
        await app.load()

        assert len(notifier.pending) == 1
        (scheduled,) = notifier.pending.values()
        assert scheduled.payload.title == "Dinner"

    async def test_start_publishes_statistics(self, config, clock):
        config.set("analytics.debounce_seconds", 0)
        app = PetCareApp(config, persistence=InMemoryPersistence(), clock=clock)
        await app.start()
        seen = []
        app.bus.on(STATISTICS_UPDATED, seen.append)
        app.bus.on(TASKS_CHANGED, seen.append)
        try:
            await app.tasks.add(Task.create("Walk", due_date=clock.now, now=clock.now))
            report = await app.statistics.wait_idle()
        finally:
            await app.close()
        assert report.weekly.total_tasks == 1
        assert [e.name for e in seen] == [TASKS_CHANGED, STATISTICS_UPDATED]


class TestExportImport:
    async def test_round_trip_between_apps(self, config, clock, tmp_path):
        source = PetCareApp(config, persistence=InMemoryPersistence(), clock=clock)
        rex = await source.pets.add(Pet.create("Rex", now=clock.now))
        await source.tasks.add(Task.create("Walk", pet_id=rex.id, now=clock.now))
        data = await source.export_data()
        assert data["export_date"] == clock.now.isoformat()

        target = PetCareApp(Config(data_dir=str(tmp_path / "other"), env_prefix=""), clock=clock)
        await target.load()
        counts = await target.import_data(data)

        assert counts["pets"] == 1
        assert counts["tasks"] == 1
        assert target.pets.get(rex.id).name == "Rex"
        assert len(target.tasks) == 1

    async def test_bad_import_keeps_existing_data(self, app, clock):
        await app.load()
        await app.pets.add(Pet.create("Rex", now=clock.now))
        with pytest.raises(PersistenceError):
            await app.import_data({"pets": [{"id": "p1", "name": ""}]})
        await app.load()
        assert [p.name for p in app.pets.items] == ["Rex"]
