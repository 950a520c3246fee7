"""Tests for petcare.analytics.service."""

import asyncio
from datetime import timedelta

import pytest

from petcare.analytics import AnalyticsAggregator, StatisticsService
from petcare.core.events import STATISTICS_UPDATED
from petcare.models import Task


@pytest.fixture
def aggregator(pet_repo, task_repo, reminder_repo, clock):
    return AnalyticsAggregator(pet_repo, task_repo, reminder_repo, clock=clock)


@pytest.fixture
def published():
    return []


@pytest.fixture
async def service(aggregator, bus, published):
    svc = StatisticsService(aggregator, bus, debounce_seconds=0.05)
    svc.subscribe(lambda event: published.append(event.payload["report"]))
    svc.start()
    yield svc
    await svc.stop()


class FailingAggregator:
    async def build_report(self):
        raise RuntimeError("boom")


class TestStatisticsService:
    async def test_burst_of_changes_publishes_once(self, service, task_repo, now, published):
        for i in range(3):
            await task_repo.add(Task.create(f"Task {i}", due_date=now + timedelta(hours=i), now=now))

        report = await service.wait_idle()

        assert len(published) == 1
        assert report is published[0]
        assert report.weekly.total_tasks == 3

    async def test_refresh(self, service, task_repo, now, published):
        await task_repo.add(Task.create("Walk", due_date=now, now=now))
        report = await service.refresh()
        assert report is not None
        assert report.weekly.total_tasks == 1
        assert service.latest is report
        assert published == [report]

    async def test_superseded_refresh_returns_none(self, service, published):
        first = asyncio.create_task(service.refresh())
        await asyncio.sleep(0)
        service.schedule(delay=0)

        assert await first is None
        report = await service.wait_idle()
        assert published == [report]

    async def test_stop_discards_pending_recompute(self, aggregator, bus, task_repo, now, published):
        svc = StatisticsService(aggregator, bus, debounce_seconds=10)
        svc.subscribe(lambda event: published.append(event))
        svc.start()
        await task_repo.add(Task.create("Walk", due_date=now, now=now))

        await svc.stop()

        assert published == []
        assert svc.latest is None
        await task_repo.add(Task.create("Feed", due_date=now, now=now))
        assert await svc.wait_idle() is None

    async def test_failed_recompute_publishes_nothing(self, bus, recorder):
        svc = StatisticsService(FailingAggregator(), bus, debounce_seconds=0)
        assert await svc.refresh() is None
        assert STATISTICS_UPDATED not in recorder.names
        assert svc.latest is None

    async def test_start_is_idempotent(self, service, task_repo, now, published):
        service.start()
        await task_repo.add(Task.create("Walk", due_date=now, now=now))
        await service.wait_idle()
        assert len(published) == 1
