"""Coalesced, cancellable statistics recomputation.

``StatisticsService`` listens for pet, task and reminder changes. A burst of
changes arriving within ``debounce_seconds`` of each other produces one
recompute. A change arriving while a recompute is running cancels it and
starts over, so listeners only ever see reports built from a settled
snapshot.
"""

from __future__ import annotations

import asyncio

from loguru import logger

from petcare.core.events import (
    PETS_CHANGED,
    REMINDERS_CHANGED,
    STATISTICS_UPDATED,
    TASKS_CHANGED,
    Event,
    EventBus,
    Hook,
)

from .aggregator import AnalyticsAggregator, StatisticsReport

WATCHED_EVENTS = (PETS_CHANGED, TASKS_CHANGED, REMINDERS_CHANGED)


class StatisticsService:
    def __init__(
        self,
        aggregator: AnalyticsAggregator,
        bus: EventBus,
        *,
        debounce_seconds: float = 0.5,
    ) -> None:
        self.aggregator = aggregator
        self.bus = bus
        self.debounce_seconds = debounce_seconds
        self.latest: StatisticsReport | None = None
        self._task: asyncio.Task[StatisticsReport | None] | None = None
        self._started = False

    # -- Lifecycle -----------------------------------------------------------

    def start(self) -> None:
        if self._started:
            return
        for name in WATCHED_EVENTS:
            self.bus.on(name, self._on_change)
        self._started = True

    async def stop(self) -> None:
        for name in WATCHED_EVENTS:
            self.bus.off(name, self._on_change)
        self._started = False
        await self._cancel_pending()

    def subscribe(self, listener: Hook) -> None:
        """Call *listener* with a ``statistics.updated`` event per published report."""
        self.bus.on(STATISTICS_UPDATED, listener)

    # -- Recompute -----------------------------------------------------------

    def _on_change(self, event: Event) -> None:
        logger.debug(f"Statistics invalidated by {event.name}")
        self.schedule()

    def schedule(self, delay: float | None = None) -> asyncio.Task[StatisticsReport | None]:
        """Restart the debounce window and return the recompute task."""
        if self._task is not None and not self._task.done():
            logger.debug("Coalescing statistics recompute")
            self._task.cancel()
        self._task = asyncio.create_task(self._run(self.debounce_seconds if delay is None else delay))
        return self._task

    async def _run(self, delay: float) -> StatisticsReport | None:
        if delay > 0:
            await asyncio.sleep(delay)
        try:
            report = await self.aggregator.build_report()
        except Exception as e:
            logger.warning(f"Statistics recompute failed: {e}")
            return None
        self.latest = report
        await self.bus.emit(Event(name=STATISTICS_UPDATED, payload={"report": report}, source="statistics"))
        return report

    async def refresh(self) -> StatisticsReport | None:
        """Recompute now and wait for the result.

        Returns None if a newer change superseded this recompute.
        """
        task = self.schedule(delay=0)
        try:
            return await task
        except asyncio.CancelledError:
            if task.cancelled() and asyncio.current_task().cancelling() == 0:
                return None
            raise

    async def wait_idle(self) -> StatisticsReport | None:
        """Wait for the pending recompute, following any that replace it."""
        while self._task is not None:
            task = self._task
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
            if task is self._task:
                break
        return self.latest

    async def _cancel_pending(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
