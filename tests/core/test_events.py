"""Tests for petcare.core.events: EventBus and Event."""

from __future__ import annotations

import asyncio
from dataclasses import FrozenInstanceError

import pytest

from petcare.core.events import TASKS_CHANGED, Event, EventBus, changed_event

pytestmark = pytest.mark.smoke


async def test_on_off_emit_lifecycle():
    bus = EventBus()
    received: list[Event] = []

    def hook(event: Event) -> None:
        received.append(event)

    bus.on("test.event", hook)
    evt = Event(name="test.event", payload={"k": "v"}, source="test")
    await bus.emit(evt)

    assert received == [evt]

    bus.off("test.event", hook)
    await bus.emit(evt)

    assert len(received) == 1


def test_off_unknown_hook_is_ignored():
    EventBus().off("never.registered", print)


async def test_wildcard_hooks_receive_all_events():
    bus = EventBus()
    received: list[str] = []
    bus.on_all(lambda event: received.append(event.name))

    await bus.emit(Event(name="alpha"))
    await bus.emit(Event(name="beta"))

    assert received == ["alpha", "beta"]


async def test_async_hooks_awaited():
    bus = EventBus()
    received: list[Event] = []

    async def async_hook(event: Event) -> None:
        await asyncio.sleep(0)
        received.append(event)

    bus.on("async.event", async_hook)
    await bus.emit(Event(name="async.event"))
    assert len(received) == 1


async def test_sync_hook_returning_coroutine_is_awaited():
    bus = EventBus()
    received: list[str] = []

    async def later(event: Event) -> None:
        received.append(event.name)

    bus.on("wrapped", lambda event: later(event))
    await bus.emit(Event(name="wrapped"))
    assert received == ["wrapped"]


async def test_hook_exception_does_not_block_others():
    bus = EventBus()
    received: list[str] = []

    def bad_hook(event: Event) -> None:
        raise RuntimeError("boom")

    async def good_hook(event: Event) -> None:
        received.append("ok")

    bus.on("err.event", bad_hook)
    bus.on("err.event", good_hook)

    await bus.emit(Event(name="err.event"))
    assert received == ["ok"]


def test_changed_event_names():
    assert changed_event("tasks") == TASKS_CHANGED


def test_event_is_frozen():
    evt = Event(name="frozen.test", payload={"x": 1}, source="test")
    with pytest.raises(FrozenInstanceError):
        evt.name = "changed"  # type: ignore[misc]
