"""Event bus for change notification.

Repositories publish a ``<kind>.changed`` event after every successful
mutation; dependent views (statistics, dashboard) subscribe instead of
polling. Hooks can be sync or async.

Usage::

    from petcare.core.events import EventBus, Event, TASKS_CHANGED

    bus = EventBus()

    async def refresh(event: Event) -> None:
        print(f"tasks changed: {event.payload}")

    bus.on(TASKS_CHANGED, refresh)
    await bus.emit(Event(name=TASKS_CHANGED, payload={"action": "added", "ids": ["t1"]}, source="tasks"))
"""

from __future__ import annotations

import asyncio
import inspect
from collections import defaultdict
from dataclasses import dataclass, field
from time import time
from typing import Any

from loguru import logger

# ---------------------------------------------------------------------------
# Well-known event names
# ---------------------------------------------------------------------------

PETS_CHANGED = "pets.changed"
TASKS_CHANGED = "tasks.changed"
REMINDERS_CHANGED = "reminders.changed"
VACCINES_CHANGED = "vaccines.changed"
MEDICATIONS_CHANGED = "medications.changed"
STATISTICS_UPDATED = "statistics.updated"
SYNC_COMPLETE = "sync.complete"


def changed_event(kind: str) -> str:
    """Event name published when the *kind* collection changes."""
    return f"{kind}.changed"


# Type alias for hook callables (sync or async)
Hook = Any  # Callable[[Event], None] | Callable[[Event], Awaitable[None]]


# ---------------------------------------------------------------------------
# Event model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Event:
    """An immutable event that flows through the bus."""

    name: str
    payload: dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time)
    source: str = ""


# ---------------------------------------------------------------------------
# EventBus
# ---------------------------------------------------------------------------


class EventBus:
    """Simple pub/sub event bus supporting sync and async hooks."""

    def __init__(self) -> None:
        self._hooks: dict[str, list[Hook]] = defaultdict(list)
        self._wildcard_hooks: list[Hook] = []

    def on(self, event_name: str, hook: Hook) -> None:
        """Register *hook* for a specific event name."""
        self._hooks[event_name].append(hook)

    def on_all(self, hook: Hook) -> None:
        """Register *hook* for all events (wildcard)."""
        self._wildcard_hooks.append(hook)

    def off(self, event_name: str, hook: Hook) -> None:
        """Unregister *hook* from a specific event name."""
        try:
            self._hooks[event_name].remove(hook)
        except ValueError:
            pass

    async def emit(self, event: Event) -> None:
        """Emit an event, running all matching hooks.

        A failing hook is logged and does not stop the remaining hooks, nor
        does it propagate to the publisher: the mutation that produced the
        event has already been committed.
        """
        hooks = list(self._hooks.get(event.name, []))
        hooks.extend(self._wildcard_hooks)
        for hook in hooks:
            try:
                if inspect.iscoroutinefunction(hook):
                    await hook(event)
                else:
                    result = hook(event)
                    if asyncio.iscoroutine(result):
                        await result
            except Exception as exc:
                logger.warning(f"Event hook failed for {event.name}: {exc}")
