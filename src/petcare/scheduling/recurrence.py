"""Recurrence calculator.

Three independent schedules live here:

* task recurrence rules ({type, interval}) rolled forward from an anchor,
* the fixed medication frequency table,
* reminder re-triggering at a constant spacing in seconds.

Month and year steps use ``relativedelta`` so that Jan 31 + 1 month clamps to
the end of February instead of spilling into March.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from dateutil.relativedelta import relativedelta

from petcare.core.exceptions import InvalidRuleError
from petcare.enums import MedicationFrequency, RecurrenceType


@dataclass(frozen=True)
class RecurrenceRule:
    """How far a recurring task's due date advances after each completion."""

    type: RecurrenceType
    interval: int = 1

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "type", RecurrenceType(self.type))
        except ValueError as e:
            raise InvalidRuleError("recurrence_type", f"unknown recurrence type {self.type!r}") from e
        if isinstance(self.interval, bool) or not isinstance(self.interval, int):
            raise InvalidRuleError("interval", f"interval must be an integer, got {self.interval!r}")
        if self.interval < 1:
            raise InvalidRuleError("interval", f"interval must be >= 1, got {self.interval}")

    @property
    def step(self) -> relativedelta:
        """The calendar offset of one occurrence."""
        n = self.interval
        match self.type:
            case RecurrenceType.DAILY | RecurrenceType.CUSTOM:
                return relativedelta(days=n)
            case RecurrenceType.WEEKLY:
                return relativedelta(weeks=n)
            case RecurrenceType.MONTHLY:
                return relativedelta(months=n)
            case RecurrenceType.YEARLY:
                return relativedelta(years=n)
        raise InvalidRuleError("recurrence_type", f"unknown recurrence type {self.type!r}")


def next_occurrence(anchor: datetime, rule: RecurrenceRule) -> datetime:
    """Return the occurrence one rule step after *anchor*."""
    return anchor + rule.step


_DOSE_STEP: dict[MedicationFrequency, relativedelta | None] = {
    MedicationFrequency.ONCE_DAILY: relativedelta(days=1),
    MedicationFrequency.TWICE_DAILY: relativedelta(hours=12),
    MedicationFrequency.THREE_TIMES_DAILY: relativedelta(hours=8),
    MedicationFrequency.EVERY_OTHER_DAY: relativedelta(days=2),
    MedicationFrequency.WEEKLY: relativedelta(weeks=1),
    MedicationFrequency.MONTHLY: relativedelta(months=1),
    MedicationFrequency.AS_NEEDED: None,
    MedicationFrequency.CUSTOM: None,
}


def next_dose(frequency: MedicationFrequency, after: datetime) -> datetime | None:
    """Next dose time for a medication taken at *after*.

    As-needed and custom schedules have no computable next dose.
    """
    step = _DOSE_STEP[MedicationFrequency(frequency)]
    if step is None:
        return None
    return after + step


def repeat_interval_delta(repeat_interval: float) -> timedelta:
    """Validate a reminder repeat interval (seconds) and return it as a timedelta."""
    if isinstance(repeat_interval, bool) or not isinstance(repeat_interval, int | float):
        raise InvalidRuleError("repeat_interval", f"repeat interval must be a number, got {repeat_interval!r}")
    interval = timedelta(seconds=repeat_interval)
    if interval <= timedelta(0):
        raise InvalidRuleError("repeat_interval", f"repeat interval must be > 0, got {repeat_interval}")
    return interval


def next_trigger(scheduled: datetime, repeat_interval: float, now: datetime) -> datetime:
    """Smallest ``scheduled + k * repeat_interval`` (k >= 0) that is >= *now*.

    Closed form: the number of whole intervals to skip is the ceiling of the
    elapsed time over the interval, so the cost does not depend on how far in
    the past *scheduled* lies.
    """
    interval = repeat_interval_delta(repeat_interval)
    # Absolute time: same-zone aware datetimes subtract as wall clock across DST.
    start = scheduled.astimezone(UTC)
    elapsed = now.astimezone(UTC) - start
    if elapsed <= timedelta(0):
        return scheduled
    steps = -(-elapsed // interval)
    return (start + steps * interval).astimezone(scheduled.tzinfo)
