"""Status derivation.

Pure, stateless classification of entities against a reference instant.
Branches are evaluated in a fixed order and the first match wins.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from petcare.core.utils.dt import whole_days_between
from petcare.enums import MedicationStatus, VaccineStatus
from petcare.scheduling.recurrence import next_trigger

if TYPE_CHECKING:
    from petcare.models import Medication, Reminder, Task, Vaccine

DUE_SOON_DAYS = 7
ENDING_SOON_DAYS = 3


# ── Tasks ────────────────────────────────────────────────────────────


def task_is_overdue(task: Task, now: datetime) -> bool:
    """Due date present, not completed, and strictly before *now*."""
    return task.due_date is not None and not task.is_completed and task.due_date < now


def days_until_due(task: Task, now: datetime) -> int | None:
    if task.due_date is None:
        return None
    return whole_days_between(now, task.due_date)


# ── Reminders ────────────────────────────────────────────────────────


def reminder_is_past_due(reminder: Reminder, now: datetime) -> bool:
    return reminder.is_enabled and reminder.scheduled_date < now


def reminder_next_trigger(reminder: Reminder, now: datetime) -> datetime | None:
    """When the reminder should fire next.

    One-shot reminders fire at their scheduled date while enabled. Repeating
    reminders fire at the first repetition at or after *now*.
    """
    if not reminder.is_repeating or reminder.repeat_interval is None:
        return reminder.scheduled_date if reminder.is_enabled else None
    return next_trigger(reminder.scheduled_date, reminder.repeat_interval, now)


# ── Vaccines ─────────────────────────────────────────────────────────


def vaccine_is_overdue(vaccine: Vaccine, now: datetime) -> bool:
    return vaccine.next_due_date is not None and not vaccine.is_completed and vaccine.next_due_date < now


def vaccine_days_until_next(vaccine: Vaccine, now: datetime) -> int | None:
    if vaccine.next_due_date is None:
        return None
    return whole_days_between(now, vaccine.next_due_date)


def vaccine_status(vaccine: Vaccine, now: datetime, due_soon_days: int = DUE_SOON_DAYS) -> VaccineStatus:
    if vaccine.is_completed:
        return VaccineStatus.COMPLETED
    if vaccine_is_overdue(vaccine, now):
        return VaccineStatus.OVERDUE
    days = vaccine_days_until_next(vaccine, now)
    if days is not None and days <= due_soon_days:
        return VaccineStatus.DUE_SOON
    return VaccineStatus.UPCOMING


# ── Medications ──────────────────────────────────────────────────────


def medication_is_overdue(medication: Medication, now: datetime) -> bool:
    return medication.is_active and medication.next_dose_date is not None and medication.next_dose_date < now


def medication_days_remaining(medication: Medication, now: datetime) -> int | None:
    if medication.end_date is None:
        return None
    return max(0, whole_days_between(now, medication.end_date))


def medication_status(
    medication: Medication,
    now: datetime,
    ending_soon_days: int = ENDING_SOON_DAYS,
) -> MedicationStatus:
    if not medication.is_active:
        return MedicationStatus.INACTIVE
    if medication.is_completed:
        return MedicationStatus.COMPLETED
    if medication_is_overdue(medication, now):
        return MedicationStatus.OVERDUE
    days = medication_days_remaining(medication, now)
    if days is not None and days <= ending_soon_days:
        return MedicationStatus.ENDING_SOON
    return MedicationStatus.ACTIVE
