"""Entity records: pets and everything scheduled for them.

Records are plain dataclasses validated on construction. Derived state
(overdue, status, next trigger) is computed on demand from a reference
instant and never stored, except for the roll-forward fields
``Task.next_due_date`` and ``Medication.next_dose_date``.
"""

from petcare.enums import (
    MedicationFrequency,
    MedicationStatus,
    PetType,
    RecurrenceType,
    RepeatType,
    TaskCategory,
    TaskPriority,
    VaccineStatus,
    VaccineType,
)
from petcare.scheduling.recurrence import RecurrenceRule

from .medication import Medication
from .pet import Pet
from .reminder import Reminder
from .task import Task
from .vaccine import Vaccine

__all__ = [
    "Medication",
    "MedicationFrequency",
    "MedicationStatus",
    "Pet",
    "PetType",
    "RecurrenceRule",
    "RecurrenceType",
    "Reminder",
    "RepeatType",
    "Task",
    "TaskCategory",
    "TaskPriority",
    "Vaccine",
    "VaccineStatus",
    "VaccineType",
]
