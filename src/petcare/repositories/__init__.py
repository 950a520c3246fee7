"""Entity repositories backed by the persistence port."""

from .base import Repository
from .health import MedicationRepository, VaccineRepository
from .pets import PetRepository
from .reminders import ReminderRepository
from .tasks import TaskFilter, TaskRepository, TaskSort, apply_filter, sort_tasks

__all__ = [
    "MedicationRepository",
    "PetRepository",
    "ReminderRepository",
    "Repository",
    "TaskFilter",
    "TaskRepository",
    "TaskSort",
    "VaccineRepository",
    "apply_filter",
    "sort_tasks",
]
