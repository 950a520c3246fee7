"""Enumerations shared by the entity models, scheduling and statistics.

Values are stable lowercase identifiers; they are what the codec persists.
"""

from __future__ import annotations

from enum import StrEnum


class PetType(StrEnum):
    DOG = "dog"
    CAT = "cat"
    BIRD = "bird"
    FISH = "fish"
    RABBIT = "rabbit"
    HAMSTER = "hamster"
    OTHER = "other"


class TaskCategory(StrEnum):
    FEEDING = "feeding"
    WALKING = "walking"
    GROOMING = "grooming"
    VET = "vet"
    MEDICATION = "medication"
    TRAINING = "training"
    CLEANING = "cleaning"
    OTHER = "other"


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        """Sort rank, most pressing first."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    TaskPriority.URGENT: 0,
    TaskPriority.HIGH: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 3,
}


class RecurrenceType(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"  # interval counted in days


class RepeatType(StrEnum):
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @property
    def seconds(self) -> int:
        """Fixed spacing in seconds. Months and years are approximations."""
        return _REPEAT_SECONDS[self]


_REPEAT_SECONDS = {
    RepeatType.HOURLY: 3600,
    RepeatType.DAILY: 86400,
    RepeatType.WEEKLY: 604800,
    RepeatType.MONTHLY: 2592000,  # 30 days
    RepeatType.YEARLY: 31536000,  # 365 days
}


class VaccineType(StrEnum):
    RABIES = "rabies"
    DISTEMPER = "distemper"
    PARVOVIRUS = "parvovirus"
    BORDETELLA = "bordetella"
    LEPTOSPIROSIS = "leptospirosis"
    FELINE_LEUKEMIA = "feline_leukemia"
    FELINE_HERPESVIRUS = "feline_herpesvirus"
    FELINE_CALICIVIRUS = "feline_calicivirus"
    OTHER = "other"

    @property
    def applicable_pet_types(self) -> tuple[PetType, ...]:
        if self in (
            VaccineType.RABIES,
            VaccineType.DISTEMPER,
            VaccineType.PARVOVIRUS,
            VaccineType.BORDETELLA,
            VaccineType.LEPTOSPIROSIS,
        ):
            return (PetType.DOG,)
        if self in (
            VaccineType.FELINE_LEUKEMIA,
            VaccineType.FELINE_HERPESVIRUS,
            VaccineType.FELINE_CALICIVIRUS,
        ):
            return (PetType.CAT,)
        return tuple(PetType)


class VaccineStatus(StrEnum):
    COMPLETED = "completed"
    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    UPCOMING = "upcoming"


class MedicationFrequency(StrEnum):
    ONCE_DAILY = "once_daily"
    TWICE_DAILY = "twice_daily"
    THREE_TIMES_DAILY = "three_times_daily"
    EVERY_OTHER_DAY = "every_other_day"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    AS_NEEDED = "as_needed"
    CUSTOM = "custom"


class MedicationStatus(StrEnum):
    INACTIVE = "inactive"
    COMPLETED = "completed"
    OVERDUE = "overdue"
    ENDING_SOON = "ending_soon"
    ACTIVE = "active"
