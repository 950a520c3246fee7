"""Medication courses."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime

from petcare.core.exceptions import ValidationError
from petcare.core.utils.dt import utcnow
from petcare.enums import MedicationFrequency, MedicationStatus
from petcare.scheduling import status as derive
from petcare.scheduling.recurrence import next_dose

from .ids import new_id
from .validation import coerce_enum, optional_text, require_datetime, require_text

MAX_NAME_LENGTH = 100
MAX_DOSAGE_LENGTH = 50
MAX_INSTRUCTIONS_LENGTH = 500


@dataclass
class Medication:
    id: str
    pet_id: str
    name: str
    dosage: str
    frequency: MedicationFrequency
    start_date: datetime
    end_date: datetime | None = None
    instructions: str | None = None
    prescribed_by: str | None = None
    is_active: bool = True
    is_completed: bool = False
    next_dose_date: datetime | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        self.frequency = coerce_enum("frequency", MedicationFrequency, self.frequency)
        require_text("pet_id", self.pet_id, 200)
        require_text("name", self.name, MAX_NAME_LENGTH)
        require_text("dosage", self.dosage, MAX_DOSAGE_LENGTH)
        optional_text("instructions", self.instructions, MAX_INSTRUCTIONS_LENGTH)
        optional_text("prescribed_by", self.prescribed_by, MAX_NAME_LENGTH)
        require_datetime("start_date", self.start_date)
        require_datetime("end_date", self.end_date, optional=True)
        require_datetime("next_dose_date", self.next_dose_date, optional=True)
        if self.end_date is not None and self.end_date <= self.start_date:
            raise ValidationError("end_date", "must be after the start date")

    @classmethod
    def create(
        cls,
        pet_id: str,
        name: str,
        dosage: str,
        frequency: MedicationFrequency | str,
        start_date: datetime,
        *,
        end_date: datetime | None = None,
        instructions: str | None = None,
        prescribed_by: str | None = None,
        is_active: bool = True,
        now: datetime | None = None,
    ) -> Medication:
        """Build a new active course; the first scheduled dose follows the start date."""
        now = now or utcnow()
        frequency = coerce_enum("frequency", MedicationFrequency, frequency)
        return cls(
            id=new_id(),
            pet_id=pet_id,
            name=name,
            dosage=dosage,
            frequency=frequency,
            start_date=start_date,
            end_date=end_date,
            instructions=instructions,
            prescribed_by=prescribed_by,
            is_active=is_active,
            next_dose_date=next_dose(frequency, start_date),
            created_at=now,
            updated_at=now,
        )

    def is_overdue(self, now: datetime | None = None) -> bool:
        return derive.medication_is_overdue(self, now or utcnow())

    def days_remaining(self, now: datetime | None = None) -> int | None:
        return derive.medication_days_remaining(self, now or utcnow())

    def status(self, now: datetime | None = None) -> MedicationStatus:
        return derive.medication_status(self, now or utcnow())

    def record_dose(self, taken_at: datetime | None = None) -> Medication:
        """Return a copy with the next dose scheduled from *taken_at*.

        When the next dose would fall after ``end_date`` the course is over:
        it is marked completed and no further dose is scheduled.
        """
        taken_at = taken_at or utcnow()
        upcoming = next_dose(self.frequency, taken_at)
        finished = upcoming is not None and self.end_date is not None and upcoming > self.end_date
        return dataclasses.replace(
            self,
            next_dose_date=None if finished else upcoming,
            is_completed=self.is_completed or finished,
            updated_at=taken_at,
        )
