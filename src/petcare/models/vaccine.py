"""Vaccination records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from petcare.core.exceptions import ValidationError
from petcare.core.utils.dt import utcnow
from petcare.enums import VaccineStatus, VaccineType
from petcare.scheduling import status as derive

from .ids import new_id
from .validation import coerce_enum, optional_text, require_datetime, require_text

MAX_NAME_LENGTH = 100
MAX_NOTES_LENGTH = 500


@dataclass
class Vaccine:
    """A vaccine given to a pet, with an optional booster due date.

    ``is_completed`` defaults to True: logging a vaccine records that it was
    administered. Such records always report ``VaccineStatus.COMPLETED``;
    the due-soon/upcoming branches apply only to records explicitly marked
    not completed.
    """

    id: str
    pet_id: str
    name: str
    vaccine_type: VaccineType
    administered_date: datetime
    next_due_date: datetime | None = None
    administered_by: str | None = None
    batch_number: str | None = None
    notes: str | None = None
    is_required: bool = True
    is_completed: bool = True
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        self.vaccine_type = coerce_enum("vaccine_type", VaccineType, self.vaccine_type)
        require_text("pet_id", self.pet_id, 200)
        require_text("name", self.name, MAX_NAME_LENGTH)
        optional_text("administered_by", self.administered_by, MAX_NAME_LENGTH)
        optional_text("batch_number", self.batch_number, MAX_NAME_LENGTH)
        optional_text("notes", self.notes, MAX_NOTES_LENGTH)
        require_datetime("administered_date", self.administered_date)
        require_datetime("next_due_date", self.next_due_date, optional=True)
        if self.next_due_date is not None and self.next_due_date <= self.administered_date:
            raise ValidationError("next_due_date", "must be after the administered date")

    @classmethod
    def create(
        cls,
        pet_id: str,
        name: str,
        vaccine_type: VaccineType | str,
        administered_date: datetime,
        *,
        next_due_date: datetime | None = None,
        administered_by: str | None = None,
        batch_number: str | None = None,
        notes: str | None = None,
        is_required: bool = True,
        now: datetime | None = None,
    ) -> Vaccine:
        now = now or utcnow()
        return cls(
            id=new_id(),
            pet_id=pet_id,
            name=name,
            vaccine_type=vaccine_type,
            administered_date=administered_date,
            next_due_date=next_due_date,
            administered_by=administered_by,
            batch_number=batch_number,
            notes=notes,
            is_required=is_required,
            created_at=now,
            updated_at=now,
        )

    def is_overdue(self, now: datetime | None = None) -> bool:
        return derive.vaccine_is_overdue(self, now or utcnow())

    def days_until_next(self, now: datetime | None = None) -> int | None:
        return derive.vaccine_days_until_next(self, now or utcnow())

    def status(self, now: datetime | None = None) -> VaccineStatus:
        return derive.vaccine_status(self, now or utcnow())
