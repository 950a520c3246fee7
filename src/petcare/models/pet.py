"""Pet records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from dateutil.relativedelta import relativedelta

from petcare.core.exceptions import ValidationError
from petcare.core.utils.dt import utcnow
from petcare.enums import PetType

from .ids import new_id
from .validation import coerce_enum, optional_text, require_datetime, require_text

MAX_NAME_LENGTH = 50
MAX_BREED_LENGTH = 50
MAX_WEIGHT_KG = 200.0


@dataclass
class Pet:
    id: str
    name: str
    type: PetType = PetType.DOG
    breed: str | None = None
    birth_date: datetime | None = None
    weight: float | None = None  # kg
    is_active: bool = True
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        self.type = coerce_enum("type", PetType, self.type)
        require_text("name", self.name, MAX_NAME_LENGTH)
        optional_text("breed", self.breed, MAX_BREED_LENGTH)
        require_datetime("birth_date", self.birth_date, optional=True)
        if self.weight is not None:
            if isinstance(self.weight, bool) or not isinstance(self.weight, int | float):
                raise ValidationError("weight", f"must be a number, got {self.weight!r}")
            if self.weight <= 0:
                raise ValidationError("weight", "must be greater than 0")
            if self.weight > MAX_WEIGHT_KG:
                raise ValidationError("weight", f"must be at most {MAX_WEIGHT_KG:g} kg")

    @classmethod
    def create(
        cls,
        name: str,
        type: PetType | str = PetType.DOG,
        *,
        breed: str | None = None,
        birth_date: datetime | None = None,
        weight: float | None = None,
        is_active: bool = True,
        now: datetime | None = None,
    ) -> Pet:
        """Build a new pet with a fresh id and creation timestamps."""
        now = now or utcnow()
        require_datetime("birth_date", birth_date, optional=True)
        if birth_date is not None and birth_date > now:
            raise ValidationError("birth_date", "must not be in the future")
        return cls(
            id=new_id(),
            name=name,
            type=type,
            breed=breed,
            birth_date=birth_date,
            weight=weight,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )

    def age_years(self, now: datetime | None = None) -> int | None:
        if self.birth_date is None:
            return None
        return relativedelta(now or utcnow(), self.birth_date).years

    def age_months(self, now: datetime | None = None) -> int | None:
        """Total age in whole months."""
        if self.birth_date is None:
            return None
        delta = relativedelta(now or utcnow(), self.birth_date)
        return delta.years * 12 + delta.months
