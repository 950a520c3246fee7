"""Vaccine and medication repositories."""

from __future__ import annotations

from petcare.enums import MedicationStatus, VaccineStatus
from petcare.models import Medication, Vaccine

from .base import Repository


class VaccineRepository(Repository[Vaccine]):
    kind = "vaccines"
    entity_type = Vaccine

    def for_pet(self, pet_id: str) -> list[Vaccine]:
        """A pet's vaccines, most recently administered first."""
        return sorted(
            (v for v in self._items.values() if v.pet_id == pet_id),
            key=lambda v: v.administered_date,
            reverse=True,
        )

    def with_status(self, status: VaccineStatus) -> list[Vaccine]:
        now = self._clock()
        return [v for v in self._items.values() if v.status(now) == status]

    @property
    def overdue(self) -> list[Vaccine]:
        return self.with_status(VaccineStatus.OVERDUE)

    @property
    def due_soon(self) -> list[Vaccine]:
        return self.with_status(VaccineStatus.DUE_SOON)


class MedicationRepository(Repository[Medication]):
    kind = "medications"
    entity_type = Medication

    def for_pet(self, pet_id: str) -> list[Medication]:
        return [m for m in self._items.values() if m.pet_id == pet_id]

    def with_status(self, status: MedicationStatus) -> list[Medication]:
        now = self._clock()
        return [m for m in self._items.values() if m.status(now) == status]

    @property
    def active(self) -> list[Medication]:
        return [m for m in self._items.values() if m.is_active and not m.is_completed]

    @property
    def overdue(self) -> list[Medication]:
        return self.with_status(MedicationStatus.OVERDUE)

    async def record_dose(self, medication_id: str) -> Medication:
        """Log a dose taken now and roll the next dose forward."""
        return await self.update(self.require(medication_id).record_dose(self._clock()))
