"""Pet repository."""

from __future__ import annotations

import dataclasses

from petcare.models import Pet

from .base import Repository


class PetRepository(Repository[Pet]):
    kind = "pets"
    entity_type = Pet

    @property
    def active_pets(self) -> list[Pet]:
        return [p for p in self._items.values() if p.is_active]

    def by_id(self) -> dict[str, Pet]:
        return dict(self._items)

    async def deactivate(self, pet_id: str) -> Pet:
        """Soft-delete: keep the record but hide it from active views."""
        return await self.update(dataclasses.replace(self.require(pet_id), is_active=False))
