from __future__ import annotations

from collections.abc import Sequence

from recruitment.core.access import authorized_owner
from recruitment.core.auth import SessionClaims
from recruitment.domain.errors import NotFoundError, ValidationError
from recruitment.domain.models import AvailabilityWindow, CompetenceEntry
from recruitment.domain.services.reconciliation import (
    AvailabilityCollection,
    CompetenceCollection,
    reconcile,
    validate_availability,
    validate_competences,
)
from recruitment.infrastructure.repositories.unit_of_work import UnitOfWork
from sqlalchemy.ext.asyncio import AsyncSession


class ProfileService:
    """Reads and saves an applicant's competence and availability profile."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def competence_types(self) -> list[dict]:
        catalogue = await UnitOfWork(self.session).competences.catalogue()
        return [{"competence_id": item.id, "name": item.name} for item in catalogue]

    async def get_competences(
        self, caller: SessionClaims | None, owner_id: str | None
    ) -> list[CompetenceEntry]:
        owner_id = authorized_owner(caller, owner_id)
        uow = UnitOfWork(self.session)
        await self._ensure_owner_exists(uow, owner_id)
        return await uow.competences.list_for(owner_id)

    async def save_competences(
        self,
        caller: SessionClaims | None,
        owner_id: str | None,
        desired: Sequence[CompetenceEntry],
    ) -> list[CompetenceEntry]:
        """Replace the owner's competences with ``desired`` in one transaction."""
        owner_id = authorized_owner(caller, owner_id)
        entries = validate_competences(desired)

        uow = UnitOfWork(self.session)
        requested = {entry.competence_id for entry in entries}
        unknown = requested - await uow.competences.known_ids(requested)
        if unknown:
            joined = ", ".join(str(competence_id) for competence_id in sorted(unknown))
            raise ValidationError(f"Unknown competence id(s): {joined}")

        async with uow:
            return await reconcile(uow, owner_id, entries, CompetenceCollection(uow))

    async def get_availability(
        self, caller: SessionClaims | None, owner_id: str | None
    ) -> list[AvailabilityWindow]:
        owner_id = authorized_owner(caller, owner_id)
        uow = UnitOfWork(self.session)
        await self._ensure_owner_exists(uow, owner_id)
        return await uow.availability.list_for(owner_id)

    async def save_availability(
        self,
        caller: SessionClaims | None,
        owner_id: str | None,
        desired: Sequence[AvailabilityWindow],
    ) -> list[AvailabilityWindow]:
        """Replace the owner's availability windows with ``desired`` in one transaction."""
        owner_id = authorized_owner(caller, owner_id)
        windows = validate_availability(desired)

        uow = UnitOfWork(self.session)
        async with uow:
            return await reconcile(uow, owner_id, windows, AvailabilityCollection(uow))

    async def _ensure_owner_exists(self, uow: UnitOfWork, owner_id: str) -> None:
        if await uow.persons.get_by_id(owner_id) is None:
            raise NotFoundError(f"User {owner_id} not found")
