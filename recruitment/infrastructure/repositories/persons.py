from __future__ import annotations

from recruitment.domain.validators import normalize_pnr
from recruitment.infrastructure.db.models import PersonModel
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession


class PersonRepository:
    """Lookups and atomic updates on the person table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, person_id: str) -> PersonModel | None:
        return await self.session.scalar(select(PersonModel).where(PersonModel.id == person_id))

    async def get_by_username(self, username: str) -> PersonModel | None:
        return await self.session.scalar(
            select(PersonModel).where(PersonModel.username == username)
        )

    async def get_by_email(self, email: str) -> PersonModel | None:
        return await self.session.scalar(
            select(PersonModel).where(PersonModel.email == email.lower())
        )

    async def get_by_pnr(self, pnr: str) -> PersonModel | None:
        return await self.session.scalar(
            select(PersonModel).where(PersonModel.pnr == normalize_pnr(pnr))
        )

    async def add(self, person: PersonModel) -> PersonModel:
        self.session.add(person)
        await self.session.flush()
        return person

    async def lock(self, person_id: str) -> bool:
        """Take a row lock on the person so writes to its children serialise.

        Returns False when the person does not exist. SQLite ignores
        ``FOR UPDATE``; its database level write lock gives the same ordering.
        """
        stmt = select(PersonModel.id).where(PersonModel.id == person_id).with_for_update()
        return await self.session.scalar(stmt) is not None

    async def set_password(self, person_id: str, hashed_password: str) -> bool:
        result = await self.session.execute(
            update(PersonModel)
            .where(PersonModel.id == person_id)
            .values(password=hashed_password)
        )
        return result.rowcount > 0
