"""Repositories for an applicant's competence and availability collections.

Every statement is scoped to a single owner; no method reads or writes rows
belonging to another person.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from datetime import date

from recruitment.domain.models import AvailabilityWindow, CompetenceEntry
from recruitment.infrastructure.db.models import (
    AvailabilityModel,
    CompetenceModel,
    CompetenceProfileModel,
)
from recruitment.infrastructure.repositories.upsert import dialect_insert
from sqlalchemy import and_, delete, not_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession


class CompetenceRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def catalogue(self) -> list[CompetenceModel]:
        stmt = select(CompetenceModel).order_by(CompetenceModel.id)
        return list((await self.session.execute(stmt)).scalars().all())

    async def known_ids(self, competence_ids: Collection[int]) -> set[int]:
        if not competence_ids:
            return set()
        stmt = select(CompetenceModel.id).where(CompetenceModel.id.in_(competence_ids))
        return set((await self.session.execute(stmt)).scalars().all())

    async def list_for(self, owner_id: str) -> list[CompetenceEntry]:
        stmt = (
            select(CompetenceProfileModel, CompetenceModel.name)
            .join(CompetenceModel, CompetenceModel.id == CompetenceProfileModel.competence_id)
            .where(CompetenceProfileModel.person_id == owner_id)
            .order_by(CompetenceProfileModel.competence_id)
            .execution_options(populate_existing=True)
        )
        rows = (await self.session.execute(stmt)).all()
        return [
            CompetenceEntry(
                competence_id=row.competence_id,
                years_of_experience=float(row.years_of_experience),
                competence_name=name,
            )
            for row, name in rows
        ]

    async def delete_except(self, owner_id: str, keep_ids: Collection[int]) -> int:
        """Delete the owner's rows whose competence type is not in ``keep_ids``.

        An empty ``keep_ids`` clears every competence of the owner.
        """
        stmt = delete(CompetenceProfileModel).where(CompetenceProfileModel.person_id == owner_id)
        if keep_ids:
            stmt = stmt.where(CompetenceProfileModel.competence_id.not_in(list(keep_ids)))
        result = await self.session.execute(
            stmt.execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def upsert(self, owner_id: str, entries: Sequence[CompetenceEntry]) -> None:
        if not entries:
            return
        stmt = dialect_insert(self.session, CompetenceProfileModel).values(
            [
                {
                    "person_id": owner_id,
                    "competence_id": entry.competence_id,
                    "years_of_experience": entry.years_of_experience,
                }
                for entry in entries
            ]
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["person_id", "competence_id"],
            set_={"years_of_experience": stmt.excluded.years_of_experience},
        )
        await self.session.execute(stmt)


class AvailabilityRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_for(self, owner_id: str) -> list[AvailabilityWindow]:
        stmt = (
            select(AvailabilityModel)
            .where(AvailabilityModel.person_id == owner_id)
            .order_by(AvailabilityModel.from_date, AvailabilityModel.to_date)
            .execution_options(populate_existing=True)
        )
        rows = (await self.session.execute(stmt)).scalars().all()
        return [
            AvailabilityWindow(from_date=row.from_date, to_date=row.to_date, id=row.id)
            for row in rows
        ]

    async def delete_except(self, owner_id: str, keep: Collection[tuple[date, date]]) -> int:
        """Delete the owner's windows whose (from, to) pair is not in ``keep``."""
        stmt = delete(AvailabilityModel).where(AvailabilityModel.person_id == owner_id)
        if keep:
            stmt = stmt.where(
                not_(
                    or_(
                        *(
                            and_(
                                AvailabilityModel.from_date == from_date,
                                AvailabilityModel.to_date == to_date,
                            )
                            for from_date, to_date in keep
                        )
                    )
                )
            )
        result = await self.session.execute(
            stmt.execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def upsert(self, owner_id: str, windows: Sequence[AvailabilityWindow]) -> None:
        # The dates are the natural key, so there is nothing to overwrite on conflict.
        await self._insert_ignoring_duplicates(owner_id, windows)

    async def insert(self, owner_id: str, windows: Sequence[AvailabilityWindow]) -> None:
        await self._insert_ignoring_duplicates(owner_id, windows)

    async def _insert_ignoring_duplicates(
        self, owner_id: str, windows: Sequence[AvailabilityWindow]
    ) -> None:
        if not windows:
            return
        stmt = dialect_insert(self.session, AvailabilityModel).values(
            [
                {"person_id": owner_id, "from_date": window.from_date, "to_date": window.to_date}
                for window in windows
            ]
        )
        stmt = stmt.on_conflict_do_nothing(index_elements=["person_id", "from_date", "to_date"])
        await self.session.execute(stmt)
