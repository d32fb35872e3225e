from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from recruitment.domain.models import ApplicationRecord, ApplicationStatus
from recruitment.infrastructure.db.models import ApplicationModel
from recruitment.infrastructure.repositories.upsert import dialect_insert
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession


def _to_record(row: ApplicationModel) -> ApplicationRecord:
    return ApplicationRecord(
        owner_id=row.person_id,
        status=row.status,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class ApplicationRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, owner_id: str) -> ApplicationRecord | None:
        stmt = (
            select(ApplicationModel)
            .where(ApplicationModel.person_id == owner_id)
            .execution_options(populate_existing=True)
        )
        row = await self.session.scalar(stmt)
        return None if row is None else _to_record(row)

    async def list_all(self, owner_ids: Sequence[str] | None = None) -> list[ApplicationRecord]:
        """All applications, oldest first, or only those of ``owner_ids``."""
        stmt = (
            select(ApplicationModel)
            .order_by(ApplicationModel.created_at, ApplicationModel.id)
            .execution_options(populate_existing=True)
        )
        if owner_ids is not None:
            stmt = stmt.where(ApplicationModel.person_id.in_(list(owner_ids)))
        rows = (await self.session.execute(stmt)).scalars().all()
        return [_to_record(row) for row in rows]

    async def upsert(self, owner_id: str, status: ApplicationStatus, now: datetime) -> None:
        """Create the owner's application or overwrite its status and timestamp."""
        stmt = dialect_insert(self.session, ApplicationModel).values(
            person_id=owner_id,
            status=status,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["person_id"],
            set_={"status": stmt.excluded.status, "updated_at": stmt.excluded.updated_at},
        )
        await self.session.execute(stmt)
