from __future__ import annotations

from typing import Any

import structlog
from recruitment.domain.errors import ConflictError, TransientStoreError
from recruitment.infrastructure.repositories.applications import ApplicationRepository
from recruitment.infrastructure.repositories.persons import PersonRepository
from recruitment.infrastructure.repositories.profile import (
    AvailabilityRepository,
    CompetenceRepository,
)
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


def translate_store_error(exc: BaseException) -> BaseException:
    """Map driver failures onto the domain error taxonomy."""
    if isinstance(exc, IntegrityError):
        return ConflictError("Write violates a uniqueness or integrity constraint")
    if isinstance(exc, DBAPIError):
        return TransientStoreError("Database unavailable, the operation was rolled back")
    return exc


class UnitOfWork:
    """One atomic unit of work over an async SQLAlchemy session.

    Commits when the block exits cleanly, rolls back otherwise. Driver errors
    surface as ``ConflictError`` or ``TransientStoreError``; nothing written
    inside a failed block is ever observable.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.persons = PersonRepository(session)
        self.competences = CompetenceRepository(session)
        self.availability = AvailabilityRepository(session)
        self.applications = ApplicationRepository(session)

    async def __aenter__(self) -> UnitOfWork:
        logger.debug("uow_enter")
        return self

    async def __aexit__(self, exc_type: Any, exc: BaseException | None, tb: Any) -> None:
        if exc is not None:
            await self.rollback()
            logger.debug("uow_exit", exc_type=exc_type.__name__)
            translated = translate_store_error(exc)
            if translated is not exc:
                raise translated from exc
            return

        try:
            await self.commit()
        except DBAPIError as commit_exc:
            await self.rollback()
            raise translate_store_error(commit_exc) from commit_exc
        logger.debug("uow_exit", exc_type=None)

    async def commit(self) -> None:
        await self.session.commit()
        logger.debug("uow_commit")

    async def rollback(self) -> None:
        await self.session.rollback()
        logger.debug("uow_rollback")
