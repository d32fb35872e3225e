"""Application status state machine.

Statuses move freely between unhandled, accepted and rejected, but only an
admin chooses the status. An applicant submitting (or re-submitting) always
lands on ``unhandled``; a status sent along by an applicant is ignored so the
shared endpoint cannot be used to accept oneself.
"""

from __future__ import annotations

import structlog
from recruitment.core.access import authorized_owner
from recruitment.core.auth import Clock, Role, SessionClaims, utc_now
from recruitment.domain.errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from recruitment.domain.models import ApplicationRecord, ApplicationStatus
from recruitment.infrastructure.repositories.unit_of_work import UnitOfWork
from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

DEFAULT_STATUS = ApplicationStatus.UNHANDLED


class ApplicationService:
    def __init__(self, session: AsyncSession, *, clock: Clock = utc_now) -> None:
        self.session = session
        self._clock = clock

    async def submit(
        self,
        caller: SessionClaims | None,
        *,
        owner_id: str | None = None,
        status: str | None = None,
    ) -> ApplicationRecord:
        """Create or update an application and return the stored record.

        Admins may target any applicant and set any status. Applicants always
        target themselves with the default status.
        """
        if caller is None:
            raise AuthenticationError("Authentication required")

        requested = ApplicationStatus.parse(status) if status is not None else None
        target = authorized_owner(caller, owner_id or caller.user_id)

        if caller.is_admin:
            new_status = requested or DEFAULT_STATUS
        else:
            if requested is not None and requested is not DEFAULT_STATUS:
                await logger.awarning(
                    "application_status_override_ignored",
                    user_id=caller.user_id,
                    requested_status=requested.value,
                )
            new_status = DEFAULT_STATUS

        uow = UnitOfWork(self.session)
        async with uow:
            if not await uow.persons.lock(target):
                raise NotFoundError(f"User {target} not found")
            person = await uow.persons.get_by_id(target)
            if person is not None and person.role is not Role.APPLICANT:
                raise ValidationError("Only applicants can hold an application")

            await uow.applications.upsert(target, new_status, self._clock())
            record = await uow.applications.get(target)

        if record is None:  # pragma: no cover - the upsert above guarantees a row
            raise NotFoundError(f"No application for user {target}")

        await logger.ainfo(
            "application_status_set",
            owner_id=target,
            status=record.status.value,
            set_by=caller.user_id,
            by_admin=caller.is_admin,
        )
        return record

    async def get(self, caller: SessionClaims | None, owner_id: str | None) -> ApplicationRecord:
        owner_id = authorized_owner(caller, owner_id)
        record = await UnitOfWork(self.session).applications.get(owner_id)
        if record is None:
            raise NotFoundError(f"No application for user {owner_id}")
        return record

    async def list_for_review(
        self, caller: SessionClaims | None, owner_ids: list[str] | None = None
    ) -> list[ApplicationRecord]:
        """Admin review list, optionally restricted to ``owner_ids``."""
        if caller is None:
            raise AuthenticationError("Authentication required")
        if not caller.is_admin:
            raise AuthorizationError("Only admins can review applications")

        if owner_ids is not None:
            # Deduplicated, order kept.
            owner_ids = list(dict.fromkeys(o.strip() for o in owner_ids if o.strip()))
            if not owner_ids:
                raise ValidationError("No valid person ids provided")

        records = await UnitOfWork(self.session).applications.list_all(owner_ids)
        await logger.ainfo(
            "applications_listed",
            listed_by=caller.user_id,
            filtered=owner_ids is not None,
            count=len(records),
        )
        return records
