"""Tests for the application status state machine."""

from __future__ import annotations

from typing import Any

import pytest
from recruitment.core.auth import Role
from recruitment.domain.errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from recruitment.domain.models import ApplicationStatus
from recruitment.domain.services.applications import ApplicationService
from sqlalchemy.ext.asyncio import AsyncSession

from tests.utils import FrozenClock, make_claims


@pytest.fixture()
def service(db: AsyncSession, clock: FrozenClock) -> ApplicationService:
    return ApplicationService(db, clock=clock)


async def test_applicant_submission_starts_unhandled(
    service: ApplicationService, applicant: dict[str, Any], clock: FrozenClock
) -> None:
    record = await service.submit(make_claims(applicant["id"]))

    assert record.owner_id == applicant["id"]
    assert record.status is ApplicationStatus.UNHANDLED
    assert record.created_at.replace(tzinfo=None) == clock.now.replace(tzinfo=None)


async def test_applicant_cannot_accept_own_application(
    service: ApplicationService, applicant: dict[str, Any]
) -> None:
    caller = make_claims(applicant["id"])

    record = await service.submit(caller, status="accepted")

    assert record.status is ApplicationStatus.UNHANDLED
    assert (await service.get(caller, applicant["id"])).status is ApplicationStatus.UNHANDLED


async def test_admin_sets_any_status(
    service: ApplicationService, applicant: dict[str, Any], clock: FrozenClock
) -> None:
    admin = make_claims("admin-1", role=Role.ADMIN)
    await service.submit(make_claims(applicant["id"]))
    created = await service.get(admin, applicant["id"])

    clock.advance(minutes=5)
    accepted = await service.submit(admin, owner_id=applicant["id"], status="accepted")
    rejected = await service.submit(admin, owner_id=applicant["id"], status="rejected")
    reopened = await service.submit(admin, owner_id=applicant["id"], status="unhandled")

    assert accepted.status is ApplicationStatus.ACCEPTED
    assert rejected.status is ApplicationStatus.REJECTED
    assert reopened.status is ApplicationStatus.UNHANDLED
    assert reopened.created_at == created.created_at
    assert reopened.updated_at > created.updated_at


async def test_applicant_resubmit_resets_review(
    service: ApplicationService, applicant: dict[str, Any]
) -> None:
    admin = make_claims("admin-1", role=Role.ADMIN)
    await service.submit(admin, owner_id=applicant["id"], status="rejected")

    record = await service.submit(make_claims(applicant["id"]))

    assert record.status is ApplicationStatus.UNHANDLED


async def test_invalid_status_is_rejected(
    service: ApplicationService, applicant: dict[str, Any]
) -> None:
    admin = make_claims("admin-1", role=Role.ADMIN)

    with pytest.raises(ValidationError):
        await service.submit(admin, owner_id=applicant["id"], status="approved")
    with pytest.raises(NotFoundError):
        await service.get(admin, applicant["id"])


async def test_applicant_cannot_target_someone_else(
    service: ApplicationService, applicant: dict[str, Any], other_applicant: dict[str, Any]
) -> None:
    with pytest.raises(AuthorizationError):
        await service.submit(make_claims(applicant["id"]), owner_id=other_applicant["id"])
    with pytest.raises(AuthorizationError):
        await service.get(make_claims(applicant["id"]), other_applicant["id"])


async def test_submission_requires_a_caller(service: ApplicationService) -> None:
    with pytest.raises(AuthenticationError):
        await service.submit(None)


async def test_admins_cannot_hold_applications(
    service: ApplicationService, admin: dict[str, Any]
) -> None:
    caller = make_claims(admin["id"], role=Role.ADMIN)

    with pytest.raises(ValidationError):
        await service.submit(caller)


async def test_unknown_applicant_is_not_found(service: ApplicationService) -> None:
    admin = make_claims("admin-1", role=Role.ADMIN)

    with pytest.raises(NotFoundError):
        await service.submit(admin, owner_id="missing", status="accepted")


async def test_admin_lists_every_application(
    service: ApplicationService, applicant: dict[str, Any], other_applicant: dict[str, Any]
) -> None:
    await service.submit(make_claims(applicant["id"]))
    await service.submit(make_claims(other_applicant["id"]))
    admin = make_claims("admin-1", role=Role.ADMIN)

    everything = await service.list_for_review(admin)
    filtered = await service.list_for_review(admin, [f" {other_applicant['id']} ", ""])

    assert {record.owner_id for record in everything} == {applicant["id"], other_applicant["id"]}
    assert [record.owner_id for record in filtered] == [other_applicant["id"]]


async def test_listing_is_admin_only(
    service: ApplicationService, applicant: dict[str, Any]
) -> None:
    await service.submit(make_claims(applicant["id"]))

    with pytest.raises(AuthenticationError):
        await service.list_for_review(None)
    with pytest.raises(AuthorizationError):
        await service.list_for_review(make_claims(applicant["id"]))


async def test_listing_with_blank_ids_is_rejected(service: ApplicationService) -> None:
    admin = make_claims("admin-1", role=Role.ADMIN)

    with pytest.raises(ValidationError):
        await service.list_for_review(admin, ["", " "])
