"""Service level tests for competence and availability reconciliation."""

from __future__ import annotations

from datetime import date
from typing import Any

import pytest
from recruitment.core.auth import Role
from recruitment.domain.errors import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from recruitment.domain.models import AvailabilityWindow, CompetenceEntry
from recruitment.domain.services.profile import ProfileService
from sqlalchemy.ext.asyncio import AsyncSession

from tests.utils import make_claims


def _pairs(entries: list[CompetenceEntry]) -> list[tuple[int, float]]:
    return [(entry.competence_id, entry.years_of_experience) for entry in entries]


@pytest.fixture()
def owner(applicant: dict[str, Any]):
    return make_claims(applicant["id"])


async def test_competence_types_are_seeded(db: AsyncSession) -> None:
    types = await ProfileService(db).competence_types()

    assert [item["competence_id"] for item in types] == [1, 2, 3]
    assert types[0]["name"] == "ticket sales"


async def test_save_updates_kept_and_deletes_missing_competences(
    db: AsyncSession, owner
) -> None:
    service = ProfileService(db)
    await service.save_competences(
        owner, owner.user_id, [CompetenceEntry(1, 2), CompetenceEntry(2, 3)]
    )

    saved = await service.save_competences(owner, owner.user_id, [CompetenceEntry(1, 5)])

    assert _pairs(saved) == [(1, 5.0)]
    assert saved[0].competence_name == "ticket sales"
    assert _pairs(await service.get_competences(owner, owner.user_id)) == [(1, 5.0)]


async def test_empty_save_clears_all_competences(db: AsyncSession, owner) -> None:
    service = ProfileService(db)
    await service.save_competences(
        owner, owner.user_id, [CompetenceEntry(1, 2), CompetenceEntry(3, 1)]
    )

    saved = await service.save_competences(owner, owner.user_id, [])

    assert saved == []
    assert await service.get_competences(owner, owner.user_id) == []


async def test_repeated_save_is_idempotent(db: AsyncSession, owner) -> None:
    service = ProfileService(db)
    desired = [CompetenceEntry(2, 1.5), CompetenceEntry(3, 4)]

    first = await service.save_competences(owner, owner.user_id, desired)
    second = await service.save_competences(owner, owner.user_id, desired)

    assert _pairs(first) == _pairs(second) == [(2, 1.5), (3, 4.0)]


async def test_invalid_save_leaves_stored_state_untouched(db: AsyncSession, owner) -> None:
    service = ProfileService(db)
    await service.save_competences(owner, owner.user_id, [CompetenceEntry(1, 2)])

    with pytest.raises(ValidationError):
        await service.save_competences(
            owner, owner.user_id, [CompetenceEntry(2, 1), CompetenceEntry(2, 3)]
        )
    with pytest.raises(ValidationError):
        await service.save_competences(owner, owner.user_id, [CompetenceEntry(99, 1)])

    assert _pairs(await service.get_competences(owner, owner.user_id)) == [(1, 2.0)]


async def test_applicant_cannot_touch_another_profile(
    db: AsyncSession, owner, other_applicant: dict[str, Any]
) -> None:
    service = ProfileService(db)

    with pytest.raises(AuthorizationError):
        await service.save_competences(owner, other_applicant["id"], [CompetenceEntry(1, 1)])
    with pytest.raises(AuthorizationError):
        await service.get_availability(owner, other_applicant["id"])

    assert await service.get_competences(
        make_claims(other_applicant["id"]), other_applicant["id"]
    ) == []


async def test_admin_saves_on_behalf_of_applicant(db: AsyncSession, owner) -> None:
    admin = make_claims("admin-1", role=Role.ADMIN)
    service = ProfileService(db)

    saved = await service.save_competences(admin, owner.user_id, [CompetenceEntry(3, 7)])

    assert _pairs(saved) == [(3, 7.0)]
    assert _pairs(await service.get_competences(owner, owner.user_id)) == [(3, 7.0)]


async def test_unknown_owner_is_not_found(db: AsyncSession) -> None:
    admin = make_claims("admin-1", role=Role.ADMIN)
    service = ProfileService(db)

    with pytest.raises(NotFoundError):
        await service.save_competences(admin, "missing", [CompetenceEntry(1, 1)])
    with pytest.raises(NotFoundError):
        await service.get_availability(admin, "missing")


async def test_availability_keeps_matching_windows_and_adds_new_ones(
    db: AsyncSession, owner
) -> None:
    service = ProfileService(db)
    june = AvailabilityWindow(date(2026, 6, 1), date(2026, 6, 30))
    august = AvailabilityWindow(date(2026, 8, 1), date(2026, 8, 31))
    stored = await service.save_availability(owner, owner.user_id, [june, august])
    stored_june = next(window for window in stored if window.period == june.period)

    july = AvailabilityWindow(date(2026, 7, 1), date(2026, 7, 15))
    saved = await service.save_availability(owner, owner.user_id, [stored_june, july])

    assert [window.period for window in saved] == [june.period, july.period]
    assert next(w for w in saved if w.period == june.period).id == stored_june.id


async def test_availability_resubmitting_new_windows_does_not_duplicate(
    db: AsyncSession, owner
) -> None:
    service = ProfileService(db)
    windows = [AvailabilityWindow(date(2026, 6, 1), date(2026, 6, 30))]

    await service.save_availability(owner, owner.user_id, windows)
    saved = await service.save_availability(owner, owner.user_id, windows)

    assert len(saved) == 1


async def test_availability_clear_and_validation(db: AsyncSession, owner) -> None:
    service = ProfileService(db)
    await service.save_availability(
        owner, owner.user_id, [AvailabilityWindow(date(2026, 6, 1), date(2026, 6, 30))]
    )

    with pytest.raises(ValidationError):
        await service.save_availability(
            owner, owner.user_id, [AvailabilityWindow(date(2026, 7, 2), date(2026, 7, 1))]
        )
    assert len(await service.get_availability(owner, owner.user_id)) == 1

    assert await service.save_availability(owner, owner.user_id, []) == []
