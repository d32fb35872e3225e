"""Competence and availability profile routes.

Each resource is reachable with an explicit ``{user_id}`` or without one, in
which case it addresses the caller's own profile.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from recruitment.api.deps import (
    caller_as_owner,
    get_current_claims,
    get_db_session,
    owner_from_path,
)
from recruitment.api.schemas.profile import (
    AvailabilityItem,
    AvailabilityListResponse,
    AvailabilitySaveRequest,
    CompetenceItemOut,
    CompetenceListResponse,
    CompetenceSaveRequest,
    CompetenceType,
)
from recruitment.core.auth import SessionClaims
from recruitment.domain.models import AvailabilityWindow, CompetenceEntry
from recruitment.domain.services.profile import ProfileService
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/profile", tags=["profile"])


def _competence_response(owner_id: str, entries: list[CompetenceEntry]) -> CompetenceListResponse:
    return CompetenceListResponse(
        person_id=owner_id,
        competences=[
            CompetenceItemOut(
                competence_id=entry.competence_id,
                years_of_experience=entry.years_of_experience,
                competence_name=entry.competence_name,
            )
            for entry in entries
        ],
    )


def _availability_response(
    owner_id: str, windows: list[AvailabilityWindow]
) -> AvailabilityListResponse:
    return AvailabilityListResponse(
        person_id=owner_id,
        availabilities=[
            AvailabilityItem(id=window.id, from_date=window.from_date, to_date=window.to_date)
            for window in windows
        ],
    )


@router.get("/competence-types", response_model=list[CompetenceType])
async def list_competence_types(
    _: SessionClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_db_session),
) -> list[CompetenceType]:
    types = await ProfileService(session).competence_types()
    return [CompetenceType(**item) for item in types]


async def _get_competences(
    owner_id: str | None, claims: SessionClaims, session: AsyncSession
) -> CompetenceListResponse:
    entries = await ProfileService(session).get_competences(claims, owner_id)
    return _competence_response(owner_id, entries)


async def _save_competences(
    payload: CompetenceSaveRequest,
    owner_id: str | None,
    claims: SessionClaims,
    session: AsyncSession,
) -> CompetenceListResponse:
    desired = [
        CompetenceEntry(
            competence_id=item.competence_id, years_of_experience=item.years_of_experience
        )
        for item in payload.competences
    ]
    entries = await ProfileService(session).save_competences(claims, owner_id, desired)
    return _competence_response(owner_id, entries)


async def _get_availability(
    owner_id: str | None, claims: SessionClaims, session: AsyncSession
) -> AvailabilityListResponse:
    windows = await ProfileService(session).get_availability(claims, owner_id)
    return _availability_response(owner_id, windows)


async def _save_availability(
    payload: AvailabilitySaveRequest,
    owner_id: str | None,
    claims: SessionClaims,
    session: AsyncSession,
) -> AvailabilityListResponse:
    desired = [
        AvailabilityWindow(from_date=item.from_date, to_date=item.to_date, id=item.id)
        for item in payload.availabilities
    ]
    windows = await ProfileService(session).save_availability(claims, owner_id, desired)
    return _availability_response(owner_id, windows)


@router.get("/competences", response_model=CompetenceListResponse)
async def get_own_competences(
    owner_id: str | None = Depends(caller_as_owner),
    claims: SessionClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_db_session),
) -> CompetenceListResponse:
    return await _get_competences(owner_id, claims, session)


@router.get("/competences/{user_id}", response_model=CompetenceListResponse)
async def get_competences(
    owner_id: str | None = Depends(owner_from_path),
    claims: SessionClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_db_session),
) -> CompetenceListResponse:
    return await _get_competences(owner_id, claims, session)


@router.put("/competences", response_model=CompetenceListResponse)
async def save_own_competences(
    payload: CompetenceSaveRequest,
    owner_id: str | None = Depends(caller_as_owner),
    claims: SessionClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_db_session),
) -> CompetenceListResponse:
    """Replace the caller's competence list with the payload and return the stored result."""
    return await _save_competences(payload, owner_id, claims, session)


@router.put("/competences/{user_id}", response_model=CompetenceListResponse)
async def save_competences(
    payload: CompetenceSaveRequest,
    owner_id: str | None = Depends(owner_from_path),
    claims: SessionClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_db_session),
) -> CompetenceListResponse:
    """Replace the competence list of ``user_id`` with the payload."""
    return await _save_competences(payload, owner_id, claims, session)


@router.get("/availability", response_model=AvailabilityListResponse)
async def get_own_availability(
    owner_id: str | None = Depends(caller_as_owner),
    claims: SessionClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_db_session),
) -> AvailabilityListResponse:
    return await _get_availability(owner_id, claims, session)


@router.get("/availability/{user_id}", response_model=AvailabilityListResponse)
async def get_availability(
    owner_id: str | None = Depends(owner_from_path),
    claims: SessionClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_db_session),
) -> AvailabilityListResponse:
    return await _get_availability(owner_id, claims, session)


@router.put("/availability", response_model=AvailabilityListResponse)
async def save_own_availability(
    payload: AvailabilitySaveRequest,
    owner_id: str | None = Depends(caller_as_owner),
    claims: SessionClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_db_session),
) -> AvailabilityListResponse:
    """Replace the caller's availability windows with the payload."""
    return await _save_availability(payload, owner_id, claims, session)


@router.put("/availability/{user_id}", response_model=AvailabilityListResponse)
async def save_availability(
    payload: AvailabilitySaveRequest,
    owner_id: str | None = Depends(owner_from_path),
    claims: SessionClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_db_session),
) -> AvailabilityListResponse:
    """Replace the availability windows of ``user_id`` with the payload."""
    return await _save_availability(payload, owner_id, claims, session)
