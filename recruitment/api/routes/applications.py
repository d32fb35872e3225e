from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from recruitment.api.deps import (
    caller_as_owner,
    get_current_claims,
    get_db_session,
    owner_from_path,
)
from recruitment.api.schemas.applications import (
    ApplicationListResponse,
    ApplicationResponse,
    ApplicationSubmitRequest,
)
from recruitment.core.auth import SessionClaims
from recruitment.domain.models import ApplicationRecord
from recruitment.domain.services.applications import ApplicationService
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/applications", tags=["applications"])


def _to_response(record: ApplicationRecord) -> ApplicationResponse:
    return ApplicationResponse(
        person_id=record.owner_id,
        status=record.status.value,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


@router.get(
    "",
    response_model=ApplicationListResponse,
    summary="List applications for review",
    description="Admin only. Pass ids as a comma separated list of person ids to filter.",
)
async def list_applications(
    ids: str | None = Query(None, description="Comma separated person ids"),
    claims: SessionClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_db_session),
) -> ApplicationListResponse:
    owner_ids = None if ids is None else ids.split(",")
    records = await ApplicationService(session).list_for_review(claims, owner_ids)
    return ApplicationListResponse(applications=[_to_response(record) for record in records])


@router.post(
    "",
    response_model=ApplicationResponse,
    summary="Submit or review an application",
    description=(
        "Applicants submit their own application, which is (re)set to unhandled. "
        "Admins may target any applicant with person_id and choose the status via action."
    ),
)
async def submit_application(
    payload: ApplicationSubmitRequest,
    claims: SessionClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_db_session),
) -> ApplicationResponse:
    record = await ApplicationService(session).submit(
        claims, owner_id=payload.person_id, status=payload.action
    )
    return _to_response(record)


# Registered before "/{user_id}" so "me" is never taken for a person id.
@router.get("/me", response_model=ApplicationResponse)
async def get_own_application(
    owner_id: str | None = Depends(caller_as_owner),
    claims: SessionClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_db_session),
) -> ApplicationResponse:
    record = await ApplicationService(session).get(claims, owner_id)
    return _to_response(record)


@router.get("/{user_id}", response_model=ApplicationResponse)
async def get_application(
    owner_id: str | None = Depends(owner_from_path),
    claims: SessionClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_db_session),
) -> ApplicationResponse:
    record = await ApplicationService(session).get(claims, owner_id)
    return _to_response(record)
