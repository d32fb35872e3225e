from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ApplicationSubmitRequest(BaseModel):
    """Submit an application.

    ``person_id`` and ``action`` are honoured for admins only; an applicant's
    application always targets themselves and is reset to ``unhandled``.
    """

    person_id: str | None = Field(None, description="Applicant to update (admin only)")
    action: str | None = Field(
        None, description="Status to set: unhandled, accepted or rejected (admin only)"
    )


class ApplicationResponse(BaseModel):
    person_id: str
    status: str
    created_at: datetime
    updated_at: datetime


class ApplicationListResponse(BaseModel):
    applications: list[ApplicationResponse]
