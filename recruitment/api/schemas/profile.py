"""Pydantic schemas for competence and availability profile endpoints."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field, model_validator


class CompetenceType(BaseModel):
    competence_id: int
    name: str


class CompetenceItem(BaseModel):
    competence_id: int = Field(..., gt=0, description="Competence type id")
    years_of_experience: float = Field(..., ge=0, allow_inf_nan=False)


class CompetenceItemOut(CompetenceItem):
    competence_name: str | None = None


class CompetenceSaveRequest(BaseModel):
    """Desired competence list; an empty list clears the profile."""

    competences: list[CompetenceItem] = Field(default_factory=list)


class CompetenceListResponse(BaseModel):
    person_id: str
    competences: list[CompetenceItemOut]


class AvailabilityItem(BaseModel):
    id: int | None = Field(None, description="Server id of a stored window, absent for new ones")
    from_date: date
    to_date: date

    @model_validator(mode="after")
    def _check_period(self) -> AvailabilityItem:
        if self.from_date > self.to_date:
            raise ValueError("from_date must not be after to_date")
        return self


class AvailabilitySaveRequest(BaseModel):
    """Desired availability windows; an empty list clears them all."""

    availabilities: list[AvailabilityItem] = Field(default_factory=list)


class AvailabilityListResponse(BaseModel):
    person_id: str
    availabilities: list[AvailabilityItem]
