from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date, datetime

from recruitment.domain.errors import ValidationError


class ApplicationStatus(str, enum.Enum):
    """Review status of an application. Any value may follow any other."""

    UNHANDLED = "unhandled"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, value: str) -> ApplicationStatus:
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(status.value for status in cls)
            raise ValidationError(
                f"Invalid status '{value}'. Valid statuses are: {allowed}"
            ) from None


@dataclass(slots=True)
class Identity:
    """A registered person, without password material."""

    id: str
    name: str
    surname: str
    pnr: str
    username: str
    email: str
    role: str
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class CompetenceEntry:
    """Years of experience an applicant has in one competence type."""

    competence_id: int
    years_of_experience: float
    competence_name: str | None = None


@dataclass(frozen=True, slots=True)
class AvailabilityWindow:
    """A period an applicant is available. ``id`` is absent until persisted."""

    from_date: date
    to_date: date
    id: int | None = None

    @property
    def period(self) -> tuple[date, date]:
        return (self.from_date, self.to_date)


@dataclass(slots=True)
class ApplicationRecord:
    owner_id: str
    status: ApplicationStatus
    created_at: datetime
    updated_at: datetime
