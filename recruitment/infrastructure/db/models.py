from __future__ import annotations

import uuid
from datetime import date, datetime

from recruitment.core.auth import Role
from recruitment.domain.models import ApplicationStatus
from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class PersonModel(Base):
    """SQLAlchemy model for the person table (applicants and admins)."""

    __tablename__ = "person"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    surname: Mapped[str] = mapped_column(String(128), nullable=False)
    pnr: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        Enum(Role, name="person_role", values_callable=lambda e: [x.value for x in e]),
        default=Role.APPLICANT,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    competences: Mapped[list[CompetenceProfileModel]] = relationship(
        back_populates="person", cascade="all,delete-orphan", passive_deletes=True
    )
    availabilities: Mapped[list[AvailabilityModel]] = relationship(
        back_populates="person", cascade="all,delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<PersonModel(id={self.id}, username={self.username}, role={self.role.value})>"


class CompetenceModel(Base):
    """Catalogue of competence types an applicant can claim."""

    __tablename__ = "competence"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)


class CompetenceProfileModel(Base):
    __tablename__ = "competence_profile"
    __table_args__ = (
        UniqueConstraint("person_id", "competence_id", name="uq_competence_profile_owner_type"),
        CheckConstraint("years_of_experience >= 0", name="years_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    person_id: Mapped[str] = mapped_column(
        ForeignKey("person.id", ondelete="CASCADE"), nullable=False, index=True
    )
    competence_id: Mapped[int] = mapped_column(ForeignKey("competence.id"), nullable=False)
    years_of_experience: Mapped[float] = mapped_column(Float, nullable=False)

    person: Mapped[PersonModel] = relationship(back_populates="competences")
    competence: Mapped[CompetenceModel] = relationship()


class AvailabilityModel(Base):
    __tablename__ = "availability"
    __table_args__ = (
        UniqueConstraint("person_id", "from_date", "to_date", name="uq_availability_owner_period"),
        CheckConstraint("from_date <= to_date", name="period_ordered"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    person_id: Mapped[str] = mapped_column(
        ForeignKey("person.id", ondelete="CASCADE"), nullable=False, index=True
    )
    from_date: Mapped[date] = mapped_column(Date, nullable=False)
    to_date: Mapped[date] = mapped_column(Date, nullable=False)

    person: Mapped[PersonModel] = relationship(back_populates="availabilities")


class ApplicationModel(Base):
    """One application per applicant, keyed by its owner."""

    __tablename__ = "application"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    person_id: Mapped[str] = mapped_column(
        ForeignKey("person.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    status: Mapped[ApplicationStatus] = mapped_column(
        Enum(
            ApplicationStatus,
            name="application_status",
            values_callable=lambda e: [x.value for x in e],
        ),
        default=ApplicationStatus.UNHANDLED,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
