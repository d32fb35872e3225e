"""Initial recruitment schema: person, competence catalogue, profiles, applications

Revision ID: 202610180001
Revises:
Create Date: 2026-10-18 00:01:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from recruitment.domain.reference_data import COMPETENCE_TYPES

revision = "202610180001"
down_revision = None
branch_labels = None
depends_on = None

person_role_enum = sa.Enum("applicant", "admin", name="person_role")
application_status_enum = sa.Enum("unhandled", "accepted", "rejected", name="application_status")


def upgrade() -> None:
    op.create_table(
        "person",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("surname", sa.String(length=128), nullable=False),
        sa.Column("pnr", sa.String(length=20), nullable=False),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column("role", person_role_enum, nullable=False, server_default="applicant"),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.UniqueConstraint("pnr", name="uq_person_pnr"),
        sa.UniqueConstraint("username", name="uq_person_username"),
        sa.UniqueConstraint("email", name="uq_person_email"),
    )
    op.create_index("ix_person_username", "person", ["username"])
    op.create_index("ix_person_email", "person", ["email"])

    competence = op.create_table(
        "competence",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.UniqueConstraint("name", name="uq_competence_name"),
    )

    op.create_table(
        "competence_profile",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "person_id",
            sa.String(length=36),
            sa.ForeignKey("person.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("competence_id", sa.Integer(), sa.ForeignKey("competence.id"), nullable=False),
        sa.Column("years_of_experience", sa.Float(), nullable=False),
        sa.UniqueConstraint(
            "person_id", "competence_id", name="uq_competence_profile_owner_type"
        ),
        sa.CheckConstraint(
            "years_of_experience >= 0", name="ck_competence_profile_years_non_negative"
        ),
    )
    op.create_index("ix_competence_profile_person_id", "competence_profile", ["person_id"])

    op.create_table(
        "availability",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "person_id",
            sa.String(length=36),
            sa.ForeignKey("person.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("from_date", sa.Date(), nullable=False),
        sa.Column("to_date", sa.Date(), nullable=False),
        sa.UniqueConstraint(
            "person_id", "from_date", "to_date", name="uq_availability_owner_period"
        ),
        sa.CheckConstraint("from_date <= to_date", name="ck_availability_period_ordered"),
    )
    op.create_index("ix_availability_person_id", "availability", ["person_id"])

    op.create_table(
        "application",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "person_id",
            sa.String(length=36),
            sa.ForeignKey("person.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status", application_status_enum, nullable=False, server_default="unhandled"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("person_id", name="uq_application_person_id"),
    )

    op.bulk_insert(competence, COMPETENCE_TYPES)


def downgrade() -> None:
    op.drop_table("application")
    op.drop_index("ix_availability_person_id", "availability")
    op.drop_table("availability")
    op.drop_index("ix_competence_profile_person_id", "competence_profile")
    op.drop_table("competence_profile")
    op.drop_table("competence")
    op.drop_index("ix_person_email", "person")
    op.drop_index("ix_person_username", "person")
    op.drop_table("person")
    application_status_enum.drop(op.get_bind(), checkfirst=True)
    person_role_enum.drop(op.get_bind(), checkfirst=True)
