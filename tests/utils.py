from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from recruitment.core.auth import Role, SessionClaims, TokenKind, TokenService
from recruitment.domain.reference_data import COMPETENCE_TYPES
from recruitment.infrastructure.db.base import Base
from recruitment.infrastructure.db.models import CompetenceModel
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

STRONG_PASSWORD = "Secret#123"


class FrozenClock:
    """Deterministic clock for token expiry and application timestamps."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        self.now += timedelta(**delta)


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def make_claims(user_id: str = "applicant-1", role: Role = Role.APPLICANT) -> SessionClaims:
    now = datetime(2026, 1, 1, tzinfo=UTC)
    return SessionClaims(
        user_id=user_id,
        role=role,
        username=user_id,
        issued_at=now,
        expires_at=now + timedelta(minutes=15),
        kind=TokenKind.ACCESS,
        token_id="test-jti",
    )


def registration_payload(suffix: str = "1", **overrides: Any) -> dict[str, str]:
    """Valid body for POST /account/register; ``suffix`` keeps unique fields apart."""
    payload = {
        "name": "Ada",
        "surname": "Lovelace",
        "pnr": f"19900101{int(suffix):04d}",
        "username": f"applicant{suffix}",
        "email": f"applicant{suffix}@example.com",
        "password": STRONG_PASSWORD,
    }
    payload.update(overrides)
    return payload


def access_token_for(tokens: TokenService, user: dict[str, Any]) -> str:
    return tokens.issue(
        user_id=user["id"], role=user["role"], username=user["username"], kind=TokenKind.ACCESS
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create every table and seed the competence catalogue."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        for competence in COMPETENCE_TYPES:
            session.add(CompetenceModel(**competence))
        await session.commit()
