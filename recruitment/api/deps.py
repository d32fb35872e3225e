from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Path
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from recruitment.core.access import resolve_owner_id
from recruitment.core.auth import SessionClaims, TokenKind, TokenService, get_token_service
from recruitment.domain.errors import AuthenticationError
from recruitment.infrastructure.db.session import get_session
from sqlalchemy.ext.asyncio import AsyncSession

bearer_scheme = HTTPBearer(auto_error=False)


def get_tokens() -> TokenService:
    """Provide the token service; overridden in tests to inject a clock."""
    return get_token_service()


async def get_current_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),  # noqa: B008
    tokens: TokenService = Depends(get_tokens),  # noqa: B008
) -> SessionClaims:
    """Resolve the caller's verified access-token claims from the bearer header."""
    if credentials is None:
        raise AuthenticationError("Missing bearer token")
    return tokens.verify(credentials.credentials, kind=TokenKind.ACCESS)


def owner_from_path(
    user_id: str = Path(..., min_length=1),
    claims: SessionClaims = Depends(get_current_claims),  # noqa: B008
) -> str | None:
    """Owner named by the ``{user_id}`` path segment."""
    return resolve_owner_id(user_id, claims)


def caller_as_owner(claims: SessionClaims = Depends(get_current_claims)) -> str | None:  # noqa: B008
    """Owner for the parameter-less routes: always the caller."""
    return resolve_owner_id(None, claims)


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """Provide an async SQLAlchemy session for API handlers."""
    async for session in get_session():
        yield session
