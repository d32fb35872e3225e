"""Token service: issuing, verifying and rotating signed session tokens.

Sessions are stateless. Claims are signed with the process-wide secret and
never stored server side, so logging out is the client discarding its tokens.
Every token carries a ``jti`` so a deny-list keyed by token id can be added
without changing the claim shape.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from functools import lru_cache
from uuid import uuid4

import jwt
from recruitment.core.config import Settings, get_settings
from recruitment.domain.errors import AuthenticationError

Clock = Callable[[], datetime]

REQUIRED_CLAIMS = ["sub", "role", "username", "kind", "iat", "exp", "jti"]


def utc_now() -> datetime:
    return datetime.now(UTC)


class Role(str, Enum):
    APPLICANT = "applicant"
    ADMIN = "admin"

    @classmethod
    def contains(cls, value: str) -> bool:
        return value in {role.value for role in cls}


class TokenKind(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


class TokenError(AuthenticationError):
    """Raised when a token cannot be decoded or validated."""

    code = "token_invalid"


class TokenExpiredError(TokenError):
    """Raised when a correctly signed token is past its expiry."""

    code = "token_expired"


class TokenMalformedError(TokenError):
    """Raised when the signature or the token structure is invalid."""

    code = "token_malformed"


class TokenInvalidError(TokenError):
    """Raised for any other verification failure (claims, issuer, kind)."""


class SessionExpiredError(AuthenticationError):
    """Raised when a refresh token can no longer mint access tokens."""

    code = "session_expired"


@dataclass(frozen=True, slots=True)
class SessionClaims:
    """Verified claims of a session token."""

    user_id: str
    role: Role
    username: str
    issued_at: datetime
    expires_at: datetime
    kind: TokenKind
    token_id: str

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


@dataclass(frozen=True, slots=True)
class TokenPair:
    access_token: str
    refresh_token: str
    expires_in: int


class TokenService:
    """Issues and verifies HMAC-signed JWTs with an injectable clock."""

    def __init__(
        self,
        *,
        secret: str,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(hours=1),
        issuer: str = "recruitment",
        clock: Clock = utc_now,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttls = {TokenKind.ACCESS: access_ttl, TokenKind.REFRESH: refresh_ttl}
        self._issuer = issuer
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings | None = None, *, clock: Clock = utc_now) -> TokenService:
        settings = settings or get_settings()
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            access_ttl=timedelta(seconds=settings.access_token_ttl_seconds),
            refresh_ttl=timedelta(seconds=settings.refresh_token_ttl_seconds),
            issuer=settings.app_name,
            clock=clock,
        )

    def ttl_for(self, kind: TokenKind) -> timedelta:
        return self._ttls[kind]

    def issue(self, *, user_id: str, role: Role | str, username: str, kind: TokenKind) -> str:
        """Generate a signed token of the given kind for an identity."""
        if not Role.contains(str(getattr(role, "value", role))):
            raise ValueError(f"Unsupported role: {role}")

        now = self._clock()
        payload = {
            "sub": str(user_id),
            "role": Role(role).value,
            "username": username,
            "kind": kind.value,
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl_for(kind)).timestamp()),
            "jti": uuid4().hex,
            "iss": self._issuer,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def issue_pair(self, *, user_id: str, role: Role | str, username: str) -> TokenPair:
        return TokenPair(
            access_token=self.issue(
                user_id=user_id, role=role, username=username, kind=TokenKind.ACCESS
            ),
            refresh_token=self.issue(
                user_id=user_id, role=role, username=username, kind=TokenKind.REFRESH
            ),
            expires_in=int(self.ttl_for(TokenKind.ACCESS).total_seconds()),
        )

    def verify(self, token: str, *, kind: TokenKind | None = None) -> SessionClaims:
        """Decode and validate a token.

        Expiry is judged against the injected clock and only after the
        signature checks out, so a tampered token is never reported as expired.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={
                    "require": REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.DecodeError as exc:
            raise TokenMalformedError("Malformed token") from exc
        except jwt.PyJWTError as exc:
            raise TokenInvalidError("Invalid token") from exc

        try:
            role = Role(payload["role"])
            token_kind = TokenKind(payload["kind"])
            issued_at = datetime.fromtimestamp(int(payload["iat"]), UTC)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), UTC)
        except (TypeError, ValueError) as exc:
            raise TokenInvalidError("Invalid token claims") from exc

        if kind is not None and token_kind is not kind:
            raise TokenInvalidError(f"Expected a {kind.value} token")

        if self._clock() >= expires_at:
            raise TokenExpiredError("Token has expired")

        return SessionClaims(
            user_id=payload["sub"],
            role=role,
            username=payload["username"],
            issued_at=issued_at,
            expires_at=expires_at,
            kind=token_kind,
            token_id=payload["jti"],
        )

    def refresh(self, refresh_token: str) -> str:
        """Mint a new access token from a refresh token.

        A refresh never yields a new refresh token, which bounds the session
        lifetime to the refresh TTL.
        """
        try:
            claims = self.verify(refresh_token, kind=TokenKind.REFRESH)
        except TokenError as exc:
            raise SessionExpiredError("Session expired, please log in again") from exc

        return self.issue(
            user_id=claims.user_id,
            role=claims.role,
            username=claims.username,
            kind=TokenKind.ACCESS,
        )


@lru_cache
def get_token_service() -> TokenService:
    """Return the process-wide token service built from settings."""
    return TokenService.from_settings()
