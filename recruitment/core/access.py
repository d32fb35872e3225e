"""Authorization gate for owner-scoped resources.

``authorize`` is a pure decision over the caller's claims and the id of the
resource owner. Resolving that owner id from the request is the caller's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from recruitment.core.auth import Role, SessionClaims
from recruitment.domain.errors import AuthenticationError, AuthorizationError, ValidationError


class DenyReason(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    MISSING_OWNER = "missing_owner"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True, slots=True)
class AccessDecision:
    allowed: bool
    reason: DenyReason | None = None

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = AccessDecision(allowed=True)


def authorize(caller: SessionClaims | None, owner_id: str | None) -> AccessDecision:
    """Decide whether ``caller`` may act on resources owned by ``owner_id``."""
    if caller is None:
        return AccessDecision(allowed=False, reason=DenyReason.UNAUTHENTICATED)
    if caller.role is Role.ADMIN:
        return ALLOW
    if not owner_id:
        return AccessDecision(allowed=False, reason=DenyReason.MISSING_OWNER)
    if caller.user_id == owner_id:
        return ALLOW
    return AccessDecision(allowed=False, reason=DenyReason.FORBIDDEN)


def ensure_authorized(caller: SessionClaims | None, owner_id: str | None) -> None:
    """Raise the typed error matching a denied decision."""
    decision = authorize(caller, owner_id)
    if decision.allowed:
        return
    if decision.reason is DenyReason.UNAUTHENTICATED:
        raise AuthenticationError("Authentication required")
    if decision.reason is DenyReason.MISSING_OWNER:
        raise ValidationError("Resource owner could not be resolved from the request")
    raise AuthorizationError("You can only access your own resources")


def resolve_owner_id(explicit_owner_id: str | None, caller: SessionClaims | None) -> str | None:
    """Explicit owner id wins, otherwise fall back to the caller's own id."""
    if explicit_owner_id:
        return explicit_owner_id
    if caller is None:
        return None
    return caller.user_id


def authorized_owner(caller: SessionClaims | None, owner_id: str | None) -> str:
    """Run the gate and return the owner id the caller may act on.

    Admins pass the gate without an owner, yet an owner-scoped operation still
    needs one.
    """
    ensure_authorized(caller, owner_id)
    if not owner_id:
        raise ValidationError("Resource owner could not be resolved from the request")
    return owner_id
