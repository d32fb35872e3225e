"""Error taxonomy shared by the domain services and the HTTP boundary."""

from __future__ import annotations


class RecruitmentError(Exception):
    """Base exception for all expected failures of the recruitment core."""

    code = "error"


class ValidationError(RecruitmentError):
    """Raised when input has the wrong shape or values. Never retried."""

    code = "validation_error"


class AuthenticationError(RecruitmentError):
    """Raised when a token or credential is missing, invalid or expired."""

    code = "authentication_failed"


class AuthorizationError(RecruitmentError):
    """Raised when a valid identity lacks the rights for the requested resource."""

    code = "forbidden"


class NotFoundError(RecruitmentError):
    """Raised when a requested resource does not exist."""

    code = "not_found"


class ConflictError(RecruitmentError):
    """Raised on uniqueness violations such as a duplicate username."""

    code = "conflict"

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class TransientStoreError(RecruitmentError):
    """Raised when the store fails mid-transaction. Safe for the caller to retry."""

    code = "store_unavailable"
