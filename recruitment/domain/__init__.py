from recruitment.domain.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    RecruitmentError,
    TransientStoreError,
    ValidationError,
)
from recruitment.domain.models import (
    ApplicationRecord,
    ApplicationStatus,
    AvailabilityWindow,
    CompetenceEntry,
    Identity,
)

__all__ = [
    "ApplicationRecord",
    "ApplicationStatus",
    "AuthenticationError",
    "AuthorizationError",
    "AvailabilityWindow",
    "CompetenceEntry",
    "ConflictError",
    "Identity",
    "NotFoundError",
    "RecruitmentError",
    "TransientStoreError",
    "ValidationError",
]
