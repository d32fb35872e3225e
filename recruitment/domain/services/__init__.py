"""Domain services."""

from recruitment.domain.services.applications import ApplicationService
from recruitment.domain.services.auth_service import AuthService, InvalidCredentialsError
from recruitment.domain.services.profile import ProfileService
from recruitment.domain.services.reconciliation import (
    ReconciliationPlan,
    plan_reconciliation,
    reconcile,
)

__all__ = [
    "ApplicationService",
    "AuthService",
    "InvalidCredentialsError",
    "ProfileService",
    "ReconciliationPlan",
    "plan_reconciliation",
    "reconcile",
]
