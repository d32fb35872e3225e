"""Mapping of the domain error taxonomy onto HTTP responses."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from recruitment.domain.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    RecruitmentError,
    TransientStoreError,
    ValidationError,
)

logger = structlog.get_logger()

STATUS_BY_ERROR: tuple[tuple[type[RecruitmentError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (TransientStoreError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_for(exc: RecruitmentError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_exception_handlers(app: FastAPI) -> None:
    """Register the domain error handler with the FastAPI app."""

    @app.exception_handler(RecruitmentError)
    async def handle_recruitment_error(_: Request, exc: RecruitmentError) -> JSONResponse:
        status_code = status_for(exc)
        body: dict[str, str] = {"detail": str(exc), "error": exc.code}
        if isinstance(exc, ConflictError) and exc.field:
            body["field"] = exc.field

        headers = None
        if status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        log = logger.aerror if status_code >= 500 else logger.awarning
        await log("request_failed", status_code=status_code, error=exc.code, detail=str(exc))
        return JSONResponse(status_code=status_code, content=body, headers=headers)
