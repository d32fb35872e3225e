"""Account routes - register, login, token refresh, password reset, profile."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, status
from recruitment.api.deps import get_current_claims, get_db_session, get_tokens
from recruitment.api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MeResponse,
    RefreshResponse,
    RefreshTokenRequest,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    TokenResponse,
    UserResponse,
)
from recruitment.core.auth import SessionClaims, TokenService
from recruitment.domain.services.auth_service import AuthService
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/account", tags=["account"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new applicant",
    description="Create an applicant account and return a fresh session.",
)
async def register(
    payload: RegisterRequest,
    session: AsyncSession = Depends(get_db_session),
    tokens: TokenService = Depends(get_tokens),
) -> RegisterResponse:
    service = AuthService(session, tokens=tokens)
    result = await service.register_user(
        name=payload.name,
        surname=payload.surname,
        pnr=payload.pnr,
        username=payload.username,
        email=payload.email,
        password=payload.password,
    )
    return RegisterResponse(
        user=UserResponse(**asdict(result["user"])),
        tokens=TokenResponse(**result["tokens"]),
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="User login",
    description="Authenticate with username, e-mail or personal number; returns JWT tokens.",
)
async def login(
    payload: LoginRequest,
    session: AsyncSession = Depends(get_db_session),
    tokens: TokenService = Depends(get_tokens),
) -> LoginResponse:
    service = AuthService(session, tokens=tokens)
    result = await service.login(login_field=payload.login_field, password=payload.password)
    return LoginResponse(
        user=UserResponse(**asdict(result["user"])),
        tokens=TokenResponse(**result["tokens"]),
    )


@router.post(
    "/refresh",
    response_model=RefreshResponse,
    summary="Refresh access token",
    description="Exchange a refresh token for a new access token.",
)
async def refresh(
    payload: RefreshTokenRequest,
    session: AsyncSession = Depends(get_db_session),
    tokens: TokenService = Depends(get_tokens),
) -> RefreshResponse:
    result = AuthService(session, tokens=tokens).refresh(payload.refresh_token)
    return RefreshResponse(tokens=TokenResponse(**result))


@router.post(
    "/reset-password",
    response_model=dict,
    summary="Reset password",
    description="Set a new password for the authenticated user.",
)
async def reset_password(
    payload: ResetPasswordRequest,
    claims: SessionClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_db_session),
    tokens: TokenService = Depends(get_tokens),
) -> dict:
    await AuthService(session, tokens=tokens).reset_password(
        claims, new_password=payload.new_password
    )
    return {"message": "Password reset successfully"}


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Get current user",
)
async def get_me(
    claims: SessionClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_db_session),
    tokens: TokenService = Depends(get_tokens),
) -> MeResponse:
    user = await AuthService(session, tokens=tokens).get_user_by_id(claims.user_id)
    return MeResponse(user=UserResponse(**asdict(user)))
