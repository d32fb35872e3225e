"""Pydantic schemas for account endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

# --- Request Schemas ---


class RegisterRequest(BaseModel):
    """Request schema for applicant registration."""

    name: str = Field(..., min_length=1, max_length=128, description="First name")
    surname: str = Field(..., min_length=1, max_length=128, description="Surname")
    pnr: str = Field(..., min_length=10, max_length=20, description="Personal identity number")
    username: str = Field(..., min_length=1, max_length=64, description="Unique username")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="Password (min 8 characters, mixed case, digit and special character)",
    )


class LoginRequest(BaseModel):
    """Request schema for login with a username, e-mail or personal number."""

    login_field: str = Field(
        ..., min_length=1, description="Username, e-mail address or personal number"
    )
    password: str = Field(..., min_length=1, description="User password")


class RefreshTokenRequest(BaseModel):
    """Request schema for token refresh."""

    refresh_token: str = Field(..., description="Refresh token")


class ResetPasswordRequest(BaseModel):
    """Request schema for setting a new password."""

    new_password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="New password (min 8 characters)",
    )


# --- Response Schemas ---


class TokenResponse(BaseModel):
    """Response schema containing JWT tokens."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str | None = Field(None, description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token TTL in seconds")


class UserResponse(BaseModel):
    """Response schema for user data. Never carries the password hash."""

    id: str = Field(..., description="User ID")
    name: str
    surname: str
    pnr: str
    username: str
    email: str
    role: str = Field(..., description="User role")
    created_at: datetime | None = Field(None, description="Account creation timestamp")


class RegisterResponse(BaseModel):
    message: str = Field(default="Registration successful")
    user: UserResponse
    tokens: TokenResponse


class LoginResponse(BaseModel):
    message: str = Field(default="Login successful")
    user: UserResponse
    tokens: TokenResponse


class RefreshResponse(BaseModel):
    message: str = Field(default="Token refreshed successfully")
    tokens: TokenResponse


class MeResponse(BaseModel):
    user: UserResponse
