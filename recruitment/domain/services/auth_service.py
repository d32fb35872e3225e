"""Account service: registration, login, token refresh and password reset."""

from __future__ import annotations

import structlog
from passlib.context import CryptContext
from recruitment.core.auth import (
    Role,
    SessionClaims,
    TokenKind,
    TokenService,
    get_token_service,
)
from recruitment.domain.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from recruitment.domain.models import Identity
from recruitment.domain.validators import (
    PASSWORD_RULE,
    USERNAME_RULE,
    LoginFieldKind,
    detect_login_field,
    is_email_valid,
    is_password_valid,
    is_pnr_valid,
    is_username_valid,
    normalize_pnr,
)
from recruitment.infrastructure.db.models import PersonModel
from recruitment.infrastructure.repositories.unit_of_work import UnitOfWork
from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

# Password hashing context with bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class InvalidCredentialsError(AuthenticationError):
    """Raised when login credentials are invalid."""

    code = "invalid_credentials"


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


class AuthService:
    """Service for account operations."""

    def __init__(self, session: AsyncSession, *, tokens: TokenService | None = None) -> None:
        self.session = session
        self.tokens = tokens or get_token_service()

    async def register_user(
        self,
        *,
        name: str,
        surname: str,
        pnr: str,
        username: str,
        email: str,
        password: str,
        role: Role = Role.APPLICANT,
    ) -> dict:
        """
        Register a new person and log them in.

        Returns:
            dict with user data and tokens
        """
        await logger.ainfo("register_attempt", username=username, role=role.value)

        if not all(value.strip() for value in (name, surname, pnr, username, email)):
            raise ValidationError("Fields are missing")
        if not is_email_valid(email):
            raise ValidationError("A valid email is required")
        if not is_pnr_valid(pnr):
            raise ValidationError("Provided pnr is not valid")
        if not is_username_valid(username):
            raise ValidationError(USERNAME_RULE)
        if not is_password_valid(password):
            raise ValidationError(PASSWORD_RULE)

        uow = UnitOfWork(self.session)
        if await uow.persons.get_by_username(username) is not None:
            raise ConflictError("Username is already taken", field="username")
        if await uow.persons.get_by_email(email) is not None:
            raise ConflictError("Email is already registered", field="email")
        if await uow.persons.get_by_pnr(pnr) is not None:
            raise ConflictError("Personal number is already registered", field="pnr")

        person = PersonModel(
            name=name.strip(),
            surname=surname.strip(),
            pnr=normalize_pnr(pnr),
            username=username,
            email=email.lower(),
            password=hash_password(password),
            role=role,
        )

        try:
            async with uow:
                await uow.persons.add(person)
        except ConflictError:
            # Lost a race with a concurrent registration; the constraint decided.
            await logger.awarning("register_duplicate", username=username)
            raise

        await self.session.refresh(person)

        await logger.ainfo("register_success", user_id=person.id, username=username)
        return self._session_payload(person)

    async def login(self, *, login_field: str, password: str) -> dict:
        """
        Authenticate with a username, e-mail or personal number and a password.

        Returns:
            dict with user data and tokens
        """
        kind = detect_login_field(login_field)
        await logger.ainfo("login_attempt", login_kind=kind.value)

        persons = UnitOfWork(self.session).persons
        if kind is LoginFieldKind.EMAIL:
            person = await persons.get_by_email(login_field)
        elif kind is LoginFieldKind.PNR:
            person = await persons.get_by_pnr(login_field)
        else:
            person = await persons.get_by_username(login_field)

        if person is None or not verify_password(password, person.password):
            await logger.awarning("login_failed", login_kind=kind.value)
            raise InvalidCredentialsError("Invalid credentials")

        await logger.ainfo("login_success", user_id=person.id)
        return self._session_payload(person)

    def refresh(self, refresh_token: str) -> dict:
        """Mint a new access token. Raises ``SessionExpiredError`` on any failure."""
        access_token = self.tokens.refresh(refresh_token)
        return {"access_token": access_token, "expires_in": self._access_ttl_seconds()}

    async def get_user_by_id(self, user_id: str) -> Identity:
        person = await UnitOfWork(self.session).persons.get_by_id(user_id)
        if person is None:
            raise NotFoundError(f"User {user_id} not found")
        return self._to_identity(person)

    async def reset_password(self, caller: SessionClaims, *, new_password: str) -> None:
        """Store a new password hash for the calling user."""
        if not is_password_valid(new_password):
            raise ValidationError(PASSWORD_RULE)

        uow = UnitOfWork(self.session)
        async with uow:
            updated = await uow.persons.set_password(caller.user_id, hash_password(new_password))
            if not updated:
                raise NotFoundError(f"User {caller.user_id} not found")

        await logger.ainfo("password_changed", user_id=caller.user_id)

    def _session_payload(self, person: PersonModel) -> dict:
        pair = self.tokens.issue_pair(
            user_id=person.id, role=person.role, username=person.username
        )
        return {
            "user": self._to_identity(person),
            "tokens": {
                "access_token": pair.access_token,
                "refresh_token": pair.refresh_token,
                "token_type": "bearer",
                "expires_in": pair.expires_in,
            },
        }

    def _access_ttl_seconds(self) -> int:
        return int(self.tokens.ttl_for(TokenKind.ACCESS).total_seconds())

    @staticmethod
    def _to_identity(person: PersonModel) -> Identity:
        return Identity(
            id=person.id,
            name=person.name,
            surname=person.surname,
            pnr=person.pnr,
            username=person.username,
            email=person.email,
            role=person.role.value,
            created_at=person.created_at,
        )
