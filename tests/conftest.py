from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from recruitment.api.deps import get_db_session, get_tokens
from recruitment.api.main import app
from recruitment.core.auth import Role, TokenService
from recruitment.domain.services.auth_service import AuthService
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from tests.utils import STRONG_PASSWORD, FrozenClock, auth_headers, create_schema

RegisterFn = Callable[..., Awaitable[dict[str, Any]]]


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture()
def tokens(clock: FrozenClock) -> TokenService:
    return TokenService(secret="test-secret", issuer="recruitment-test", clock=clock)


@pytest.fixture()
async def engine() -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture()
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    """Provide a database session for tests that need direct DB access."""
    async with session_factory() as session:
        yield session


@pytest.fixture()
async def async_client(
    session_factory: async_sessionmaker[AsyncSession], tokens: TokenService
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client bound to the in-memory database and the test token service."""

    async def override_db_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_tokens] = lambda: tokens
    transport = ASGITransport(app=app)  # type: ignore[arg-type]
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.pop(get_db_session, None)
    app.dependency_overrides.pop(get_tokens, None)


@pytest.fixture()
def register(
    session_factory: async_sessionmaker[AsyncSession], tokens: TokenService
) -> RegisterFn:
    """Create a person straight through the service and return its id and headers."""

    async def _register(suffix: str, role: Role = Role.APPLICANT) -> dict[str, Any]:
        async with session_factory() as session:
            result = await AuthService(session, tokens=tokens).register_user(
                name="Test",
                surname=f"Person{suffix}",
                pnr=f"19800101{int(suffix):04d}",
                username=f"{role.value}{suffix}",
                email=f"{role.value}{suffix}@example.com",
                password=STRONG_PASSWORD,
                role=role,
            )
        user = result["user"]
        return {
            "id": user.id,
            "role": user.role,
            "username": user.username,
            "tokens": result["tokens"],
            "headers": auth_headers(result["tokens"]["access_token"]),
        }

    return _register


@pytest.fixture()
async def applicant(register: RegisterFn) -> dict[str, Any]:
    return await register("1")


@pytest.fixture()
async def other_applicant(register: RegisterFn) -> dict[str, Any]:
    return await register("2")


@pytest.fixture()
async def admin(register: RegisterFn) -> dict[str, Any]:
    return await register("9", role=Role.ADMIN)
