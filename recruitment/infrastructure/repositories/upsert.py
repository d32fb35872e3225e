from __future__ import annotations

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def dialect_insert(session: AsyncSession, model: Any) -> Any:
    """Return an INSERT supporting ``ON CONFLICT`` for the session's backend."""
    dialect = session.get_bind().dialect.name
    try:
        factory = _INSERTS[dialect]
    except KeyError as exc:
        raise NotImplementedError(f"Upserts are not supported on '{dialect}'") from exc
    return factory(model)
