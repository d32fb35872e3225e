"""Transactional reconciliation of an applicant's child collections.

A save replaces the owner's stored collection with the desired one: rows
missing from the desired set are deleted, keyed rows are upserted on their
natural key and unkeyed rows are inserted. The whole sequence runs inside one
unit of work, so a failure at any step leaves the stored state untouched.

The delete statement is phrased against the *desired* keys rather than a
previously read snapshot. Combined with the owner row lock this keeps two
overlapping saves for the same owner from ever mixing halves of both sets.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Collection, Hashable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Generic, Protocol, TypeVar

import structlog
from recruitment.domain.errors import NotFoundError, ValidationError
from recruitment.domain.models import AvailabilityWindow, CompetenceEntry
from recruitment.infrastructure.repositories.unit_of_work import UnitOfWork

logger = structlog.get_logger()

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


@dataclass(frozen=True, slots=True)
class ReconciliationPlan(Generic[T, K]):
    """Diff between a stored collection and the desired one."""

    to_delete: list[T]
    to_upsert: list[T]
    to_insert: list[T]
    keep_keys: frozenset[K]


def plan_reconciliation(
    current: Sequence[T],
    desired: Sequence[T],
    *,
    key: Callable[[T], K],
    has_identity: Callable[[T], bool],
) -> ReconciliationPlan[T, K]:
    """Partition ``desired`` into upserts and inserts and find what to delete."""
    keep_keys = frozenset(key(item) for item in desired)
    return ReconciliationPlan(
        to_delete=[item for item in current if key(item) not in keep_keys],
        to_upsert=[item for item in desired if has_identity(item)],
        to_insert=[item for item in desired if not has_identity(item)],
        keep_keys=keep_keys,
    )


class ChildCollection(Protocol[T, K]):
    name: str

    def key(self, item: T) -> K: ...

    def has_identity(self, item: T) -> bool: ...

    async def load(self, owner_id: str) -> list[T]: ...

    async def delete_except(self, owner_id: str, keep: Collection[K]) -> int: ...

    async def upsert(self, owner_id: str, items: Sequence[T]) -> None: ...

    async def insert(self, owner_id: str, items: Sequence[T]) -> None: ...


class CompetenceCollection:
    """Competences are keyed by their type; every entry is an upsert."""

    name = "competences"

    def __init__(self, uow: UnitOfWork) -> None:
        self._repo = uow.competences

    def key(self, item: CompetenceEntry) -> int:
        return item.competence_id

    def has_identity(self, item: CompetenceEntry) -> bool:
        return True

    async def load(self, owner_id: str) -> list[CompetenceEntry]:
        return await self._repo.list_for(owner_id)

    async def delete_except(self, owner_id: str, keep: Collection[int]) -> int:
        return await self._repo.delete_except(owner_id, keep)

    async def upsert(self, owner_id: str, items: Sequence[CompetenceEntry]) -> None:
        await self._repo.upsert(owner_id, items)

    async def insert(self, owner_id: str, items: Sequence[CompetenceEntry]) -> None:
        await self._repo.upsert(owner_id, items)


class AvailabilityCollection:
    """Windows are diffed on their date pair; only persisted windows carry an id."""

    name = "availability"

    def __init__(self, uow: UnitOfWork) -> None:
        self._repo = uow.availability

    def key(self, item: AvailabilityWindow) -> tuple[date, date]:
        return item.period

    def has_identity(self, item: AvailabilityWindow) -> bool:
        return item.id is not None

    async def load(self, owner_id: str) -> list[AvailabilityWindow]:
        return await self._repo.list_for(owner_id)

    async def delete_except(self, owner_id: str, keep: Collection[tuple[date, date]]) -> int:
        return await self._repo.delete_except(owner_id, keep)

    async def upsert(self, owner_id: str, items: Sequence[AvailabilityWindow]) -> None:
        await self._repo.upsert(owner_id, items)

    async def insert(self, owner_id: str, items: Sequence[AvailabilityWindow]) -> None:
        await self._repo.insert(owner_id, items)


async def reconcile(
    uow: UnitOfWork,
    owner_id: str,
    desired: Sequence[T],
    collection: ChildCollection[T, K],
) -> list[T]:
    """Apply the desired collection for ``owner_id`` and return the stored result.

    Must run inside ``uow``; the caller validates ``desired`` beforehand.
    """
    if not await uow.persons.lock(owner_id):
        raise NotFoundError(f"User {owner_id} not found")

    current = await collection.load(owner_id)
    plan = plan_reconciliation(
        current, desired, key=collection.key, has_identity=collection.has_identity
    )

    deleted = await collection.delete_except(owner_id, plan.keep_keys)
    await collection.upsert(owner_id, plan.to_upsert)
    await collection.insert(owner_id, plan.to_insert)

    result = await collection.load(owner_id)
    await logger.ainfo(
        f"{collection.name}_reconciled",
        owner_id=owner_id,
        deleted=deleted,
        upserted=len(plan.to_upsert),
        inserted=len(plan.to_insert),
        total=len(result),
    )
    return result


def validate_competences(entries: Sequence[CompetenceEntry]) -> list[CompetenceEntry]:
    seen: set[int] = set()
    for entry in entries:
        if entry.competence_id <= 0:
            raise ValidationError(f"Invalid competence id {entry.competence_id}")
        years = entry.years_of_experience
        if not math.isfinite(years) or years < 0:
            raise ValidationError("Years of experience must be a non-negative number")
        if entry.competence_id in seen:
            raise ValidationError(f"Competence {entry.competence_id} is listed more than once")
        seen.add(entry.competence_id)
    return list(entries)


def validate_availability(windows: Sequence[AvailabilityWindow]) -> list[AvailabilityWindow]:
    seen: set[tuple[date, date]] = set()
    for window in windows:
        if window.from_date > window.to_date:
            raise ValidationError(
                f"Availability starting {window.from_date} ends before it starts"
            )
        if window.period in seen:
            raise ValidationError(
                f"Availability {window.from_date} to {window.to_date} is listed more than once"
            )
        seen.add(window.period)
    return list(windows)
