from __future__ import annotations

import math
from datetime import date

import pytest
from recruitment.domain.errors import ValidationError
from recruitment.domain.models import AvailabilityWindow, CompetenceEntry
from recruitment.domain.services.reconciliation import (
    plan_reconciliation,
    validate_availability,
    validate_competences,
)


def _competence_plan(current, desired):
    return plan_reconciliation(
        current, desired, key=lambda e: e.competence_id, has_identity=lambda e: True
    )


def test_plan_updates_kept_rows_and_deletes_the_rest() -> None:
    current = [CompetenceEntry(1, 2), CompetenceEntry(2, 3)]
    desired = [CompetenceEntry(1, 5)]

    plan = _competence_plan(current, desired)

    assert plan.to_delete == [CompetenceEntry(2, 3)]
    assert plan.to_upsert == [CompetenceEntry(1, 5)]
    assert plan.to_insert == []
    assert plan.keep_keys == frozenset({1})


def test_plan_for_empty_desired_deletes_everything() -> None:
    current = [CompetenceEntry(1, 2), CompetenceEntry(2, 3)]

    plan = _competence_plan(current, [])

    assert plan.to_delete == current
    assert plan.to_upsert == []
    assert plan.keep_keys == frozenset()


def test_plan_is_empty_when_desired_equals_current() -> None:
    current = [CompetenceEntry(1, 2), CompetenceEntry(2, 3)]

    plan = _competence_plan(current, list(current))

    assert plan.to_delete == []
    assert plan.to_upsert == current


def test_availability_plan_splits_new_and_stored_windows() -> None:
    stored = AvailabilityWindow(date(2026, 6, 1), date(2026, 6, 30), id=7)
    dropped = AvailabilityWindow(date(2026, 8, 1), date(2026, 8, 31), id=8)
    new = AvailabilityWindow(date(2026, 7, 1), date(2026, 7, 15))

    plan = plan_reconciliation(
        [stored, dropped],
        [stored, new],
        key=lambda w: w.period,
        has_identity=lambda w: w.id is not None,
    )

    assert plan.to_delete == [dropped]
    assert plan.to_upsert == [stored]
    assert plan.to_insert == [new]


@pytest.mark.parametrize(
    "entries",
    [
        [CompetenceEntry(0, 1)],
        [CompetenceEntry(1, -1)],
        [CompetenceEntry(1, math.inf)],
        [CompetenceEntry(1, math.nan)],
        [CompetenceEntry(1, 1), CompetenceEntry(1, 2)],
    ],
)
def test_invalid_competences_are_rejected(entries) -> None:
    with pytest.raises(ValidationError):
        validate_competences(entries)


def test_valid_competences_pass_through() -> None:
    entries = [CompetenceEntry(1, 0), CompetenceEntry(3, 2.5)]

    assert validate_competences(entries) == entries


def test_inverted_window_is_rejected() -> None:
    with pytest.raises(ValidationError):
        validate_availability([AvailabilityWindow(date(2026, 2, 1), date(2026, 1, 1))])


def test_duplicate_window_is_rejected() -> None:
    window = AvailabilityWindow(date(2026, 1, 1), date(2026, 1, 31))

    with pytest.raises(ValidationError):
        validate_availability([window, AvailabilityWindow(window.from_date, window.to_date, id=3)])


def test_single_day_window_is_valid() -> None:
    window = AvailabilityWindow(date(2026, 1, 1), date(2026, 1, 1))

    assert validate_availability([window]) == [window]
