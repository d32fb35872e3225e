"""Reference data seeded into every environment."""

from __future__ import annotations

COMPETENCE_TYPES: list[dict] = [
    {"id": 1, "name": "ticket sales"},
    {"id": 2, "name": "lotteries"},
    {"id": 3, "name": "roller coaster operation"},
]
