#!/usr/bin/env python3
"""
Create an admin account. Admins cannot register over HTTP.

Run with:
    python scripts/create_admin.py --username admin --email admin@example.com \
        --pnr 198001011234 --name Ada --surname Admin
The password is read from the ADMIN_PASSWORD environment variable or prompted for.
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from recruitment.core.auth import Role  # noqa: E402
from recruitment.core.logging import setup_logging  # noqa: E402
from recruitment.domain.errors import RecruitmentError  # noqa: E402
from recruitment.domain.services.auth_service import AuthService  # noqa: E402
from recruitment.infrastructure.db.session import get_session_factory  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--username", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--pnr", required=True)
    parser.add_argument("--name", required=True)
    parser.add_argument("--surname", required=True)
    return parser.parse_args(argv)


async def create_admin(args: argparse.Namespace, password: str) -> str:
    async with get_session_factory()() as session:
        result = await AuthService(session).register_user(
            name=args.name,
            surname=args.surname,
            pnr=args.pnr,
            username=args.username,
            email=args.email,
            password=password,
            role=Role.ADMIN,
        )
    return result["user"].id


def main(argv: list[str] | None = None) -> int:
    setup_logging(json_output=False)
    args = parse_args(argv)
    password = os.environ.get("ADMIN_PASSWORD") or getpass.getpass("Admin password: ")
    try:
        admin_id = asyncio.run(create_admin(args, password))
    except RecruitmentError as exc:
        print(f"Could not create admin: {exc}", file=sys.stderr)
        return 1
    print(f"Created admin {args.username} ({admin_id})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
