"""Input rules shared by the account service and the request schemas."""

from __future__ import annotations

import re
from enum import Enum

PASSWORD_PATTERN = re.compile(r"^(?=.*[A-Z])(?=.*[a-z])(?=.*\d)(?=.*[!@#$%^&*]).{8,}$")
PNR_PATTERN = re.compile(r"^[0-9 -]+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# Digit groups optionally split by a dash or space, e.g. "19900101-1234".
PNR_LOGIN_PATTERN = re.compile(r"^\d+([ -]\d+)*$")

PASSWORD_RULE = (
    "Password must be at least 8 characters long and include uppercase, lowercase, "
    "a number and one of !@#$%^&*"
)
USERNAME_RULE = "Username must not look like an e-mail address or a personal number"


class LoginFieldKind(str, Enum):
    EMAIL = "email"
    PNR = "pnr"
    USERNAME = "username"


def is_password_valid(password: str) -> bool:
    return bool(PASSWORD_PATTERN.match(password))


def normalize_pnr(pnr: str) -> str:
    """Digits only; the stored and compared form of a personal number."""
    return re.sub(r"\D", "", pnr)


def is_pnr_valid(pnr: str) -> bool:
    """A personal number holds 10 or 12 digits, optionally split by spaces or dashes."""
    return bool(PNR_PATTERN.match(pnr)) and len(normalize_pnr(pnr)) in (10, 12)


def is_email_valid(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def is_username_valid(username: str) -> bool:
    """A username must be told apart from the other login identifiers."""
    return detect_login_field(username) is LoginFieldKind.USERNAME


def detect_login_field(login_field: str) -> LoginFieldKind:
    """Guess whether a login identifier is an e-mail, a personal number or a username."""
    if EMAIL_PATTERN.match(login_field):
        return LoginFieldKind.EMAIL
    if PNR_LOGIN_PATTERN.match(login_field):
        return LoginFieldKind.PNR
    return LoginFieldKind.USERNAME
