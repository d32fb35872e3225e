from __future__ import annotations

import pytest
from recruitment.domain.validators import (
    LoginFieldKind,
    detect_login_field,
    is_email_valid,
    is_password_valid,
    is_pnr_valid,
    is_username_valid,
    normalize_pnr,
)


@pytest.mark.parametrize(
    ("password", "valid"),
    [
        ("Secret#123", True),
        ("Aa1!aaaa", True),
        ("Aa1!aaa", False),
        ("secret#123", False),
        ("SECRET#123", False),
        ("Secret#abc", False),
        ("Secret1234", False),
    ],
)
def test_password_rule(password: str, valid: bool) -> None:
    assert is_password_valid(password) is valid


@pytest.mark.parametrize(
    ("pnr", "valid"),
    [
        ("199001011234", True),
        ("9001011234", True),
        ("19900101-1234", True),
        ("900101 1234", True),
        ("12345", False),
        ("1990010112345", False),
        ("19900101X234", False),
    ],
)
def test_pnr_rule(pnr: str, valid: bool) -> None:
    assert is_pnr_valid(pnr) is valid


def test_email_rule() -> None:
    assert is_email_valid("ada@example.com")
    assert not is_email_valid("ada@example")
    assert not is_email_valid("ada example@example.com")


@pytest.mark.parametrize(
    ("login_field", "kind"),
    [
        ("ada@example.com", LoginFieldKind.EMAIL),
        ("199001011234", LoginFieldKind.PNR),
        ("19900101-1234", LoginFieldKind.PNR),
        ("900101 1234", LoginFieldKind.PNR),
        ("ada", LoginFieldKind.USERNAME),
        ("ada1990", LoginFieldKind.USERNAME),
    ],
)
def test_detect_login_field(login_field: str, kind: LoginFieldKind) -> None:
    assert detect_login_field(login_field) is kind


def test_normalize_pnr_keeps_digits_only() -> None:
    assert normalize_pnr("19900101-1234") == "199001011234"
    assert normalize_pnr("900101 1234") == "9001011234"
    assert normalize_pnr("199001011234") == "199001011234"


@pytest.mark.parametrize(
    ("username", "valid"),
    [
        ("ada", True),
        ("ada_1990", True),
        ("123456", False),
        ("1990-0101", False),
        ("ada@example.com", False),
    ],
)
def test_username_must_not_shadow_other_login_fields(username: str, valid: bool) -> None:
    assert is_username_valid(username) is valid
