"""
Tests for role checks, record visibility and token expiry.
"""

from __future__ import annotations

import base64
import json

from clinicboard.application.utils.access import (
    has_role,
    is_admin,
    is_staff,
    is_token_expired,
    visible_to,
)
from clinicboard.domain.entities.reminder import Reminder
from clinicboard.domain.entities.user import User

ADMIN = User(id="u-admin", email="a@example.com", role="admin")
PRACTITIONER = User(id="u-prac", email="p@example.com", role="practitioner")
RECEPTION = User(id="u-desk", email="d@example.com", role="staff")


def _jwt(payload: dict) -> str:
    def part(data: dict) -> str:
        return base64.urlsafe_b64encode(json.dumps(data).encode()).decode().rstrip("=")

    return f"{part({'alg': 'HS256'})}.{part(payload)}.signature"


def test_roles():
    assert is_admin(ADMIN)
    assert not is_admin(PRACTITIONER)
    assert is_staff(ADMIN) and is_staff(PRACTITIONER)
    assert not is_staff(RECEPTION)
    assert has_role(RECEPTION, "staff", "admin")
    assert not has_role(None, "admin")
    assert not has_role(User(id="x", email="x@example.com"), "admin")


def test_visible_to_scopes_non_staff_users():
    records = [
        {"id": "1", "created_by": "u-desk"},
        {"id": "2", "created_by": "someone-else"},
        Reminder(id="3", reminder_type="callback", priority="low", status="pending", created_by="u-desk"),
    ]

    assert len(visible_to(records, ADMIN)) == 3
    assert len(visible_to(records, PRACTITIONER)) == 3
    assert [r["id"] if isinstance(r, dict) else r.id for r in visible_to(records, RECEPTION)] == ["1", "3"]
    assert visible_to(records, None) == []


def test_opaque_tokens_never_expire():
    assert not is_token_expired("demo-jwt-token-1700000000000")


def test_jwt_expiry():
    assert is_token_expired(_jwt({"exp": 1000}), now=2000)
    assert not is_token_expired(_jwt({"exp": 3000}), now=2000)
    assert not is_token_expired(_jwt({"sub": "u1"}), now=2000)


def test_unreadable_jwt_counts_as_expired():
    assert is_token_expired("aaa.!!!not-base64!!!.sig")
    assert is_token_expired(_jwt({"exp": "soon"}))
