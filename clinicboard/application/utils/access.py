from __future__ import annotations

import base64
import binascii
import json
import time
from typing import Any, Iterable, TypeVar

from clinicboard.domain.entities.user import User

STAFF_ROLES = frozenset({"admin", "practitioner"})

T = TypeVar("T")


def has_role(user: User | None, *roles: str) -> bool:
    return bool(user and user.role and user.role in roles)


def is_admin(user: User | None) -> bool:
    return has_role(user, "admin")


def is_practitioner(user: User | None) -> bool:
    return has_role(user, "practitioner")


def is_staff(user: User | None) -> bool:
    return has_role(user, *STAFF_ROLES)


def visible_to(records: Iterable[T], user: User | None, owner_field: str = "created_by") -> list[T]:
    """
    Records the user may see: staff see everything, other users only what they created.

    Works on entities and on raw dicts.
    """
    records = list(records)
    if is_staff(user):
        return records
    if user is None:
        return []
    return [r for r in records if _field(r, owner_field) == user.id]


def is_token_expired(token: str, now: float | None = None) -> bool:
    """
    JWT expiry check on the `exp` claim.

    Tokens that are not JWTs (the demo login issues opaque tokens) never expire.
    A JWT whose payload cannot be read counts as expired.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return False
    payload_part = parts[1] + "=" * (-len(parts[1]) % 4)
    try:
        payload = json.loads(base64.urlsafe_b64decode(payload_part))
    except (binascii.Error, ValueError):
        return True
    if not isinstance(payload, dict):
        return True

    exp = payload.get("exp")
    if exp is None:
        return False
    if not isinstance(exp, (int, float)):
        return True
    return exp < (time.time() if now is None else now)


def _field(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)
