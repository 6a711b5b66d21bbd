from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None  # "admin", "practitioner", "staff"
    is_active: bool = True


@dataclass(frozen=True)
class AuthSession:
    user: User
    token: str
