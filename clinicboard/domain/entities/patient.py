from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Patient:
    id: str
    first_name: str
    last_name: str
    phone_number: str
    date_of_birth: str | None = None  # YYYY-MM-DD
    email: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    insurance_provider: str | None = None
    insurance_id: str | None = None
    medical_notes: str | None = None
    is_active: bool = True
