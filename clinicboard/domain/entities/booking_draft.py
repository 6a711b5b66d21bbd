from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class BookingDraft:
    patient_id: str | None = None
    patient_name: str | None = None
    patient_phone: str | None = None
    selected_date: date | None = None
    selected_time: str | None = None  # 12h display, e.g. "9:30am"
    practitioner_id: str | None = None
    appointment_type_id: str | None = None
    notes: str | None = None
