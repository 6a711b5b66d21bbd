from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AppointmentType:
    id: str
    name: str
    duration_minutes: int
    description: str | None = None
    color: str | None = None
    is_active: bool = True


@dataclass(frozen=True)
class Appointment:
    id: str
    practitioner_id: str
    appointment_type_id: str
    appointment_date: str  # YYYY-MM-DD
    start_time: str  # HH:MM:SS
    end_time: str  # HH:MM:SS
    status: str  # "available", "scheduled", "confirmed", "completed", "cancelled"
    patient_phone: str | None = None
    patient_name: str | None = None
    notes: str | None = None
    created_by: str | None = None
