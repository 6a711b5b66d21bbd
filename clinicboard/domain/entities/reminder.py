from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Reminder:
    id: str
    reminder_type: str  # "prescription", "renewal_prescription", "callback", "followup", ...
    priority: str  # "low", "medium", "high"
    status: str  # "pending", "completed", ...
    patient_id: str | None = None
    patient_phone: str | None = None
    title: str | None = None
    task_description: str | None = None
    due_date: str | None = None  # YYYY-MM-DD
    due_time: str | None = None  # HH:MM:SS
    source: str | None = None
    appointment_id: str | None = None
    call_id: str | None = None
    created_by: str | None = None
