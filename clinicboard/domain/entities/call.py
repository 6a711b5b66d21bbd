from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Call:
    id: str
    phone_number: str
    call_type: str  # "incoming", "outgoing", "chat", "whatsapp"
    call_status: str  # "Live", "Answered", "Missed"
    start_time: str  # ISO datetime
    duration_seconds: int = 0
    created_at: str | None = None
    end_time: str | None = None
    patient_id: str | None = None
    patient_name: str | None = None
    call_outcome: str | None = None
    recording_url: str | None = None
    transcript: str | None = None
    ai_summary: str | None = None
    notes: str | None = None
    language: str = "en"
