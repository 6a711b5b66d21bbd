from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from clinicboard.application.dto.records import CallDTO, parse_records
from clinicboard.application.exceptions import ClinicApiError
from clinicboard.application.ports.clinic_api import ClinicApiPort
from clinicboard.application.utils.response_adapter import collect_records
from clinicboard.application.utils.time_format import format_12_hour
from clinicboard.domain.entities.call import Call
from clinicboard.domain.entities.time_of_day import TimeOfDay

CALL_TYPE_LABELS = {
    "incoming": "Incoming call",
    "outgoing": "Outgoing call",
    "chat": "View Chat",
    "whatsapp": "View Chat",
}
CHAT_CALL_TYPES = {"chat", "whatsapp"}


@dataclass(frozen=True)
class CallView:
    id: str
    patient_name: str
    status: str
    phone_no: str
    call_type: str
    duration: str
    date: str
    has_transcript: bool
    is_chat: bool
    start_time: str
    end_time: str | None = None
    transcript: str | None = None
    ai_summary: str | None = None
    notes: str | None = None
    recording_url: str | None = None


@dataclass(frozen=True)
class CallStatistics:
    total: int = 0
    live: int = 0
    answered: int = 0
    missed: int = 0
    average_duration: int = 0


@dataclass(frozen=True)
class CallHistoryResult:
    calls: list[CallView] = field(default_factory=list)
    statistics: CallStatistics = CallStatistics()
    error: str | None = None


def _parse_iso(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_duration(seconds: int) -> str:
    minutes, secs = divmod(max(seconds, 0), 60)
    if minutes > 0:
        return f"{minutes}:{secs:02d}"
    return f"{secs}s"


def format_call_for_display(call: Call) -> CallView:
    started = _parse_iso(call.start_time)
    ended = _parse_iso(call.end_time)

    if call.patient_name:
        patient_name = call.patient_name
    elif call.patient_id:
        patient_name = f"Patient {call.patient_id}"
    else:
        patient_name = "Unknown Patient"

    call_type = call.call_type.lower()
    return CallView(
        id=call.id,
        patient_name=patient_name,
        status=call.call_status,
        phone_no=call.phone_number,
        call_type=CALL_TYPE_LABELS.get(call_type, "Incoming call"),
        duration=format_duration(call.duration_seconds),
        date=f"{started:%b} {started.day}, {started.year}" if started else "",
        has_transcript=bool(call.transcript),
        is_chat=call_type in CHAT_CALL_TYPES,
        start_time=format_12_hour(TimeOfDay(started.hour, started.minute)) if started else "",
        end_time=format_12_hour(TimeOfDay(ended.hour, ended.minute)) if ended else None,
        transcript=call.transcript,
        ai_summary=call.ai_summary,
        notes=call.notes,
        recording_url=call.recording_url,
    )


def search_calls(calls: list[Call], term: str | None) -> list[Call]:
    if not term:
        return calls
    needle = term.lower()
    return [
        call
        for call in calls
        if (call.patient_id and needle in call.patient_id.lower()) or needle in call.phone_number.lower()
    ]


def filter_calls_since(calls: list[Call], start_date: date | None) -> list[Call]:
    if start_date is None:
        return calls
    kept: list[Call] = []
    for call in calls:
        created = _parse_iso(call.created_at or call.start_time)
        if created and created.date() >= start_date:
            kept.append(call)
    return kept


def call_statistics(calls: list[Call]) -> CallStatistics:
    total = len(calls)
    total_duration = sum(call.duration_seconds for call in calls)
    return CallStatistics(
        total=total,
        live=sum(1 for call in calls if call.call_status == "Live"),
        answered=sum(1 for call in calls if call.call_status == "Answered"),
        missed=sum(1 for call in calls if call.call_status == "Missed"),
        average_duration=round(total_duration / total) if total else 0,
    )


class CallHistoryUseCase:
    def __init__(self, api: ClinicApiPort) -> None:
        self._api = api
        self._logger = logging.getLogger(__name__)

    def load(
        self,
        status: str | None = None,
        search: str | None = None,
        start_date: date | None = None,
    ) -> CallHistoryResult:
        params: dict[str, Any] = {}
        if status:
            params["status"] = status
        if search:
            params["search"] = search
        if start_date:
            params["start_date"] = start_date.isoformat()

        try:
            records = collect_records(self._api, "calls", params)
        except ClinicApiError as e:
            self._logger.error("Error loading call history", extra={"resource": "calls", "error": str(e)})
            return CallHistoryResult(error="Failed to load call history. Please try again.")

        calls = [dto.to_entity() for dto in parse_records(records, CallDTO)]
        if status:
            calls = [call for call in calls if call.call_status == status]
        calls = filter_calls_since(search_calls(calls, search), start_date)

        return CallHistoryResult(
            calls=[format_call_for_display(call) for call in calls],
            statistics=call_statistics(calls),
        )

    def get_call(self, call_id: str) -> CallView:
        """Single call with transcript and summary. Raises ClinicApiError on failure."""
        record = self._api.get_record("calls", call_id)
        return format_call_for_display(CallDTO.model_validate(record).to_entity())
