"""
Tests for the call history view.
"""

from __future__ import annotations

from datetime import date
from typing import Any

import pytest

from clinicboard.application.exceptions import ClinicApiError
from clinicboard.application.use_cases.call_history import (
    CallHistoryUseCase,
    call_statistics,
    format_call_for_display,
    format_duration,
    search_calls,
)
from clinicboard.domain.entities.call import Call
from clinicboard.domain.entities.record_page import RecordPage
from clinicboard.infrastructure.clinic_api.mock_api import InMemoryClinicApi


def _call_record(call_id: str, **overrides: Any) -> dict[str, Any]:
    record = {
        "id": call_id,
        "phone_number": "+351910000001",
        "call_type": "incoming",
        "call_status": "Answered",
        "start_time": "2025-09-19T14:05:00",
        "end_time": "2025-09-19T14:08:05",
        "duration_seconds": 185,
        "created_at": "2025-09-19T14:08:05",
    }
    record.update(overrides)
    return record


def test_format_duration():
    assert format_duration(185) == "3:05"
    assert format_duration(60) == "1:00"
    assert format_duration(42) == "42s"
    assert format_duration(0) == "0s"


def test_format_call_for_display():
    call = Call(**_call_record("c1", patient_name="John Doe", transcript="Hello"))

    view = format_call_for_display(call)

    assert view.patient_name == "John Doe"
    assert view.date == "Sep 19, 2025"
    assert view.start_time == "2:05pm"
    assert view.end_time == "2:08pm"
    assert view.duration == "3:05"
    assert view.call_type == "Incoming call"
    assert view.has_transcript
    assert not view.is_chat


def test_format_call_fallbacks():
    chat = format_call_for_display(Call(**_call_record("c2", call_type="whatsapp", patient_id="pat-9", end_time=None)))
    anonymous = format_call_for_display(Call(**_call_record("c3", call_type="unknown")))

    assert chat.patient_name == "Patient pat-9"
    assert chat.is_chat
    assert chat.call_type == "View Chat"
    assert chat.end_time is None
    assert anonymous.patient_name == "Unknown Patient"
    assert anonymous.call_type == "Incoming call"


def test_search_and_statistics():
    calls = [
        Call(**_call_record("c1", patient_id="pat-1", duration_seconds=100)),
        Call(**_call_record("c2", phone_number="+15550001", call_status="Missed", duration_seconds=0)),
        Call(**_call_record("c3", call_status="Live", duration_seconds=51)),
    ]

    assert [c.id for c in search_calls(calls, "PAT-1")] == ["c1"]
    assert [c.id for c in search_calls(calls, "5550")] == ["c2"]
    assert search_calls(calls, None) == calls

    stats = call_statistics(calls)
    assert (stats.total, stats.live, stats.answered, stats.missed) == (3, 1, 1, 1)
    assert stats.average_duration == 50
    assert call_statistics([]).average_duration == 0


def test_load_filters_by_status_and_date():
    api = InMemoryClinicApi(records={
        "calls": [
            _call_record("c1"),
            _call_record("c2", call_status="Missed"),
            _call_record("old", created_at="2024-01-01T10:00:00", start_time="2024-01-01T09:58:00"),
        ]
    })
    uc = CallHistoryUseCase(api=api)

    everything = uc.load()
    answered_recent = uc.load(status="Answered", start_date=date(2025, 1, 1))

    assert everything.statistics.total == 3
    assert [c.id for c in answered_recent.calls] == ["c1"]
    assert answered_recent.error is None


def test_load_skips_malformed_records():
    api = InMemoryClinicApi(records={"calls": [_call_record("c1"), {"id": "broken"}]})

    result = CallHistoryUseCase(api=api).load()

    assert [c.id for c in result.calls] == ["c1"]


def test_load_reports_api_failure():
    class FailingApi(InMemoryClinicApi):
        def list_records(self, resource: str, params: dict[str, Any] | None = None) -> RecordPage:
            raise ClinicApiError("GET /calls failed with 503", status_code=503, resource=resource)

    result = CallHistoryUseCase(api=FailingApi()).load()

    assert result.calls == []
    assert result.error == "Failed to load call history. Please try again."


def test_get_call():
    api = InMemoryClinicApi(records={"calls": [_call_record("c1", ai_summary="Booked.")]})
    uc = CallHistoryUseCase(api=api)

    assert uc.get_call("c1").ai_summary == "Booked."
    with pytest.raises(ClinicApiError):
        uc.get_call("missing")
