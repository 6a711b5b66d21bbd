"""
Tests for the in-memory clinic API used for local runs.
"""

from __future__ import annotations

from datetime import date

import pytest

from clinicboard.application.exceptions import ClinicApiError
from clinicboard.infrastructure.clinic_api.mock_api import InMemoryClinicApi


def test_response_shapes_match_backend():
    api = InMemoryClinicApi(seed_demo_data=True)

    assert isinstance(api.raw_list("practitioners"), list)
    envelope = api.raw_list("appointments")
    assert set(envelope) == {"page", "limit", "count", "results"}
    assert api.list_records("appointments").shape == "paginated"
    assert api.list_records("patients").shape == "list"


def test_list_filters():
    api = InMemoryClinicApi(seed_demo_data=True)
    today = date.today().isoformat()

    page = api.list_records("appointments", {"status": "available", "practitioner_id": "prac-1", "date": today})
    assert [r["id"] for r in page.results] == ["slot-1", "slot-2"]

    assert api.list_records("appointments", {"date": "1999-01-01"}).results == []
    assert [r["id"] for r in api.list_records("calls", {"status": "Answered"}).results] == ["call-1"]
    assert api.list_records("calls", {"status": "Missed"}).results == []
    assert [r["id"] for r in api.list_records("calls", {"search": "0001"}).results] == ["call-1"]


def test_crud_round():
    api = InMemoryClinicApi()

    first = api.create_record("reminders", {"status": "pending"})
    second = api.create_record("reminders", {"status": "pending"})
    assert (first["id"], second["id"]) == ("mock-1", "mock-2")

    updated = api.update_record("reminders", "mock-1", {"status": "done", "id": "ignored"})
    assert updated["id"] == "mock-1"
    assert api.get_record("reminders", "mock-1")["status"] == "done"

    api.delete_record("reminders", "mock-1")
    with pytest.raises(ClinicApiError) as exc:
        api.get_record("reminders", "mock-1")
    assert exc.value.status_code == 404


def test_patient_delete_is_soft():
    api = InMemoryClinicApi(seed_demo_data=True)

    api.delete_record("patients", "pat-1")

    assert api.get_record("patients", "pat-1")["is_active"] is False


def test_status_endpoint_only_for_appointments():
    api = InMemoryClinicApi(seed_demo_data=True)

    assert api.update_status("appointments", "appt-1", "completed")["status"] == "completed"
    with pytest.raises(ClinicApiError):
        api.update_status("calls", "call-1", "Missed")


def test_returned_records_are_copies():
    api = InMemoryClinicApi(seed_demo_data=True)

    api.get_record("patients", "pat-1")["first_name"] = "Changed"

    assert api.get_record("patients", "pat-1")["first_name"] == "John"


def test_dashboard_lists_booked_appointments_for_today():
    api = InMemoryClinicApi(seed_demo_data=True)

    dashboard = api.get_dashboard()

    assert [a["start_time"] for a in dashboard["today_appointments"]] == ["10:00:00"]
    assert dashboard["today_appointments"][0]["practitioner_name"] == "Amelia Garcia"
    assert dashboard["overview"]["total_calling_minutes"] == "3"
    assert dashboard["live_calls"] == []


def test_unknown_resource_rejected():
    with pytest.raises(ValueError):
        InMemoryClinicApi().list_records("invoices")
