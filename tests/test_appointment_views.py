"""
Tests for the appointment list and dashboard views.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from clinicboard.application.exceptions import ClinicApiError
from clinicboard.application.use_cases.appointment_list import (
    AppointmentListUseCase,
    format_appointment_for_display,
)
from clinicboard.application.use_cases.dashboard import DashboardUseCase
from clinicboard.domain.entities.appointment import Appointment
from clinicboard.domain.entities.user import User
from clinicboard.infrastructure.clinic_api.mock_api import InMemoryClinicApi


def _appointment(appointment_id: str, day: str, status: str = "scheduled", **overrides: Any) -> dict[str, Any]:
    record = {
        "id": appointment_id,
        "practitioner_id": "prac-1",
        "appointment_type_id": "type-consult",
        "appointment_date": day,
        "start_time": "09:00:00",
        "end_time": "09:30:00",
        "status": status,
    }
    record.update(overrides)
    return record


def test_format_appointment_patient_fallbacks():
    base = Appointment(**_appointment("a1", "2025-09-19"))

    named = format_appointment_for_display(
        Appointment(**_appointment("a2", "2025-09-19", patient_name="Jane Smith")), {"type-consult": "Consultation"}
    )
    by_phone = format_appointment_for_display(Appointment(**_appointment("a3", "2025-09-19", patient_phone="+1555")))
    nobody = format_appointment_for_display(base)

    assert named.patient == "Jane Smith"
    assert named.title == "Consultation"
    assert named.start_time == "9:00am"
    assert named.day == 19
    assert by_phone.patient == "Patient +1555"
    assert nobody.patient == "No Patient"
    assert nobody.type == "Appointment"


def test_list_for_range_excludes_open_slots_and_other_days():
    api = InMemoryClinicApi(records={
        "appointment-types": [{"id": "type-consult", "name": "Consultation", "duration_minutes": 30}],
        "appointments": [
            _appointment("in-range", "2025-09-10"),
            _appointment("done", "2025-09-30", status="completed"),
            _appointment("open", "2025-09-11", status="available"),
            _appointment("later", "2025-10-01"),
            _appointment("bad-time", "2025-09-12", start_time="9am"),
        ],
    })
    uc = AppointmentListUseCase(api=api)

    result = uc.list_for_range(date(2025, 9, 1), date(2025, 9, 30))

    assert [a.id for a in result.appointments] == ["in-range", "done"]
    assert result.statistics.total == 3
    assert result.statistics.completed == 1
    assert result.appointments[0].type == "Consultation"


def test_list_for_range_reports_failure():
    class FailingApi(InMemoryClinicApi):
        def list_records(self, resource, params=None):
            raise ClinicApiError("down", status_code=503, resource=resource)

    result = AppointmentListUseCase(api=FailingApi()).list_for_range(date(2025, 9, 1), date(2025, 9, 30))

    assert result.appointments == []
    assert result.error == "Failed to load appointments. Please try again."


def test_dashboard_adds_time_range():
    result = DashboardUseCase(api=InMemoryClinicApi(seed_demo_data=True)).load()

    assert result.error is None
    assert result.today_appointments[0]["time_range"] == "10:00am - 10:30am"
    assert result.reminders[0]["id"] == "rem-1"


def test_dashboard_tolerates_bad_payload():
    class OddApi(InMemoryClinicApi):
        def get_dashboard(self):
            return {"today_appointments": [{"start_time": "bad"}, "junk"], "reminders": None}

    result = DashboardUseCase(api=OddApi()).load()

    assert result.today_appointments == [{"start_time": "bad", "time_range": None}]
    assert result.reminders == []


def test_list_for_range_reads_past_the_first_page():
    early = [_appointment(f"early-{i}", "2025-08-15") for i in range(150)]
    api = InMemoryClinicApi(records={
        "appointment-types": [{"id": "type-consult", "name": "Consultation", "duration_minutes": 30}],
        "appointments": early + [_appointment("wanted", "2025-09-10")],
    })

    result = AppointmentListUseCase(api=api).list_for_range(date(2025, 9, 1), date(2025, 9, 30))

    assert [a.id for a in result.appointments] == ["wanted"]


def test_list_for_range_scopes_by_role():
    api = InMemoryClinicApi(records={
        "appointments": [
            _appointment("mine", "2025-09-10", created_by="u-desk"),
            _appointment("theirs", "2025-09-11", created_by="u-other"),
        ],
    })
    uc = AppointmentListUseCase(api=api)
    desk = User(id="u-desk", email="d@example.com", role="staff")
    practitioner = User(id="u-prac", email="p@example.com", role="practitioner")

    assert [a.id for a in uc.list_for_range(date(2025, 9, 1), date(2025, 9, 30), user=desk).appointments] == ["mine"]
    assert len(uc.list_for_range(date(2025, 9, 1), date(2025, 9, 30), user=practitioner).appointments) == 2
    assert len(uc.list_for_range(date(2025, 9, 1), date(2025, 9, 30)).appointments) == 2
