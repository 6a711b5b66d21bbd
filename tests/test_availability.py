"""
Tests for fetching bookable slots through the clinic API.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from clinicboard.application.exceptions import ClinicApiError
from clinicboard.application.use_cases.slots import AvailabilityUseCase, SlotFetchResult
from clinicboard.application.utils.fetch_guard import FetchGuard
from clinicboard.domain.entities.record_page import RecordPage
from clinicboard.infrastructure.clinic_api.mock_api import InMemoryClinicApi

DAY = date(2025, 9, 19)


def _slot(slot_id: str, start: str, status: str = "available", practitioner_id: str = "prac-1") -> dict[str, Any]:
    return {
        "id": slot_id,
        "practitioner_id": practitioner_id,
        "appointment_type_id": "type-1",
        "appointment_date": DAY.isoformat(),
        "start_time": start,
        "end_time": start,
        "status": status,
    }


class RecordingApi(InMemoryClinicApi):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.list_calls: list[tuple[str, dict[str, Any] | None]] = []

    def list_records(self, resource: str, params: dict[str, Any] | None = None) -> RecordPage:
        self.list_calls.append((resource, params))
        return super().list_records(resource, params)


class FailingApi(InMemoryClinicApi):
    def list_records(self, resource: str, params: dict[str, Any] | None = None) -> RecordPage:
        raise ClinicApiError("GET /appointments failed with 500", status_code=500, resource=resource)


class InvalidShapeApi(InMemoryClinicApi):
    def list_records(self, resource: str, params: dict[str, Any] | None = None) -> RecordPage:
        return RecordPage(shape="invalid")


def test_fetch_returns_available_slots_for_selection():
    api = RecordingApi(records={
        "appointments": [
            _slot("a", "09:00:00"),
            _slot("b", "09:30:00", status="scheduled"),
            _slot("c", "10:00:00"),
            _slot("d", "11:00:00", practitioner_id="prac-2"),
        ]
    })
    uc = AvailabilityUseCase(api=api, guard=FetchGuard())

    result = uc.fetch_available_slots("prac-1", DAY, "type-1")

    assert result.slots == ["9:00am", "10:00am"]
    assert result.error is None
    assert result.generation == 1
    assert api.list_calls == [(
        "appointments",
        {"status": "available", "practitioner_id": "prac-1", "appointment_type_id": "type-1", "date": "2025-09-19"},
    )]


def test_fetch_waits_for_all_inputs():
    api = RecordingApi(records={"appointments": [_slot("a", "09:00:00")]})
    uc = AvailabilityUseCase(api=api)

    assert uc.fetch_available_slots(None, DAY, "type-1") == SlotFetchResult()
    assert uc.fetch_available_slots("prac-1", None, "type-1") == SlotFetchResult()
    assert uc.fetch_available_slots("prac-1", DAY, "") == SlotFetchResult()
    assert api.list_calls == []


def test_superseded_fetch_is_discarded():
    """A response that arrives after a newer request for the same view is dropped."""
    guard = FetchGuard()

    class SlowApi(InMemoryClinicApi):
        def list_records(self, resource: str, params: dict[str, Any] | None = None) -> RecordPage:
            # The user changed the selection while this request was in flight
            guard.begin(AvailabilityUseCase.FETCH_KEY)
            return super().list_records(resource, params)

    uc = AvailabilityUseCase(api=SlowApi(records={"appointments": [_slot("a", "09:00:00")]}), guard=guard)

    assert uc.fetch_available_slots("prac-1", DAY, "type-1") is None
    assert guard.latest_generation(AvailabilityUseCase.FETCH_KEY) == 2


def test_other_views_do_not_supersede_each_other():
    guard = FetchGuard()
    api = InMemoryClinicApi(records={"appointments": [_slot("a", "09:00:00")]})
    uc = AvailabilityUseCase(api=api, guard=guard)

    guard.begin("available-slots:other-view")
    result = uc.fetch_available_slots("prac-1", DAY, "type-1", view_key="available-slots:this-view")

    assert result is not None
    assert result.slots == ["9:00am"]


def test_api_error_becomes_message():
    uc = AvailabilityUseCase(api=FailingApi())

    result = uc.fetch_available_slots("prac-1", DAY, "type-1")

    assert result.slots == []
    assert result.error == "Failed to load available slots. Please try again."


def test_unrecognized_response_shape_yields_no_slots():
    uc = AvailabilityUseCase(api=InvalidShapeApi())

    result = uc.fetch_available_slots("prac-1", DAY, "type-1")

    assert result.slots == []
    assert result.error is None


def test_malformed_slot_does_not_hide_valid_ones():
    api = InMemoryClinicApi(records={"appointments": [_slot("bad", "9am"), _slot("good", "10:00:00")]})

    result = AvailabilityUseCase(api=api).fetch_available_slots("prac-1", DAY, "type-1")

    assert result.slots == ["10:00am"]
    assert result.error is None
