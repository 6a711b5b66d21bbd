from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from clinicboard.application.dto.records import AppointmentDTO, parse_records
from clinicboard.application.exceptions import ClinicApiError, InvalidTimeFormat
from clinicboard.application.ports.clinic_api import ClinicApiPort
from clinicboard.application.utils.fetch_guard import FetchGuard
from clinicboard.application.utils.time_format import format_12_hour, parse_time_24, to_12_hour
from clinicboard.domain.entities.appointment import Appointment, AppointmentType
from clinicboard.domain.entities.time_of_day import TimeOfDay
from clinicboard.domain.entities.working_hours import WorkingHoursWindow

logger = logging.getLogger(__name__)


def generate_slots(start_time: str, end_time: str, duration_minutes: int) -> list[str]:
    """
    Enumerate fixed-width slot start times inside [start_time, end_time).

    A slot is only emitted if it ends at or before end_time. Returns 12h display
    strings, e.g. generate_slots("09:00", "10:00", 30) -> ["9:00am", "9:30am"].
    """
    start = parse_time_24(start_time).total_minutes
    end = parse_time_24(end_time).total_minutes
    if duration_minutes <= 0 or start >= end:
        return []

    slots: list[str] = []
    current = start
    while current + duration_minutes <= end:
        slots.append(format_12_hour(TimeOfDay(hour=current // 60, minute=current % 60)))
        current += duration_minutes
    return slots


def generate_slots_for_window(window: WorkingHoursWindow, appointment_type: AppointmentType) -> list[str]:
    return generate_slots(window.start_time, window.end_time, appointment_type.duration_minutes)


def filter_available_slots(
    records: Any,
    practitioner_id: str,
    appointment_type_id: str,
) -> list[str]:
    """Bookable start times (12h) for one practitioner and appointment type, in input order."""
    if not isinstance(records, list):
        logger.warning(
            "Availability records are not a list",
            extra={"practitioner_id": practitioner_id, "reason": type(records).__name__},
        )
        return []

    slots: list[str] = []
    for record in records:
        if not (
            record.status == "available"
            and record.practitioner_id == practitioner_id
            and record.appointment_type_id == appointment_type_id
        ):
            continue
        try:
            slots.append(to_12_hour(record.start_time))
        except InvalidTimeFormat as e:
            logger.warning(
                "Skipping slot with malformed time",
                extra={"practitioner_id": practitioner_id, "resource": "appointments", "error": str(e)},
            )
    return slots


@dataclass(frozen=True)
class SlotFetchResult:
    slots: list[str] = field(default_factory=list)
    error: str | None = None
    generation: int = 0


class AvailabilityUseCase:
    FETCH_KEY = "available-slots"

    def __init__(self, api: ClinicApiPort, guard: FetchGuard | None = None) -> None:
        self._api = api
        self._guard = guard or FetchGuard()
        self._logger = logging.getLogger(__name__)

    def fetch_available_slots(
        self,
        practitioner_id: str | None,
        appointment_date: date | None,
        appointment_type_id: str | None,
        view_key: str = FETCH_KEY,
    ) -> SlotFetchResult | None:
        """
        Fetch and filter the bookable slots for a selection.

        Returns an empty result without calling the API until all three inputs
        are set, and None when a newer fetch for the same view was started while
        this one was in flight.
        """
        if not (practitioner_id and appointment_date and appointment_type_id):
            return SlotFetchResult()

        ticket = self._guard.begin(view_key)
        params = {
            "status": "available",
            "practitioner_id": practitioner_id,
            "appointment_type_id": appointment_type_id,
            "date": appointment_date.isoformat(),
        }
        try:
            page = self._api.list_records("appointments", params)
            records: list[Appointment] | None = [
                dto.to_entity() for dto in parse_records(page.results, AppointmentDTO)
            ]
            if page.shape == "invalid":
                records = None
            error = None
        except ClinicApiError as e:
            self._logger.error(
                "Error fetching available slots",
                extra={"practitioner_id": practitioner_id, "date": params["date"], "error": str(e)},
            )
            records, error = [], "Failed to load available slots. Please try again."

        if not self._guard.is_current(ticket):
            self._logger.info(
                "Discarding superseded slot fetch",
                extra={"practitioner_id": practitioner_id, "date": params["date"]},
            )
            return None

        slots = filter_available_slots(records, practitioner_id, appointment_type_id)
        return SlotFetchResult(slots=slots, error=error, generation=ticket.generation)
