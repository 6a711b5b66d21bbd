from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from clinicboard.application.dto.records import AppointmentDTO, AppointmentTypeDTO
from clinicboard.application.exceptions import BookingValidationError, ClinicApiError
from clinicboard.application.ports.clinic_api import ClinicApiPort
from clinicboard.application.utils.time_format import MINUTES_PER_DAY, add_minutes, to_24_hour, to_minutes
from clinicboard.domain.entities.appointment import Appointment, AppointmentType
from clinicboard.domain.entities.booking_draft import BookingDraft

MISSING_DATE = "Please select a date"
MISSING_TIME = "Please select a time slot"
MISSING_PATIENT = "Please select a patient"
MISSING_APPOINTMENT_TYPE = "Please select an appointment type"
MISSING_PRACTITIONER = "Please select a practitioner"
CROSSES_MIDNIGHT = "Appointment must end before midnight"
SUBMIT_FAILED = "Failed to book appointment. Please try again."


@dataclass(frozen=True)
class BookingResult:
    action: str  # "booked", "invalid", "failed"
    message: str | None
    appointment: Appointment | dict[str, Any] | None
    draft: BookingDraft


def validate_draft(draft: BookingDraft) -> None:
    """Raise BookingValidationError for the first missing field."""
    if not draft.selected_date:
        raise BookingValidationError(MISSING_DATE)
    if not draft.selected_time:
        raise BookingValidationError(MISSING_TIME)
    if not draft.patient_id:
        raise BookingValidationError(MISSING_PATIENT)
    if not draft.appointment_type_id:
        raise BookingValidationError(MISSING_APPOINTMENT_TYPE)
    if not draft.practitioner_id:
        raise BookingValidationError(MISSING_PRACTITIONER)


def derive_end_time(start_time24: str, duration_minutes: int) -> str:
    # Appointments never roll over into the next day
    if to_minutes(start_time24) + duration_minutes >= MINUTES_PER_DAY:
        raise BookingValidationError(CROSSES_MIDNIGHT)
    return add_minutes(start_time24, duration_minutes)


class BookingUseCase:
    def __init__(self, api: ClinicApiPort, default_duration_minutes: int = 30) -> None:
        self._api = api
        self._default_duration_minutes = default_duration_minutes
        self._logger = logging.getLogger(__name__)

    def submit(
        self,
        draft: BookingDraft,
        created_by: str,
        appointment_types: list[AppointmentType] | None = None,
    ) -> BookingResult:
        """
        Validate the draft and create a "scheduled" appointment.

        The draft is returned unchanged on failure so the form can be corrected
        and resubmitted; on success an empty draft replaces it.
        """
        try:
            validate_draft(draft)
            duration = self._get_duration_minutes(draft.appointment_type_id, appointment_types)
            start_time = to_24_hour(draft.selected_time)
            end_time = derive_end_time(start_time, duration)
        except BookingValidationError as e:
            return BookingResult(action="invalid", message=str(e), appointment=None, draft=draft)

        payload = {
            "patient_id": draft.patient_id,
            "patient_name": draft.patient_name,
            "patient_phone": draft.patient_phone,
            "practitioner_id": draft.practitioner_id,
            "appointment_type_id": draft.appointment_type_id,
            "appointment_date": draft.selected_date.isoformat(),
            "start_time": start_time,
            "end_time": end_time,
            "status": "scheduled",
            "notes": draft.notes,
            "created_by": created_by,
        }

        try:
            created = self._api.create_record("appointments", payload)
        except ClinicApiError as e:
            self._logger.error(
                "Error creating appointment",
                extra={"practitioner_id": draft.practitioner_id, "date": payload["appointment_date"], "error": str(e)},
            )
            return BookingResult(action="failed", message=SUBMIT_FAILED, appointment=None, draft=draft)

        self._logger.info(
            "Appointment booked",
            extra={"practitioner_id": draft.practitioner_id, "date": payload["appointment_date"]},
        )
        return BookingResult(
            action="booked",
            message=None,
            appointment=self._to_appointment(created),
            draft=BookingDraft(),
        )

    def _get_duration_minutes(
        self,
        appointment_type_id: str,
        appointment_types: list[AppointmentType] | None,
    ) -> int:
        if appointment_types is not None:
            for appointment_type in appointment_types:
                if appointment_type.id == appointment_type_id:
                    return appointment_type.duration_minutes
            return self._default_duration_minutes

        try:
            record = self._api.get_record("appointment-types", appointment_type_id)
            duration = AppointmentTypeDTO.model_validate(record).duration_minutes
        except (ClinicApiError, ValidationError) as e:
            self._logger.warning(
                "Appointment type lookup failed, using default duration",
                extra={"error": str(e)},
            )
            return self._default_duration_minutes
        return duration if duration > 0 else self._default_duration_minutes

    def _to_appointment(self, record: dict[str, Any]) -> Appointment | dict[str, Any]:
        try:
            return AppointmentDTO.model_validate(record).to_entity()
        except ValidationError:
            return record
