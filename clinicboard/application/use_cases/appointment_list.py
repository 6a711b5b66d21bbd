from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from clinicboard.application.dto.records import AppointmentDTO, AppointmentTypeDTO, parse_records
from clinicboard.application.exceptions import ClinicApiError, InvalidTimeFormat
from clinicboard.application.ports.clinic_api import ClinicApiPort
from clinicboard.application.utils.access import visible_to
from clinicboard.application.utils.response_adapter import collect_records
from clinicboard.application.utils.time_format import to_12_hour
from clinicboard.domain.entities.appointment import Appointment, AppointmentType
from clinicboard.domain.entities.user import User


@dataclass(frozen=True)
class AppointmentView:
    id: str
    title: str
    start_time: str
    end_time: str
    patient: str
    type: str
    status: str
    day: int | None = None


@dataclass(frozen=True)
class AppointmentStatistics:
    total: int = 0
    scheduled: int = 0
    completed: int = 0
    cancelled: int = 0


@dataclass(frozen=True)
class AppointmentListResult:
    appointments: list[AppointmentView] = field(default_factory=list)
    statistics: AppointmentStatistics = AppointmentStatistics()
    error: str | None = None


def format_appointment_for_display(
    appointment: Appointment,
    type_names: dict[str, str] | None = None,
) -> AppointmentView:
    if appointment.patient_name and appointment.patient_name.strip():
        patient = appointment.patient_name
    elif appointment.patient_phone:
        patient = f"Patient {appointment.patient_phone}"
    else:
        patient = "No Patient"

    type_name = (type_names or {}).get(appointment.appointment_type_id, "Appointment")
    try:
        day = date.fromisoformat(appointment.appointment_date[:10]).day
    except ValueError:
        day = None

    return AppointmentView(
        id=appointment.id,
        title=type_name,
        start_time=to_12_hour(appointment.start_time),
        end_time=to_12_hour(appointment.end_time),
        patient=patient,
        type=type_name,
        status=appointment.status,
        day=day,
    )


def appointment_statistics(appointments: list[Appointment]) -> AppointmentStatistics:
    return AppointmentStatistics(
        total=len(appointments),
        scheduled=sum(1 for a in appointments if a.status == "scheduled"),
        completed=sum(1 for a in appointments if a.status == "completed"),
        cancelled=sum(1 for a in appointments if a.status == "cancelled"),
    )


class AppointmentListUseCase:
    def __init__(self, api: ClinicApiPort) -> None:
        self._api = api
        self._logger = logging.getLogger(__name__)

    def list_appointment_types(self) -> list[AppointmentType]:
        page = self._api.list_records("appointment-types")
        return [dto.to_entity() for dto in parse_records(page.results, AppointmentTypeDTO)]

    def list_for_range(
        self,
        start_date: date,
        end_date: date,
        practitioner_id: str | None = None,
        user: User | None = None,
    ) -> AppointmentListResult:
        """
        Appointments with start_date <= appointment_date <= end_date (booked ones, not open slots).

        Every page of the listing is read before filtering. When a user is given,
        non-staff users only see appointments they created.
        """
        params = {"practitioner_id": practitioner_id} if practitioner_id else None
        try:
            records = collect_records(self._api, "appointments", params)
            types = self.list_appointment_types()
        except ClinicApiError as e:
            self._logger.error("Error loading appointments", extra={"resource": "appointments", "error": str(e)})
            return AppointmentListResult(error="Failed to load appointments. Please try again.")

        start_iso, end_iso = start_date.isoformat(), end_date.isoformat()
        appointments = [
            dto.to_entity()
            for dto in parse_records(records, AppointmentDTO)
            if dto.status != "available" and start_iso <= dto.appointment_date[:10] <= end_iso
        ]
        if user is not None:
            appointments = visible_to(appointments, user)
        type_names = {t.id: t.name for t in types}

        views: list[AppointmentView] = []
        for appointment in appointments:
            try:
                views.append(format_appointment_for_display(appointment, type_names))
            except InvalidTimeFormat as e:
                self._logger.warning(
                    "Skipping appointment with malformed time",
                    extra={"resource": "appointments", "error": str(e)},
                )
        return AppointmentListResult(appointments=views, statistics=appointment_statistics(appointments))
