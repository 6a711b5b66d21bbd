from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from clinicboard.domain.entities.appointment import Appointment, AppointmentType
from clinicboard.domain.entities.call import Call
from clinicboard.domain.entities.patient import Patient
from clinicboard.domain.entities.reminder import Reminder
from clinicboard.domain.entities.working_hours import DAY_NAMES, WorkingHoursWindow

logger = logging.getLogger(__name__)


class _RecordDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @field_validator("id", mode="before", check_fields=False)
    @classmethod
    def _id_as_str(cls, value: Any) -> Any:
        return str(value) if value is not None else value


class AppointmentDTO(_RecordDTO):
    id: str
    practitioner_id: str
    appointment_type_id: str
    appointment_date: str
    start_time: str
    end_time: str
    status: str
    patient_phone: str | None = None
    patient_name: str | None = None
    notes: str | None = None
    created_by: str | None = None

    def to_entity(self) -> Appointment:
        return Appointment(**self.model_dump())


class AppointmentTypeDTO(_RecordDTO):
    id: str
    name: str
    duration_minutes: int
    description: str | None = None
    color: str | None = None
    is_active: bool = True

    def to_entity(self) -> AppointmentType:
        return AppointmentType(**self.model_dump())


class CallDTO(_RecordDTO):
    id: str
    phone_number: str
    call_type: str
    call_status: str
    start_time: str
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

    def to_entity(self) -> Call:
        return Call(**self.model_dump())


class WorkingHourDTO(_RecordDTO):
    id: str
    practitioner_id: str
    day_of_week: str
    start_time: str
    end_time: str
    is_active: bool = True

    @field_validator("day_of_week", mode="before")
    @classmethod
    def _day_name(cls, value: Any) -> Any:
        if isinstance(value, int) or (isinstance(value, str) and value.strip().isdigit()):
            index = int(value)
            if not 0 <= index < len(DAY_NAMES):
                raise ValueError(f"day_of_week out of range: {value}")
            return DAY_NAMES[index]
        return value.strip().lower() if isinstance(value, str) else value

    def to_entity(self) -> WorkingHoursWindow:
        return WorkingHoursWindow(**self.model_dump())


class ReminderDTO(_RecordDTO):
    id: str
    reminder_type: str = ""
    priority: str = ""
    status: str = "pending"
    patient_id: str | None = None
    patient_phone: str | None = None
    title: str | None = None
    task_description: str | None = None
    due_date: str | None = None
    due_time: str | None = None
    source: str | None = None
    appointment_id: str | None = None
    call_id: str | None = None
    created_by: str | None = None

    def to_entity(self) -> Reminder:
        return Reminder(**self.model_dump())


class PatientDTO(_RecordDTO):
    id: str
    first_name: str
    last_name: str
    phone_number: str
    date_of_birth: str | None = None
    email: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    insurance_provider: str | None = None
    insurance_id: str | None = None
    medical_notes: str | None = None
    is_active: bool = True

    def to_entity(self) -> Patient:
        return Patient(**self.model_dump())


DTO = TypeVar("DTO", bound=_RecordDTO)


def parse_records(records: list[dict[str, Any]], dto: type[DTO]) -> list[DTO]:
    """Validate raw records, skipping the ones that do not fit the DTO."""
    parsed: list[DTO] = []
    for record in records:
        try:
            parsed.append(dto.model_validate(record))
        except ValidationError as e:
            logger.warning(
                "Skipping malformed record",
                extra={"resource": dto.__name__, "error": str(e.errors()[:1])},
            )
    return parsed
