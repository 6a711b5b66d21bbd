from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from clinicboard.application.dto.records import PatientDTO, parse_records
from clinicboard.application.exceptions import ClinicApiError
from clinicboard.application.ports.clinic_api import ClinicApiPort
from clinicboard.application.utils.response_adapter import collect_records
from clinicboard.domain.entities.patient import Patient


@dataclass(frozen=True)
class PatientView:
    id: str
    first_name: str
    last_name: str
    phone_no: str
    date_of_birth: str
    age: int | None
    email: str
    address: str
    insurance_provider: str
    insurance_id: str
    note: str


@dataclass(frozen=True)
class PatientListResult:
    patients: list[PatientView] = field(default_factory=list)
    error: str | None = None


def calculate_age(date_of_birth: str, today: date | None = None) -> int | None:
    try:
        born = date.fromisoformat(date_of_birth[:10])
    except ValueError:
        return None
    today = today or date.today()
    return today.year - born.year - ((today.month, today.day) < (born.month, born.day))


def format_patient_for_display(patient: Patient, today: date | None = None) -> PatientView:
    location = " ".join(part for part in (patient.city, patient.state, patient.country) if part)
    return PatientView(
        id=patient.id,
        first_name=patient.first_name,
        last_name=patient.last_name,
        phone_no=patient.phone_number,
        date_of_birth=patient.date_of_birth or "",
        age=calculate_age(patient.date_of_birth, today) if patient.date_of_birth else None,
        email=patient.email or "",
        address=patient.address or location,
        insurance_provider=patient.insurance_provider or "-",
        insurance_id=patient.insurance_id or "-",
        note=patient.medical_notes or "",
    )


def search_patients(patients: list[Patient], query: str | None) -> list[Patient]:
    """Case-insensitive match on full name or phone number."""
    needle = (query or "").strip().lower()
    if not needle:
        return patients
    return [
        p for p in patients
        if needle in f"{p.first_name} {p.last_name}".lower() or needle in p.phone_number.lower()
    ]


class PatientsUseCase:
    def __init__(self, api: ClinicApiPort) -> None:
        self._api = api
        self._logger = logging.getLogger(__name__)

    def list_active(self, search: str | None = None) -> PatientListResult:
        try:
            records = collect_records(self._api, "patients")
        except ClinicApiError as e:
            self._logger.error("Error loading patients", extra={"resource": "patients", "error": str(e)})
            return PatientListResult(error="Failed to load patients. Please try again.")

        patients = [dto.to_entity() for dto in parse_records(records, PatientDTO)]
        active = [p for p in patients if p.is_active]
        return PatientListResult(patients=[format_patient_for_display(p) for p in search_patients(active, search)])

    def get_patient(self, patient_id: str) -> PatientView | None:
        """Raises ClinicApiError when the backend fails; None when the record is unusable."""
        parsed = parse_records([self._api.get_record("patients", patient_id)], PatientDTO)
        if not parsed:
            return None
        return format_patient_for_display(parsed[0].to_entity())
