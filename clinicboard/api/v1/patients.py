from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query

from clinicboard.api.v1.schemas import PatientListResponseSchema, PatientViewSchema
from clinicboard.application.exceptions import ClinicApiError
from clinicboard.application.use_cases.patients import PatientsUseCase
from clinicboard.wiring.dependencies import get_patients_use_case

router = APIRouter(prefix="/patients", tags=["patients"])


@router.get("", response_model=PatientListResponseSchema)
def list_patients(
    search: str | None = Query(None),
    uc: PatientsUseCase = Depends(get_patients_use_case),
) -> PatientListResponseSchema:
    result = uc.list_active(search=search)
    return PatientListResponseSchema.model_validate(asdict(result))


@router.get("/{patient_id}", response_model=PatientViewSchema)
def patient_details(
    patient_id: str,
    uc: PatientsUseCase = Depends(get_patients_use_case),
) -> PatientViewSchema:
    try:
        view = uc.get_patient(patient_id)
    except ClinicApiError as e:
        raise HTTPException(status_code=404 if e.status_code == 404 else 502, detail=str(e))
    if view is None:
        raise HTTPException(status_code=502, detail="Malformed patient record")
    return PatientViewSchema(**asdict(view))
