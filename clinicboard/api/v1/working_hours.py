from __future__ import annotations

import datetime as dt
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query

from clinicboard.api.v1.auth import require_user
from clinicboard.api.v1.schemas import (
    PractitionerAvailabilityResponseSchema,
    WorkingHoursListResponseSchema,
    WorkingHoursViewSchema,
)
from clinicboard.application.exceptions import ClinicApiError, InvalidTimeFormat
from clinicboard.application.use_cases.working_hours import WorkingHoursUseCase, format_working_hours_for_display
from clinicboard.domain.entities.user import User
from clinicboard.wiring.dependencies import get_working_hours_use_case

router = APIRouter(prefix="/working-hours", tags=["working-hours"])


@router.get("", response_model=WorkingHoursListResponseSchema)
def list_working_hours(
    user: User = Depends(require_user),
    uc: WorkingHoursUseCase = Depends(get_working_hours_use_case),
) -> WorkingHoursListResponseSchema:
    try:
        windows = uc.list_for_user(user)
        views = [format_working_hours_for_display(w) for w in windows]
    except ClinicApiError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except InvalidTimeFormat as e:
        raise HTTPException(status_code=502, detail=f"Malformed working hours: {e}")
    return WorkingHoursListResponseSchema(working_hours=[WorkingHoursViewSchema(**asdict(v)) for v in views])


@router.get("/availability", response_model=PractitionerAvailabilityResponseSchema)
def practitioner_availability(
    practitioner_id: str = Query(...),
    at: dt.datetime = Query(..., examples=["2025-09-15T10:30:00"]),
    uc: WorkingHoursUseCase = Depends(get_working_hours_use_case),
) -> PractitionerAvailabilityResponseSchema:
    available = uc.is_practitioner_available(practitioner_id, at)
    return PractitionerAvailabilityResponseSchema(practitioner_id=practitioner_id, at=at, available=available)
