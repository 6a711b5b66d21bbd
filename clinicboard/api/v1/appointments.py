from __future__ import annotations

import datetime as dt
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from clinicboard.api.v1.auth import require_user
from clinicboard.api.v1.schemas import (
    AppointmentListResponseSchema,
    BookAppointmentRequestSchema,
    BookAppointmentResponseSchema,
    UpdateStatusRequestSchema,
)
from clinicboard.application.exceptions import ClinicApiError, InvalidTimeFormat
from clinicboard.application.ports.clinic_api import ClinicApiPort
from clinicboard.application.use_cases.appointment_list import AppointmentListUseCase
from clinicboard.application.use_cases.booking import BookingUseCase
from clinicboard.application.use_cases.calendar_grid import shift_month
from clinicboard.domain.entities.appointment import Appointment
from clinicboard.domain.entities.booking_draft import BookingDraft
from clinicboard.domain.entities.user import User
from clinicboard.wiring.dependencies import (
    get_appointment_list_use_case,
    get_booking_use_case,
    get_clinic_api,
)

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.get("", response_model=AppointmentListResponseSchema)
def list_appointments(
    start_date: dt.date | None = Query(None),
    end_date: dt.date | None = Query(None),
    practitioner_id: str | None = Query(None),
    user: User = Depends(require_user),
    uc: AppointmentListUseCase = Depends(get_appointment_list_use_case),
) -> AppointmentListResponseSchema:
    start = start_date or dt.date.today().replace(day=1)
    end = end_date or shift_month(start, 1).replace(day=1) - dt.timedelta(days=1)
    result = uc.list_for_range(start, end, practitioner_id=practitioner_id, user=user)
    return AppointmentListResponseSchema.model_validate(asdict(result))


@router.post("/book", response_model=BookAppointmentResponseSchema)
def book_appointment(
    req: BookAppointmentRequestSchema,
    user: User = Depends(require_user),
    uc: BookingUseCase = Depends(get_booking_use_case),
) -> BookAppointmentResponseSchema:
    try:
        result = uc.submit(BookingDraft(**req.model_dump()), created_by=user.id)
    except InvalidTimeFormat as e:
        raise HTTPException(status_code=400, detail=str(e))
    if result.action == "invalid":
        raise HTTPException(status_code=422, detail=result.message)
    if result.action == "failed":
        raise HTTPException(status_code=502, detail=result.message)

    appointment = result.appointment
    if isinstance(appointment, Appointment):
        appointment = asdict(appointment)
    return BookAppointmentResponseSchema(action=result.action, message=result.message, appointment=appointment)


@router.patch("/{appointment_id}/status")
def update_appointment_status(
    appointment_id: str,
    req: UpdateStatusRequestSchema,
    api: ClinicApiPort = Depends(get_clinic_api),
) -> dict[str, Any]:
    try:
        return api.update_status("appointments", appointment_id, req.status)
    except ClinicApiError as e:
        raise HTTPException(status_code=404 if e.status_code == 404 else 502, detail=str(e))
