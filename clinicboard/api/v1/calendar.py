from __future__ import annotations

import datetime as dt
from dataclasses import asdict

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from clinicboard.api.v1.schemas import (
    AvailableSlotsResponseSchema,
    CalendarDaySchema,
    CalendarGridResponseSchema,
    GeneratedSlotsResponseSchema,
    WorkingHoursSlotsResponseSchema,
    WorkingHoursViewSchema,
)
from clinicboard.application.exceptions import InvalidTimeFormat
from clinicboard.application.use_cases.calendar_grid import (
    WEEKDAY_HEADERS,
    build_calendar_grid,
    month_label,
    shift_month,
)
from clinicboard.application.use_cases.slots import AvailabilityUseCase, generate_slots
from clinicboard.application.use_cases.working_hours import WorkingHoursUseCase, format_working_hours_for_display
from clinicboard.wiring.dependencies import get_availability_use_case, get_working_hours_use_case

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("/grid", response_model=CalendarGridResponseSchema)
def calendar_grid(
    date_param: dt.date | None = Query(None, alias="date"),
    selected: dt.date | None = Query(None),
) -> CalendarGridResponseSchema:
    reference = date_param or dt.date.today()
    days = build_calendar_grid(reference, selected=selected)
    return CalendarGridResponseSchema(
        month_label=month_label(reference),
        weekday_headers=list(WEEKDAY_HEADERS),
        previous_month=shift_month(reference, -1),
        next_month=shift_month(reference, 1),
        days=[CalendarDaySchema(**asdict(day)) for day in days],
    )


@router.get("/slots/generate", response_model=GeneratedSlotsResponseSchema)
def generated_slots(
    start_time: str = Query(..., examples=["09:00"]),
    end_time: str = Query(..., examples=["17:00"]),
    duration_minutes: int = Query(...),
) -> GeneratedSlotsResponseSchema:
    try:
        slots = generate_slots(start_time, end_time, duration_minutes)
    except InvalidTimeFormat as e:
        raise HTTPException(status_code=400, detail=str(e))
    return GeneratedSlotsResponseSchema(slots=slots)


@router.get("/slots", response_model=AvailableSlotsResponseSchema)
def available_slots(
    practitioner_id: str | None = Query(None),
    appointment_type_id: str | None = Query(None),
    date_param: dt.date | None = Query(None, alias="date"),
    view_id: str | None = Header(None, alias="X-View-Id"),
    uc: AvailabilityUseCase = Depends(get_availability_use_case),
) -> AvailableSlotsResponseSchema:
    key = f"available-slots:{view_id}" if view_id else AvailabilityUseCase.FETCH_KEY
    result = uc.fetch_available_slots(practitioner_id, date_param, appointment_type_id, view_key=key)
    if result is None:
        raise HTTPException(status_code=409, detail="Superseded by a newer slot request")
    return AvailableSlotsResponseSchema(
        date=date_param,
        slots=result.slots,
        error=result.error,
        generation=result.generation,
    )


@router.get("/slots/working-hours", response_model=WorkingHoursSlotsResponseSchema)
def working_hours_slots(
    practitioner_id: str = Query(...),
    appointment_type_id: str = Query(...),
    date_param: dt.date = Query(..., alias="date"),
    uc: WorkingHoursUseCase = Depends(get_working_hours_use_case),
) -> WorkingHoursSlotsResponseSchema:
    result = uc.slots_for_day(practitioner_id, date_param, appointment_type_id)
    window = None
    if result.window is not None and not result.error:
        window = WorkingHoursViewSchema(**asdict(format_working_hours_for_display(result.window)))
    return WorkingHoursSlotsResponseSchema(date=date_param, slots=result.slots, window=window, error=result.error)
