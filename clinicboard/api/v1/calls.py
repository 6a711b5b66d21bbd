from __future__ import annotations

import datetime as dt
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query

from clinicboard.api.v1.schemas import CallHistoryResponseSchema, CallViewSchema
from clinicboard.application.exceptions import ClinicApiError
from clinicboard.application.use_cases.call_history import CallHistoryUseCase
from clinicboard.wiring.dependencies import get_call_history_use_case

router = APIRouter(prefix="/calls", tags=["calls"])


@router.get("", response_model=CallHistoryResponseSchema)
def call_history(
    status: str | None = Query(None),
    search: str | None = Query(None),
    start_date: dt.date | None = Query(None),
    uc: CallHistoryUseCase = Depends(get_call_history_use_case),
) -> CallHistoryResponseSchema:
    result = uc.load(status=status, search=search, start_date=start_date)
    return CallHistoryResponseSchema.model_validate(asdict(result))


@router.get("/{call_id}", response_model=CallViewSchema)
def call_details(
    call_id: str,
    uc: CallHistoryUseCase = Depends(get_call_history_use_case),
) -> CallViewSchema:
    try:
        view = uc.get_call(call_id)
    except ClinicApiError as e:
        raise HTTPException(status_code=404 if e.status_code == 404 else 502, detail=str(e))
    return CallViewSchema(**asdict(view))
