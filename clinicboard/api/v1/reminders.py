from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query

from clinicboard.api.v1.auth import require_user
from clinicboard.api.v1.schemas import ReminderListResponseSchema
from clinicboard.application.use_cases.reminders import RemindersUseCase
from clinicboard.domain.entities.user import User
from clinicboard.wiring.dependencies import get_reminders_use_case

router = APIRouter(prefix="/reminders", tags=["reminders"])


@router.get("", response_model=ReminderListResponseSchema)
def list_reminders(
    status: str | None = Query(None),
    user: User = Depends(require_user),
    uc: RemindersUseCase = Depends(get_reminders_use_case),
) -> ReminderListResponseSchema:
    result = uc.list_for_user(user, status=status)
    return ReminderListResponseSchema.model_validate(asdict(result))
