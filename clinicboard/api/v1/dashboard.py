from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends

from clinicboard.api.v1.schemas import DashboardResponseSchema
from clinicboard.application.use_cases.dashboard import DashboardUseCase
from clinicboard.wiring.dependencies import get_dashboard_use_case

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardResponseSchema)
def dashboard(uc: DashboardUseCase = Depends(get_dashboard_use_case)) -> DashboardResponseSchema:
    return DashboardResponseSchema.model_validate(asdict(uc.load()))
