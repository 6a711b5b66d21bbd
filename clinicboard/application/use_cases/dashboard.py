from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from clinicboard.application.exceptions import ClinicApiError, InvalidTimeFormat
from clinicboard.application.ports.clinic_api import ClinicApiPort
from clinicboard.application.utils.time_format import to_display_range


@dataclass(frozen=True)
class DashboardResult:
    overview: dict[str, Any] = field(default_factory=dict)
    today_appointments: list[dict[str, Any]] = field(default_factory=list)
    reminders: list[dict[str, Any]] = field(default_factory=list)
    live_calls: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None


class DashboardUseCase:
    def __init__(self, api: ClinicApiPort) -> None:
        self._api = api
        self._logger = logging.getLogger(__name__)

    def load(self) -> DashboardResult:
        try:
            data = self._api.get_dashboard()
        except ClinicApiError as e:
            self._logger.error("Error loading dashboard", extra={"resource": "dashboard", "error": str(e)})
            return DashboardResult(error="Failed to load dashboard. Please try again.")

        if not isinstance(data, dict):
            self._logger.warning("Unexpected dashboard shape", extra={"reason": type(data).__name__})
            return DashboardResult()

        return DashboardResult(
            overview=dict(data.get("overview") or {}),
            today_appointments=[self._with_time_range(a) for a in _records(data.get("today_appointments"))],
            reminders=_records(data.get("reminders")),
            live_calls=_records(data.get("live_calls")),
        )

    def _with_time_range(self, appointment: dict[str, Any]) -> dict[str, Any]:
        try:
            time_range = to_display_range(appointment["start_time"], appointment["end_time"])
        except (KeyError, InvalidTimeFormat):
            time_range = None
        return {**appointment, "time_range": time_range}


def _records(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]
