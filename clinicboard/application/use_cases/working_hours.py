from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime

from clinicboard.application.dto.records import AppointmentTypeDTO, WorkingHourDTO, parse_records
from clinicboard.application.exceptions import ClinicApiError, InvalidTimeFormat
from clinicboard.application.ports.clinic_api import ClinicApiPort
from clinicboard.application.use_cases.slots import generate_slots_for_window
from clinicboard.application.utils.access import is_admin, is_practitioner
from clinicboard.application.utils.response_adapter import collect_records
from clinicboard.application.utils.time_format import to_12_hour, to_minutes
from clinicboard.domain.entities.user import User
from clinicboard.domain.entities.working_hours import DAY_NAMES, WorkingHoursWindow


@dataclass(frozen=True)
class WorkingHoursView:
    id: str | None
    practitioner_id: str | None
    day_of_week: str  # "Monday"
    start_time: str  # 12h display
    end_time: str  # 12h display
    is_active: bool


@dataclass(frozen=True)
class WorkingHoursSlotsResult:
    slots: list[str] = field(default_factory=list)
    window: WorkingHoursWindow | None = None
    error: str | None = None


def weekday_name(day: date) -> str:
    # date.weekday() is Monday-first, DAY_NAMES starts on Sunday
    return DAY_NAMES[(day.weekday() + 1) % 7]


def format_working_hours_for_display(window: WorkingHoursWindow) -> WorkingHoursView:
    return WorkingHoursView(
        id=window.id,
        practitioner_id=window.practitioner_id,
        day_of_week=(window.day_of_week or "").capitalize(),
        start_time=to_12_hour(window.start_time),
        end_time=to_12_hour(window.end_time),
        is_active=window.is_active,
    )


def window_for_day(windows: list[WorkingHoursWindow], day: date) -> WorkingHoursWindow | None:
    """First active window whose weekday matches the day."""
    name = weekday_name(day)
    for window in windows:
        if window.is_active and window.day_of_week == name:
            return window
    return None


def is_available_at(windows: list[WorkingHoursWindow], when: datetime) -> bool:
    """True when `when` falls inside the day's window, both ends included."""
    window = window_for_day(windows, when.date())
    if window is None:
        return False
    minutes = when.hour * 60 + when.minute
    return to_minutes(window.start_time) <= minutes <= to_minutes(window.end_time)


class WorkingHoursUseCase:
    def __init__(self, api: ClinicApiPort) -> None:
        self._api = api
        self._logger = logging.getLogger(__name__)

    def list_for_practitioner(self, practitioner_id: str | None = None) -> list[WorkingHoursWindow]:
        params = {"practitioner_id": practitioner_id} if practitioner_id else None
        records = collect_records(self._api, "working-hours", params)
        windows = [dto.to_entity() for dto in parse_records(records, WorkingHourDTO)]
        if practitioner_id:
            windows = [w for w in windows if w.practitioner_id == practitioner_id]
        return windows

    def list_for_user(self, user: User | None) -> list[WorkingHoursWindow]:
        """Admins see every schedule, practitioners their own, everyone else nothing."""
        if is_admin(user):
            return self.list_for_practitioner()
        if is_practitioner(user):
            return self.list_for_practitioner(user.id)
        return []

    def is_practitioner_available(self, practitioner_id: str, when: datetime) -> bool:
        try:
            windows = self.list_for_practitioner(practitioner_id)
            return is_available_at(windows, when)
        except (ClinicApiError, InvalidTimeFormat) as e:
            self._logger.error(
                "Error checking availability",
                extra={"practitioner_id": practitioner_id, "date": when.date().isoformat(), "error": str(e)},
            )
            return False

    def slots_for_day(self, practitioner_id: str, day: date, appointment_type_id: str) -> WorkingHoursSlotsResult:
        """Slot start times generated from the practitioner's working window on `day`."""
        try:
            windows = self.list_for_practitioner(practitioner_id)
            raw_type = self._api.get_record("appointment-types", appointment_type_id)
        except ClinicApiError as e:
            self._logger.error(
                "Error loading working hours",
                extra={"practitioner_id": practitioner_id, "date": day.isoformat(), "error": str(e)},
            )
            return WorkingHoursSlotsResult(error="Failed to load working hours. Please try again.")

        parsed = parse_records([raw_type], AppointmentTypeDTO)
        if not parsed:
            return WorkingHoursSlotsResult(error="Unknown appointment type")

        window = window_for_day(windows, day)
        if window is None:
            return WorkingHoursSlotsResult()
        try:
            slots = generate_slots_for_window(window, parsed[0].to_entity())
        except InvalidTimeFormat as e:
            self._logger.warning(
                "Skipping working hours with malformed time",
                extra={"practitioner_id": practitioner_id, "resource": "working-hours", "error": str(e)},
            )
            return WorkingHoursSlotsResult(window=window, error="Working hours are malformed")
        return WorkingHoursSlotsResult(slots=slots, window=window)
