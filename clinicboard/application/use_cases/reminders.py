from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from clinicboard.application.dto.records import ReminderDTO, parse_records
from clinicboard.application.exceptions import ClinicApiError, InvalidTimeFormat
from clinicboard.application.ports.clinic_api import ClinicApiPort
from clinicboard.application.utils.access import visible_to
from clinicboard.application.utils.response_adapter import collect_records
from clinicboard.application.utils.time_format import to_12_hour
from clinicboard.domain.entities.reminder import Reminder
from clinicboard.domain.entities.user import User

REMINDER_TYPE_LABELS = {
    "prescription": "Prescription",
    "renewal_prescription": "Prescription",
    "callback": "Callback",
    "followup": "Follow-up",
    "follow-up": "Follow-up",
}
PRIORITY_LABELS = {"low": "Low", "medium": "Medium", "high": "High"}


@dataclass(frozen=True)
class ReminderView:
    id: str
    patient_name: str
    priority: str  # "Low" | "Medium" | "High"
    type: str  # "Prescription" | "Callback" | "Follow-up"
    due_date: str
    status: str
    phone_number: str | None = None
    source: str | None = None
    task_description: str | None = None


@dataclass(frozen=True)
class ReminderListResult:
    reminders: list[ReminderView] = field(default_factory=list)
    error: str | None = None


def format_due_date(due_date: str | None, due_time: str | None = None) -> str:
    """'Sep 19, 2025 3:00pm', or a placeholder when the reminder has no date."""
    if not due_date:
        return "No due date set"
    try:
        day = date.fromisoformat(due_date[:10])
    except ValueError:
        return due_date
    label = f"{day.strftime('%b')} {day.day}, {day.year}"
    if due_time:
        try:
            label += f" {to_12_hour(due_time)}"
        except InvalidTimeFormat:
            label += f" {due_time}"
    return label


def format_reminder_for_display(reminder: Reminder) -> ReminderView:
    if reminder.patient_id:
        patient_name = f"Patient {reminder.patient_id}"
    elif reminder.patient_phone:
        patient_name = f"Phone: {reminder.patient_phone}"
    else:
        patient_name = "Unknown Patient"

    return ReminderView(
        id=reminder.id,
        patient_name=patient_name,
        priority=PRIORITY_LABELS.get((reminder.priority or "").lower(), "Medium"),
        type=REMINDER_TYPE_LABELS.get((reminder.reminder_type or "").lower(), "Callback"),
        due_date=format_due_date(reminder.due_date, reminder.due_time),
        status=reminder.status,
        phone_number=reminder.patient_phone,
        source=reminder.source,
        task_description=reminder.task_description,
    )


class RemindersUseCase:
    def __init__(self, api: ClinicApiPort) -> None:
        self._api = api
        self._logger = logging.getLogger(__name__)

    def list_for_user(self, user: User | None, status: str | None = None) -> ReminderListResult:
        """Reminders the user may see, optionally narrowed to one status."""
        params = {"status": status} if status else None
        try:
            records = collect_records(self._api, "reminders", params)
        except ClinicApiError as e:
            self._logger.error("Error loading reminders", extra={"resource": "reminders", "error": str(e)})
            return ReminderListResult(error="Failed to load reminders. Please try again.")

        reminders = [dto.to_entity() for dto in parse_records(records, ReminderDTO)]
        if status:
            reminders = [r for r in reminders if r.status == status]
        return ReminderListResult(reminders=[format_reminder_for_display(r) for r in visible_to(reminders, user)])
