from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, Field


class CalendarDaySchema(BaseModel):
    date: dt.date
    in_current_month: bool
    is_today: bool
    is_selected: bool


class CalendarGridResponseSchema(BaseModel):
    month_label: str
    weekday_headers: list[str]
    previous_month: dt.date
    next_month: dt.date
    days: list[CalendarDaySchema]


class GeneratedSlotsResponseSchema(BaseModel):
    slots: list[str]


class AvailableSlotsResponseSchema(BaseModel):
    date: dt.date | None = None
    slots: list[str] = Field(default_factory=list)
    error: str | None = None
    generation: int = 0


class BookAppointmentRequestSchema(BaseModel):
    patient_id: str | None = None
    patient_name: str | None = None
    patient_phone: str | None = None
    selected_date: dt.date | None = None
    selected_time: str | None = None
    practitioner_id: str | None = None
    appointment_type_id: str | None = None
    notes: str | None = None


class BookAppointmentResponseSchema(BaseModel):
    action: str
    message: str | None = None
    appointment: dict[str, Any] | None = None


class UpdateStatusRequestSchema(BaseModel):
    status: str


class AppointmentViewSchema(BaseModel):
    id: str
    title: str
    start_time: str
    end_time: str
    patient: str
    type: str
    status: str
    day: int | None = None


class AppointmentStatisticsSchema(BaseModel):
    total: int
    scheduled: int
    completed: int
    cancelled: int


class AppointmentListResponseSchema(BaseModel):
    appointments: list[AppointmentViewSchema]
    statistics: AppointmentStatisticsSchema
    error: str | None = None


class LoginRequestSchema(BaseModel):
    email: str
    password: str


class UserSchema(BaseModel):
    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None
    is_active: bool = True


class LoginResponseSchema(BaseModel):
    user: UserSchema
    token: str


class CallViewSchema(BaseModel):
    id: str
    patient_name: str
    status: str
    phone_no: str
    call_type: str
    duration: str
    date: str
    has_transcript: bool
    is_chat: bool
    start_time: str
    end_time: str | None = None
    transcript: str | None = None
    ai_summary: str | None = None
    notes: str | None = None
    recording_url: str | None = None


class CallStatisticsSchema(BaseModel):
    total: int
    live: int
    answered: int
    missed: int
    average_duration: int


class CallHistoryResponseSchema(BaseModel):
    calls: list[CallViewSchema]
    statistics: CallStatisticsSchema
    error: str | None = None


class DashboardResponseSchema(BaseModel):
    overview: dict[str, Any] = Field(default_factory=dict)
    today_appointments: list[dict[str, Any]] = Field(default_factory=list)
    reminders: list[dict[str, Any]] = Field(default_factory=list)
    live_calls: list[dict[str, Any]] = Field(default_factory=list)
    error: str | None = None


class WorkingHoursViewSchema(BaseModel):
    id: str | None = None
    practitioner_id: str | None = None
    day_of_week: str
    start_time: str
    end_time: str
    is_active: bool = True


class WorkingHoursListResponseSchema(BaseModel):
    working_hours: list[WorkingHoursViewSchema]


class PractitionerAvailabilityResponseSchema(BaseModel):
    practitioner_id: str
    at: dt.datetime
    available: bool


class WorkingHoursSlotsResponseSchema(BaseModel):
    date: dt.date
    slots: list[str] = Field(default_factory=list)
    window: WorkingHoursViewSchema | None = None
    error: str | None = None


class ReminderViewSchema(BaseModel):
    id: str
    patient_name: str
    priority: str
    type: str
    due_date: str
    status: str
    phone_number: str | None = None
    source: str | None = None
    task_description: str | None = None


class ReminderListResponseSchema(BaseModel):
    reminders: list[ReminderViewSchema]
    error: str | None = None


class PatientViewSchema(BaseModel):
    id: str
    first_name: str
    last_name: str
    phone_no: str
    date_of_birth: str = ""
    age: int | None = None
    email: str = ""
    address: str = ""
    insurance_provider: str = "-"
    insurance_id: str = "-"
    note: str = ""


class PatientListResponseSchema(BaseModel):
    patients: list[PatientViewSchema]
    error: str | None = None
