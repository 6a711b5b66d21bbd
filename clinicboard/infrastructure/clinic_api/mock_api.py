from __future__ import annotations

import copy
import logging
from datetime import date, datetime
from typing import Any

from clinicboard.application.exceptions import ClinicApiError
from clinicboard.application.ports.clinic_api import RESOURCES, ClinicApiPort, check_resource
from clinicboard.application.utils.response_adapter import normalize_page
from clinicboard.domain.entities.record_page import RecordPage

# The real backend answers these with a paginated envelope, the rest with a bare array
PAGINATED_RESOURCES = {"appointments", "working-hours", "reminders", "users", "system-settings", "user-settings", "audit-log"}
SOFT_DELETE_RESOURCES = {"patients", "practitioners"}


def _demo_records(today: date) -> dict[str, list[dict[str, Any]]]:
    day = today.isoformat()
    return {
        "practitioners": [
            {"id": "prac-1", "first_name": "Amelia", "last_name": "Garcia", "specialization": "General Practice", "is_active": True},
            {"id": "prac-2", "first_name": "Ravi", "last_name": "Menon", "specialization": "Physiotherapy", "is_active": True},
        ],
        "appointment-types": [
            {"id": "type-consult", "name": "Consultation", "description": "General consultation", "duration_minutes": 30, "color": "#3b82f6", "is_active": True},
            {"id": "type-followup", "name": "Follow-up", "description": "Follow-up visit", "duration_minutes": 45, "color": "#10b981", "is_active": True},
        ],
        "patients": [
            {"id": "pat-1", "first_name": "John", "last_name": "Doe", "phone_number": "+351910000001", "date_of_birth": "1980-04-12", "city": "Lisbon", "country": "PT", "insurance_provider": "Medis", "is_active": True},
            {"id": "pat-2", "first_name": "Jane", "last_name": "Smith", "phone_number": "+351910000002", "date_of_birth": "1992-11-30", "country": "PT", "is_active": True},
        ],
        "working-hours": [
            {"id": "wh-1", "practitioner_id": "prac-1", "day_of_week": "monday", "start_time": "09:00:00", "end_time": "17:00:00", "is_active": True},
            {"id": "wh-2", "practitioner_id": "prac-2", "day_of_week": "3", "start_time": "08:00:00", "end_time": "12:00:00", "is_active": True},
        ],
        "appointments": [
            {"id": "slot-1", "practitioner_id": "prac-1", "appointment_type_id": "type-consult", "appointment_date": day, "start_time": "09:00:00", "end_time": "09:30:00", "status": "available"},
            {"id": "slot-2", "practitioner_id": "prac-1", "appointment_type_id": "type-consult", "appointment_date": day, "start_time": "09:30:00", "end_time": "10:00:00", "status": "available"},
            {"id": "appt-1", "practitioner_id": "prac-1", "appointment_type_id": "type-consult", "appointment_date": day, "start_time": "10:00:00", "end_time": "10:30:00", "status": "scheduled", "patient_name": "John Doe", "patient_phone": "+351910000001", "created_by": "demo-user-id"},
        ],
        "calls": [
            {"id": "call-1", "patient_id": "pat-1", "patient_name": "John Doe", "phone_number": "+351910000001", "call_type": "incoming", "call_status": "Answered", "start_time": f"{day}T09:12:00", "end_time": f"{day}T09:15:05", "duration_seconds": 185, "transcript": "Patient asked to book a consultation.", "ai_summary": "Booked consultation.", "language": "en", "created_at": f"{day}T09:15:05"},
        ],
        "reminders": [
            {"id": "rem-1", "patient_phone": "+351910000002", "reminder_type": "follow_up", "priority": "High", "status": "pending", "due_date": day, "due_time": "15:00:00", "source": "Call", "created_by": "demo-user-id"},
        ],
    }


class InMemoryClinicApi(ClinicApiPort):
    def __init__(self, records: dict[str, list[dict[str, Any]]] | None = None, seed_demo_data: bool = False) -> None:
        self._records: dict[str, list[dict[str, Any]]] = {resource: [] for resource in RESOURCES}
        if seed_demo_data:
            self._records.update(_demo_records(date.today()))
        for resource, items in (records or {}).items():
            self._records[check_resource(resource)] = copy.deepcopy(items)
        self._next_id = 1
        self._logger = logging.getLogger(__name__)

    def raw_list(self, resource: str, params: dict[str, Any] | None = None) -> Any:
        """List payload in the shape the real backend would send."""
        params = params or {}
        items = copy.deepcopy([r for r in self._records[check_resource(resource)] if _matches(r, params)])
        if resource not in PAGINATED_RESOURCES:
            return items

        page = int(params.get("page") or 1)
        limit = int(params.get("limit") or len(items) or 1)
        offset = (page - 1) * limit
        return {"page": page, "limit": limit, "count": len(items), "results": items[offset:offset + limit]}

    def list_records(self, resource: str, params: dict[str, Any] | None = None) -> RecordPage:
        return normalize_page(self.raw_list(resource, params), resource)

    def get_record(self, resource: str, record_id: str) -> dict[str, Any]:
        return copy.deepcopy(self._find(resource, record_id))

    def create_record(self, resource: str, payload: dict[str, Any]) -> dict[str, Any]:
        check_resource(resource)
        now = datetime.now().isoformat(timespec="seconds")
        record = {**payload, "id": f"mock-{self._next_id}", "created_at": now, "updated_at": now}
        self._next_id += 1
        self._records[resource].append(record)
        self._logger.info("Mock record created", extra={"resource": resource})
        return copy.deepcopy(record)

    def update_record(self, resource: str, record_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        record = self._find(resource, record_id)
        record.update({k: v for k, v in payload.items() if k != "id"})
        record["updated_at"] = datetime.now().isoformat(timespec="seconds")
        return copy.deepcopy(record)

    def update_status(self, resource: str, record_id: str, status: str) -> dict[str, Any]:
        if resource != "appointments":
            raise ClinicApiError(f"{resource} has no status endpoint", status_code=404, resource=resource)
        return self.update_record(resource, record_id, {"status": status})

    def delete_record(self, resource: str, record_id: str) -> dict[str, Any]:
        record = self._find(resource, record_id)
        if resource in SOFT_DELETE_RESOURCES:
            record["is_active"] = False
        else:
            self._records[resource].remove(record)
        return {"message": f"{resource} {record_id} deleted"}

    def get_dashboard(self) -> dict[str, Any]:
        today = date.today().isoformat()
        booked = [a for a in self._records["appointments"] if a.get("status") != "available"]
        practitioners = {p["id"]: p for p in self._records["practitioners"]}
        total_seconds = sum(int(c.get("duration_seconds") or 0) for c in self._records["calls"])
        return {
            "overview": {
                "total_calling_minutes": str(total_seconds // 60),
                "appointments_booked_by_ai": sum(1 for a in booked if a.get("created_by") == "ai"),
            },
            "today_appointments": [
                {
                    "date": a["appointment_date"],
                    "practitioner_name": _full_name(practitioners.get(a.get("practitioner_id"))),
                    "start_time": a["start_time"],
                    "end_time": a["end_time"],
                    "status": a["status"],
                }
                for a in booked
                if a.get("appointment_date") == today
            ],
            "reminders": [copy.deepcopy(r) for r in self._records["reminders"] if r.get("status") == "pending"],
            "live_calls": [
                {
                    "patient_id": c.get("patient_id"),
                    "phone_number": c["phone_number"],
                    "call_type": c["call_type"],
                    "transcript_snippet": (c.get("transcript") or "")[:80],
                }
                for c in self._records["calls"]
                if c.get("call_status") == "Live"
            ],
        }

    def _find(self, resource: str, record_id: str) -> dict[str, Any]:
        for record in self._records[check_resource(resource)]:
            if str(record.get("id")) == str(record_id):
                return record
        raise ClinicApiError(f"{resource} {record_id} not found", status_code=404, resource=resource)


def _matches(record: dict[str, Any], params: dict[str, Any]) -> bool:
    for key, value in params.items():
        if value in (None, "") or key in ("page", "limit"):
            continue
        if key == "date":
            if str(record.get("appointment_date", ""))[:10] != str(value):
                return False
        elif key == "search":
            needle = str(value).lower()
            haystack = (str(record.get("patient_id") or ""), str(record.get("phone_number") or ""))
            if not any(needle in field.lower() for field in haystack):
                return False
        elif key == "start_date":
            if str(record.get("created_at") or "")[:10] < str(value):
                return False
        elif key == "status" and "call_status" in record:
            if record["call_status"] != value:
                return False
        elif str(record.get(key)) != str(value):
            return False
    return True


def _full_name(person: dict[str, Any] | None) -> str:
    if not person:
        return "Unknown"
    return f"{person.get('first_name', '')} {person.get('last_name', '')}".strip()
