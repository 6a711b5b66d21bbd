from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from clinicboard.domain.entities.record_page import RecordPage

RESOURCES = frozenset(
    {
        "appointments",
        "appointment-types",
        "patients",
        "practitioners",
        "working-hours",
        "calls",
        "reminders",
        "users",
        "system-settings",
        "user-settings",
        "audit-log",
    }
)


def check_resource(resource: str) -> str:
    if resource not in RESOURCES:
        raise ValueError(f"Unknown clinic API resource: {resource}")
    return resource


class ClinicApiPort(ABC):
    @abstractmethod
    def list_records(self, resource: str, params: dict[str, Any] | None = None) -> RecordPage:
        """List records of a resource. Both response shapes come back as a RecordPage."""
        raise NotImplementedError

    @abstractmethod
    def get_record(self, resource: str, record_id: str) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def create_record(self, resource: str, payload: dict[str, Any]) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def update_record(self, resource: str, record_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def update_status(self, resource: str, record_id: str, status: str) -> dict[str, Any]:
        """PATCH /{resource}/{id}/status. Only appointments expose this."""
        raise NotImplementedError

    @abstractmethod
    def delete_record(self, resource: str, record_id: str) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def get_dashboard(self) -> dict[str, Any]:
        """Aggregate overview: metrics, today's appointments, reminders, live calls."""
        raise NotImplementedError
