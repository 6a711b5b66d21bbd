from __future__ import annotations

import logging
from typing import Any, Callable

import httpx

from clinicboard.application.exceptions import ClinicApiError
from clinicboard.application.ports.clinic_api import ClinicApiPort, check_resource
from clinicboard.application.utils.response_adapter import normalize_page
from clinicboard.core.config import settings
from clinicboard.domain.entities.record_page import RecordPage


class HttpClinicApi(ClinicApiPort):
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        auth_headers: Callable[[], dict[str, str]] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url or settings.CLINIC_API_BASE_URL
        self._auth_headers = auth_headers or (lambda: {})
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=timeout or settings.CLINIC_API_TIMEOUT_SECONDS,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )
        self._logger = logging.getLogger(__name__)

        if not self._base_url:
            raise ValueError("CLINIC_API_BASE_URL is required for the HTTP clinic API")

    def list_records(self, resource: str, params: dict[str, Any] | None = None) -> RecordPage:
        check_resource(resource)
        query = {k: v for k, v in (params or {}).items() if v not in (None, "")}
        data = self._request("GET", f"/{resource}", resource, params=query)
        return normalize_page(data, resource)

    def get_record(self, resource: str, record_id: str) -> dict[str, Any]:
        check_resource(resource)
        return self._request("GET", f"/{resource}/{record_id}", resource)

    def create_record(self, resource: str, payload: dict[str, Any]) -> dict[str, Any]:
        check_resource(resource)
        record = self._request("POST", f"/{resource}", resource, json=payload)
        self._logger.info("Record created", extra={"resource": resource})
        return record

    def update_record(self, resource: str, record_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        check_resource(resource)
        return self._request("PUT", f"/{resource}/{record_id}", resource, json=payload)

    def update_status(self, resource: str, record_id: str, status: str) -> dict[str, Any]:
        check_resource(resource)
        return self._request("PATCH", f"/{resource}/{record_id}/status", resource, json={"status": status})

    def delete_record(self, resource: str, record_id: str) -> dict[str, Any]:
        check_resource(resource)
        return self._request("DELETE", f"/{resource}/{record_id}", resource)

    def get_dashboard(self) -> dict[str, Any]:
        return self._request("GET", "/dashboard", "dashboard")

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, resource: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, headers=self._auth_headers(), **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status >= 500:
                self._logger.error("Server error", extra={"resource": resource, "status": status})
            else:
                self._logger.error(
                    "Clinic API request rejected",
                    extra={"resource": resource, "status": status, "error": e.response.text[:200]},
                )
            raise ClinicApiError(f"{method} {path} failed with {status}", status_code=status, resource=resource) from e
        except httpx.HTTPError as e:
            self._logger.error("Clinic API request failed", extra={"resource": resource, "error": str(e)})
            raise ClinicApiError(f"{method} {path} failed: {e}", resource=resource) from e

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            self._logger.error("Clinic API returned invalid JSON", extra={"resource": resource, "error": str(e)})
            raise ClinicApiError(f"{method} {path} returned invalid JSON", resource=resource) from e
