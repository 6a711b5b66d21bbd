"""
Tests for the HTTP clinic API client against a mocked transport.
"""

from __future__ import annotations

import json

import httpx
import pytest

from clinicboard.application.exceptions import ClinicApiError
from clinicboard.infrastructure.clinic_api.http_client import HttpClinicApi


def _client(handler, auth_headers=None) -> HttpClinicApi:
    return HttpClinicApi(
        base_url="http://clinic.test/api",
        timeout=5.0,
        auth_headers=auth_headers,
        transport=httpx.MockTransport(handler),
    )


def test_list_records_sends_filters_and_auth():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"page": 1, "limit": 10, "count": 1, "results": [{"id": "slot-1"}]})

    api = _client(handler, auth_headers=lambda: {"Authorization": "Bearer t0k"})
    page = api.list_records("appointments", {"status": "available", "practitioner_id": None, "date": ""})

    assert page.shape == "paginated"
    assert page.results == [{"id": "slot-1"}]

    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/api/appointments"
    assert dict(request.url.params) == {"status": "available"}
    assert request.headers["Authorization"] == "Bearer t0k"


def test_list_records_bare_array():
    api = _client(lambda request: httpx.Response(200, json=[{"id": "p1"}, {"id": "p2"}]))

    page = api.list_records("practitioners")

    assert page.shape == "list"
    assert [r["id"] for r in page.results] == ["p1", "p2"]


def test_create_and_update_status_send_json():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "a1", **json.loads(request.content)})

    api = _client(handler)
    created = api.create_record("appointments", {"status": "scheduled"})
    updated = api.update_status("appointments", "a1", "cancelled")

    assert created["status"] == "scheduled"
    assert updated["status"] == "cancelled"
    assert seen[0].method == "POST"
    assert seen[1].method == "PATCH"
    assert seen[1].url.path == "/api/appointments/a1/status"


def test_delete_with_empty_body():
    api = _client(lambda request: httpx.Response(204))

    assert api.delete_record("reminders", "r1") == {}


def test_http_error_status_raises():
    api = _client(lambda request: httpx.Response(500, text="boom"))

    with pytest.raises(ClinicApiError) as exc:
        api.get_record("patients", "p1")

    assert exc.value.status_code == 500
    assert exc.value.resource == "patients"
    api.close()


def test_not_found_raises_with_status():
    api = _client(lambda request: httpx.Response(404, json={"error": "missing"}))

    with pytest.raises(ClinicApiError) as exc:
        api.get_dashboard()

    assert exc.value.status_code == 404


def test_transport_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ClinicApiError) as exc:
        _client(handler).list_records("calls")

    assert exc.value.status_code is None


def test_invalid_json_raises():
    api = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(ClinicApiError):
        api.get_record("calls", "c1")


def test_unknown_resource_rejected():
    api = _client(lambda request: httpx.Response(200, json=[]))

    with pytest.raises(ValueError):
        api.list_records("invoices")
