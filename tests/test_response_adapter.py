"""
Tests for normalizing the two list response shapes the clinic backend sends.
"""

from __future__ import annotations

from clinicboard.application.utils.response_adapter import collect_records, normalize_page
from clinicboard.infrastructure.clinic_api.mock_api import InMemoryClinicApi


def test_bare_list():
    page = normalize_page([{"id": "a"}, {"id": "b"}], "patients")

    assert page.shape == "list"
    assert page.count == 2
    assert page.results == [{"id": "a"}, {"id": "b"}]


def test_paginated_envelope():
    payload = {"page": 2, "limit": 10, "count": 11, "results": [{"id": "k"}]}

    page = normalize_page(payload, "appointments")

    assert page.shape == "paginated"
    assert (page.page, page.limit, page.count) == (2, 10, 11)
    assert page.results == [{"id": "k"}]


def test_envelope_with_loose_numbers():
    page = normalize_page({"page": "3", "limit": None, "results": [{"id": "x"}]})

    assert page.page == 3
    assert page.limit == 1
    assert page.count == 1


def test_non_object_entries_are_dropped():
    page = normalize_page([{"id": "a"}, "junk", 7, None])

    assert page.results == [{"id": "a"}]


def test_unknown_shapes_are_invalid():
    for payload in (None, "error", 42, {"data": []}, {"results": "nope"}):
        page = normalize_page(payload)
        assert page.shape == "invalid"
        assert page.results == []


def test_collect_records_reads_every_page():
    api = InMemoryClinicApi(records={"reminders": [{"id": f"r{i}", "status": "pending"} for i in range(7)]})

    records = collect_records(api, "reminders", {"status": "pending"}, page_size=3)

    assert [r["id"] for r in records] == [f"r{i}" for i in range(7)]


def test_collect_records_bare_list_is_one_call():
    calls = []

    class CountingApi(InMemoryClinicApi):
        def list_records(self, resource, params=None):
            calls.append(params)
            return super().list_records(resource, params)

    api = CountingApi(records={"patients": [{"id": "p1"}, {"id": "p2"}]})

    assert len(collect_records(api, "patients", page_size=1)) == 2
    assert len(calls) == 1
