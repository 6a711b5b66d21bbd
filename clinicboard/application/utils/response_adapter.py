from __future__ import annotations

import logging
from typing import Any

from clinicboard.application.ports.clinic_api import ClinicApiPort
from clinicboard.domain.entities.record_page import RecordPage

logger = logging.getLogger(__name__)


def normalize_page(payload: Any, resource: str | None = None) -> RecordPage:
    """
    Normalize a list response into a RecordPage.

    The backend answers list requests either with a bare JSON array or with a
    paginated envelope {page, limit, count, results}. Anything else yields an
    "invalid" page with no results.
    """
    if isinstance(payload, list):
        records = _only_records(payload, resource)
        return RecordPage(shape="list", page=1, limit=len(records), count=len(records), results=records)

    if isinstance(payload, dict) and isinstance(payload.get("results"), list):
        records = _only_records(payload["results"], resource)
        return RecordPage(
            shape="paginated",
            page=_as_int(payload.get("page"), 1),
            limit=_as_int(payload.get("limit"), len(records)),
            count=_as_int(payload.get("count"), len(records)),
            results=records,
        )

    logger.warning(
        "Unexpected list response shape",
        extra={"resource": resource, "reason": type(payload).__name__},
    )
    return RecordPage(shape="invalid")


def _only_records(items: list[Any], resource: str | None) -> list[dict[str, Any]]:
    records = [item for item in items if isinstance(item, dict)]
    if len(records) != len(items):
        logger.warning(
            "Dropped non-object entries from list response",
            extra={"resource": resource, "reason": f"{len(items) - len(records)} dropped"},
        )
    return records


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def collect_records(
    api: ClinicApiPort,
    resource: str,
    params: dict[str, Any] | None = None,
    page_size: int = 100,
) -> list[dict[str, Any]]:
    """
    Every record of a list request, following pagination.

    Bare-array responses come back in one request. Paginated ones are requested
    page by page until `count` records were collected or a page comes back empty.
    """
    records: list[dict[str, Any]] = []
    page_number = 1
    while True:
        page = api.list_records(resource, {**(params or {}), "page": page_number, "limit": page_size})
        records.extend(page.results)
        if page.shape != "paginated" or not page.results or len(records) >= page.count:
            return records
        page_number += 1
