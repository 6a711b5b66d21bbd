from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RecordPage:
    shape: str  # "list", "paginated", "invalid"
    page: int = 1
    limit: int = 0
    count: int = 0
    results: list[dict[str, Any]] = field(default_factory=list)
