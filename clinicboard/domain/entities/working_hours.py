from __future__ import annotations

from dataclasses import dataclass

# Backend numbering when day_of_week is sent as a number: 0 = Sunday
DAY_NAMES = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")


@dataclass(frozen=True)
class WorkingHoursWindow:
    start_time: str  # HH:MM or HH:MM:SS
    end_time: str  # HH:MM or HH:MM:SS
    practitioner_id: str | None = None
    day_of_week: str | None = None  # "sunday".."saturday"
    id: str | None = None
    is_active: bool = True
