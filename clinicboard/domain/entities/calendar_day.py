from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class CalendarDay:
    date: date
    in_current_month: bool
    is_today: bool
    is_selected: bool
