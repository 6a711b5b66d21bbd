from __future__ import annotations

import calendar
from datetime import date, timedelta

from clinicboard.domain.entities.calendar_day import CalendarDay

GRID_DAYS = 42  # 6 rows x 7 columns
WEEKDAY_HEADERS = ("MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN")


def grid_start(reference: date) -> date:
    """Monday on or before the first day of the reference month."""
    first_day = reference.replace(day=1)
    return first_day - timedelta(days=first_day.weekday())


def build_calendar_grid(
    reference: date,
    selected: date | None = None,
    today: date | None = None,
) -> list[CalendarDay]:
    """
    Build the fixed 6-week, Monday-first month grid around `reference`.

    Days outside the reference month are padding; the caller decides how to
    render them (they are not meant to be selectable).
    """
    if today is None:
        today = date.today()

    start = grid_start(reference)
    days: list[CalendarDay] = []
    for offset in range(GRID_DAYS):
        day = start + timedelta(days=offset)
        days.append(
            CalendarDay(
                date=day,
                in_current_month=(day.year, day.month) == (reference.year, reference.month),
                is_today=day == today,
                is_selected=selected is not None and day == selected,
            )
        )
    return days


def shift_month(reference: date, delta: int) -> date:
    """Move `delta` months forward/back, clamping the day to the target month's length."""
    month_index = reference.year * 12 + (reference.month - 1) + delta
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(reference.day, last_day))


def month_label(reference: date) -> str:
    return f"{calendar.month_name[reference.month]} {reference.year}"
