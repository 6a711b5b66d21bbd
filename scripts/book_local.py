"""
Local booking walkthrough (no HTTP, no backend).

Usage:
  python3 scripts/book_local.py --time 9:30am --type type-followup

What it does:
- Seeds the in-memory clinic API with demo practitioners, types and open slots
- Prints today's calendar grid and the open slots for the selection
- Submits the booking and prints the resulting appointment
"""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from clinicboard.application.use_cases.booking import BookingUseCase
from clinicboard.application.use_cases.calendar_grid import WEEKDAY_HEADERS, build_calendar_grid, month_label
from clinicboard.application.use_cases.slots import AvailabilityUseCase
from clinicboard.domain.entities.booking_draft import BookingDraft
from clinicboard.infrastructure.clinic_api.mock_api import InMemoryClinicApi


def print_grid(reference: date) -> None:
    print(month_label(reference))
    print(" ".join(h[:2] for h in WEEKDAY_HEADERS))
    days = build_calendar_grid(reference)
    for row in range(0, len(days), 7):
        print(" ".join(f"{d.date.day:2d}" if d.in_current_month else "  " for d in days[row:row + 7]))


def main() -> None:
    parser = argparse.ArgumentParser(description="Book an appointment against the in-memory clinic API")
    parser.add_argument("--practitioner", default="prac-1")
    parser.add_argument("--type", default="type-consult", dest="appointment_type")
    parser.add_argument("--patient", default="pat-1")
    parser.add_argument("--time", default=None, help="12-hour slot, e.g. 9:30am (defaults to the first open slot)")
    args = parser.parse_args()

    today = date.today()
    api = InMemoryClinicApi(seed_demo_data=True)

    print_grid(today)
    print()

    availability = AvailabilityUseCase(api=api).fetch_available_slots(args.practitioner, today, args.appointment_type)
    print("Open slots:", ", ".join(availability.slots) or "none")
    if availability.error:
        print(availability.error)

    selected_time = args.time or (availability.slots[0] if availability.slots else None)
    draft = BookingDraft(
        patient_id=args.patient,
        selected_date=today,
        selected_time=selected_time,
        practitioner_id=args.practitioner,
        appointment_type_id=args.appointment_type,
    )
    result = BookingUseCase(api=api).submit(draft, created_by="local-script")

    print(f"Result: {result.action}")
    if result.message:
        print(result.message)
    if result.appointment:
        print(result.appointment)


if __name__ == "__main__":
    main()
