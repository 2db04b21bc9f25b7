"""
Offline console demo: prints bookable slots for a sample salon.

Uses the real slot engine against an in-memory salon (opening hours,
staff roster, an absence, a salon-wide block and a few appointments).
No database, no network calls. Designed for live demo walkthroughs.

Usage:
    python console_demo.py
    python console_demo.py --services cut color --days 3
    python console_demo.py --staff anna --now 2025-03-18T16:50
"""

import argparse
from datetime import datetime, timedelta
from typing import Optional

from salon_booking.config import settings
from salon_booking.engine import (
    SlotEngineError,
    compute_available_slots,
    find_next_available_slot,
    group_slots_by_date,
    summarize_available_dates,
)
from salon_booking.schemas.booking_schema import (
    BlockedTime,
    BookableService,
    BookableStaff,
    DayOpeningHours,
    ExistingAppointment,
    SalonSchedule,
    SlotRequest,
    StaffAbsence,
    StaffWorkingHours,
)
from salon_booking.utils import SETTINGS_WEEKDAY_ORDER

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

MAX_SLOTS_PER_DAY = 12


def build_sample_schedule(now: datetime, timezone: Optional[str] = None) -> SalonSchedule:
    """A small salon: open Tue-Sat, three stylists, one of them away tomorrow at noon."""
    day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    tomorrow = day + timedelta(days=1)

    opening_hours = [
        DayOpeningHours(day_of_week=dow, open_time="09:00", close_time="18:00", is_closed=dow in (0, 1))
        for dow in range(7)
    ]
    staff_hours = [
        StaffWorkingHours(staff_id="anna", day_of_week=dow, start_time="09:00", end_time="17:00")
        for dow in (2, 3, 4, 5)
    ] + [
        StaffWorkingHours(staff_id="ben", day_of_week=dow, start_time="10:00", end_time="18:00")
        for dow in (2, 3, 4, 5, 6)
    ] + [
        StaffWorkingHours(staff_id="cleo", day_of_week=dow, start_time="09:00", end_time="14:00")
        for dow in (3, 4, 5, 6)
    ]

    return SalonSchedule(
        services=[
            BookableService(id="cut", name="Haircut", duration_minutes=45, current_price=4500),
            BookableService(id="wash", name="Wash & Blow-dry", duration_minutes=30, current_price=2500),
            BookableService(id="color", name="Coloring", duration_minutes=90, current_price=8900),
        ],
        opening_hours=opening_hours,
        staff=[
            BookableStaff(id="anna", name="Anna", service_ids=["cut", "wash", "color"]),
            BookableStaff(id="ben", name="Ben", service_ids=["cut", "wash"]),
            BookableStaff(id="cleo", name="Cleo", service_ids=["wash", "color"]),
            BookableStaff(id="dora", name="Dora", service_ids=["cut"], is_bookable=False),
        ],
        staff_working_hours=staff_hours,
        staff_absences=[
            StaffAbsence(
                staff_id="anna",
                starts_at=tomorrow.replace(hour=12),
                ends_at=tomorrow.replace(hour=13),
                reason="Doctor",
            ),
        ],
        blocked_times=[
            BlockedTime(
                staff_id=None,
                starts_at=tomorrow.replace(hour=14),
                ends_at=tomorrow.replace(hour=15),
                reason="Team meeting",
            ),
        ],
        existing_appointments=[
            ExistingAppointment(
                id="apt-1", staff_id="ben",
                starts_at=tomorrow.replace(hour=10), ends_at=tomorrow.replace(hour=11),
                status="confirmed",
            ),
            ExistingAppointment(
                id="apt-2", staff_id="anna",
                starts_at=tomorrow.replace(hour=9), ends_at=tomorrow.replace(hour=10),
                status="cancelled",
            ),
        ],
        booking_rules={"buffer_between_minutes": 10},
        timezone=timezone,
    )


def print_opening_hours(schedule: SalonSchedule) -> None:
    rows = {row.day_of_week: row for row in schedule.opening_hours}
    print(f"{BOLD}Opening hours{RESET}")
    for dow, label in SETTINGS_WEEKDAY_ORDER:
        row = rows.get(dow)
        if row is None or row.is_closed:
            print(f"  {label:<10} {DIM}closed{RESET}")
        else:
            print(f"  {label:<10} {row.open_time:%H:%M} - {row.close_time:%H:%M}")
    print()


def run(service_ids: list[str], days: int, now: datetime, staff_id: Optional[str]) -> int:
    schedule = build_sample_schedule(now)
    request = SlotRequest(
        service_ids=service_ids,
        date_range_start=now,
        date_range_end=now + timedelta(days=days - 1),
        preferred_staff_id=staff_id,
        salon_id="demo",
    )

    print()
    print(f"{BOLD}{'=' * 60}{RESET}")
    print(f"{BOLD}  SALON SLOT ENGINE - Console Demo{RESET}")
    print(f"{BOLD}  Salon: {settings.salon.name}{RESET}")
    print(f"{BOLD}  Now: {now:%Y-%m-%d %H:%M}  Services: {', '.join(service_ids)}{RESET}")
    print(f"{BOLD}{'=' * 60}{RESET}")
    print()
    print_opening_hours(schedule)

    try:
        slots = compute_available_slots(request, schedule, now)
    except SlotEngineError as exc:
        print(f"{RED}{exc}{RESET}")
        return 1

    if not slots:
        print(f"{YELLOW}No slots available in this range.{RESET}")
        next_slot = find_next_available_slot(service_ids, schedule, now, staff_id)
        if next_slot:
            print(
                f"{DIM}  Next available: {next_slot.starts_at:%Y-%m-%d %H:%M} "
                f"with {next_slot.staff_name}{RESET}"
            )
        return 0

    for group in group_slots_by_date(slots, now):
        print(f"{BLUE}{BOLD}{group.display_date}{RESET} {DIM}({group.date}){RESET}")
        for slot in group.slots[:MAX_SLOTS_PER_DAY]:
            print(
                f"  {GREEN}{slot.starts_at:%H:%M}-{slot.ends_at:%H:%M}{RESET} "
                f"{slot.staff_name} {DIM}[{slot.total_duration} min]{RESET}"
            )
        hidden = len(group.slots) - MAX_SLOTS_PER_DAY
        if hidden > 0:
            print(f"  {DIM}... {hidden} more{RESET}")

    print(f"\n{BOLD}{'=' * 60}{RESET}")
    for summary in summarize_available_dates(slots):
        print(f"{DIM}  {summary.date} {summary.day_name}: {summary.slot_count} slot(s){RESET}")
    print(f"{BOLD}{'=' * 60}{RESET}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline slot engine demo")
    parser.add_argument("--services", nargs="+", default=["cut"], help="Service ids to book")
    parser.add_argument("--days", type=int, default=3, help="Number of days to show")
    parser.add_argument("--staff", default=None, help="Preferred staff id")
    parser.add_argument(
        "--now",
        type=datetime.fromisoformat,
        default=None,
        help="Pretend current time, e.g. 2025-03-18T08:00 (defaults to the real clock)",
    )
    args = parser.parse_args()

    now = args.now or datetime.now().replace(second=0, microsecond=0)
    raise SystemExit(run(args.services, max(args.days, 1), now, args.staff))


if __name__ == "__main__":
    main()
