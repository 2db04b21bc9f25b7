"""Shared test fixtures and helpers."""

from datetime import date, datetime, time
from typing import Optional

import pytest

from salon_booking.schemas.booking_schema import (
    BookableService,
    BookableStaff,
    DayOpeningHours,
    ExistingAppointment,
    SalonSchedule,
    SlotRequest,
    StaffWorkingHours,
)

# Friday morning, well before the test week.
NOW = datetime(2025, 3, 14, 10, 0)
SATURDAY = date(2025, 3, 15)
SUNDAY = date(2025, 3, 16)
MONDAY = date(2025, 3, 17)
TUESDAY = date(2025, 3, 18)
WEDNESDAY = date(2025, 3, 19)
THURSDAY = date(2025, 3, 20)


def at(day: date, hour: int, minute: int = 0, second: int = 0) -> datetime:
    """Naive local datetime on ``day``."""
    return datetime.combine(day, time(hour, minute, second))


def make_services() -> list[BookableService]:
    return [
        BookableService(id="cut", name="Haircut", duration_minutes=30, current_price=3500),
        BookableService(id="color", name="Coloring", duration_minutes=45, current_price=7900),
        BookableService(id="wash", name="Wash", duration_minutes=30, current_price=1500),
        BookableService(
            id="perm", name="Perm", duration_minutes=120, current_price=12000, is_active=False
        ),
    ]


def make_opening_hours() -> list[DayOpeningHours]:
    """Open Tue-Sat 09:00-18:00, closed Sunday and Monday."""
    return [
        DayOpeningHours(
            day_of_week=dow,
            open_time="09:00",
            close_time="18:00",
            is_closed=dow in (0, 1),
        )
        for dow in range(7)
    ]


def make_staff() -> list[BookableStaff]:
    return [
        BookableStaff(id="anna", name="Anna", service_ids=["cut", "color", "wash"]),
        BookableStaff(id="ben", name="Ben", service_ids=["cut", "wash"]),
        BookableStaff(id="carl", name="Carl", service_ids=["cut", "color", "wash"], is_bookable=False),
    ]


def make_working_hours() -> list[StaffWorkingHours]:
    """Anna works Tue-Fri 09:00-17:00, Ben Tue-Sat 09:00-18:00, Carl every open day."""
    anna = [
        StaffWorkingHours(staff_id="anna", day_of_week=dow, start_time="09:00", end_time="17:00")
        for dow in (2, 3, 4, 5)
    ]
    ben = [
        StaffWorkingHours(staff_id="ben", day_of_week=dow, start_time="09:00", end_time="18:00")
        for dow in (2, 3, 4, 5, 6)
    ]
    carl = [
        StaffWorkingHours(staff_id="carl", day_of_week=dow, start_time="09:00", end_time="18:00")
        for dow in (2, 3, 4, 5, 6)
    ]
    return anna + ben + carl


def make_schedule(
    staff_ids: Optional[list[str]] = None,
    booking_rules: Optional[dict] = None,
    **overrides,
) -> SalonSchedule:
    """Build the standard test salon, optionally restricted to some staff."""
    staff = make_staff()
    if staff_ids is not None:
        staff = [member for member in staff if member.id in staff_ids]
    fields = {
        "services": make_services(),
        "opening_hours": make_opening_hours(),
        "staff": staff,
        "staff_working_hours": make_working_hours(),
        "booking_rules": booking_rules,
    }
    fields.update(overrides)
    return SalonSchedule(**fields)


def make_request(
    service_ids: Optional[list[str]] = None,
    start: date = TUESDAY,
    end: Optional[date] = None,
    preferred_staff_id: Optional[str] = None,
) -> SlotRequest:
    return SlotRequest(
        service_ids=service_ids if service_ids is not None else ["cut"],
        date_range_start=at(start, 0),
        date_range_end=at(end or start, 23, 59),
        preferred_staff_id=preferred_staff_id,
    )


def make_appointment(
    staff_id: str, starts_at: datetime, ends_at: datetime, status: str = "confirmed", **kwargs
) -> ExistingAppointment:
    return ExistingAppointment(
        staff_id=staff_id, starts_at=starts_at, ends_at=ends_at, status=status, **kwargs
    )


@pytest.fixture
def schedule():
    return make_schedule()


@pytest.fixture
def anna_only_schedule():
    return make_schedule(staff_ids=["anna"])
