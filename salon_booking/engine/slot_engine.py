"""
Availability slot engine.

Turns a booking request plus pre-fetched schedule facts into the sorted
list of bookable (staff member, start time) slots. The engine is pure:
it performs no I/O and never reads the system clock; the current
instant is passed in as ``now``.

Usage:
    slots = compute_available_slots(request, schedule, now=datetime.now(tz))
    days = group_slots_by_date(slots, now, timezone=schedule.timezone)
"""

from datetime import datetime, timedelta
from typing import Iterator, Optional

from pytz.tzinfo import BaseTzInfo

from salon_booking.engine.day_pipeline import (
    compute_available_intervals,
    get_opening_hours_for_day,
    is_within_booking_window,
)
from salon_booking.engine.errors import SlotEngineError, SlotEngineErrorCode
from salon_booking.engine.intervals import TimeInterval
from salon_booking.engine.qualification import (
    calculate_total_duration,
    filter_staff_by_skills,
    resolve_requested_services,
)
from salon_booking.engine.timezones import get_salon_timezone, to_local_aware_range, to_local_naive
from salon_booking.logging_context import get_request_logger, lookup_scope
from salon_booking.schemas.booking_schema import BookingRules, SalonSchedule, SlotRequest
from salon_booking.schemas.slot_schema import AvailableSlot, ServiceSlotInfo
from salon_booking.utils import iter_days, round_up_to_granularity

logger = get_request_logger(__name__)


def iter_slot_starts(
    interval: TimeInterval, duration_minutes: int, granularity_minutes: int
) -> Iterator[datetime]:
    """Yield candidate start times on the granularity grid that fit inside ``interval``.

    The first candidate is the interval start rounded up to the grid, so no
    slot is ever proposed before the interval actually opens.
    """
    duration = timedelta(minutes=duration_minutes)
    step = timedelta(minutes=granularity_minutes)
    current = round_up_to_granularity(interval.start, granularity_minutes)
    while current < interval.end and current + duration <= interval.end:
        yield current
        current += step


def sort_slots(slots: list[AvailableSlot]) -> list[AvailableSlot]:
    """Order by start time, then staff name."""
    return sorted(slots, key=lambda slot: (slot.starts_at, slot.staff_name))


def _localize_ranges(records: list, tz: Optional[BaseTzInfo], label: str) -> list:
    """Copy time-range records with their datetimes in salon-local wall time."""
    localized = []
    for record in records:
        update = {
            "starts_at": to_local_naive(record.starts_at, tz, f"{label}.starts_at"),
            "ends_at": to_local_naive(record.ends_at, tz, f"{label}.ends_at"),
        }
        expires_at = getattr(record, "reservation_expires_at", None)
        if expires_at is not None:
            update["reservation_expires_at"] = to_local_naive(
                expires_at, tz, f"{label}.reservation_expires_at"
            )
        localized.append(record.model_copy(update=update))
    return localized


def compute_available_slots(
    request: SlotRequest, schedule: SalonSchedule, now: datetime
) -> list[AvailableSlot]:
    """
    Compute every bookable slot for the request across its date range.

    Returns an empty list when nothing is bookable (no qualified staff,
    closed or fully blocked days, range outside the booking window, no
    services requested). Raises SlotEngineError for unknown or inactive
    service ids, for multiple services when the rules forbid them, and
    for timezone problems.
    """
    with lookup_scope(request.salon_id):
        return _compute_available_slots(request, schedule, now)


def _compute_available_slots(
    request: SlotRequest, schedule: SalonSchedule, now: datetime
) -> list[AvailableSlot]:
    rules = BookingRules.with_overrides(schedule.booking_rules)
    tz = get_salon_timezone(schedule.timezone)

    requested = resolve_requested_services(schedule.services, request.service_ids)
    if not requested:
        logger.info("No services requested; nothing to compute")
        return []
    if len(requested) > 1 and not rules.allow_multiple_services:
        raise SlotEngineError(
            SlotEngineErrorCode.VALIDATION_ERROR,
            "Booking rules allow only one service per appointment",
            {"service_ids": ", ".join(request.service_ids)},
        )

    total_duration = calculate_total_duration(requested, rules)
    qualified_staff = filter_staff_by_skills(
        schedule.staff, request.service_ids, request.preferred_staff_id
    )
    if not qualified_staff:
        logger.info("No qualified staff for services %s", request.service_ids)
        return []

    local_now = to_local_naive(now, tz, "now")
    range_start = to_local_naive(request.date_range_start, tz, "date_range_start")
    range_end = to_local_naive(request.date_range_end, tz, "date_range_end")

    absences = _localize_ranges(schedule.staff_absences, tz, "staff_absences")
    blocked_times = _localize_ranges(schedule.blocked_times, tz, "blocked_times")
    appointments = _localize_ranges(schedule.existing_appointments, tz, "existing_appointments")

    service_info = [
        ServiceSlotInfo(
            service_id=service.id,
            name=service.name,
            duration_minutes=service.duration_minutes,
            price=service.current_price,
        )
        for service in requested
    ]
    duration = timedelta(minutes=total_duration)

    slots: list[AvailableSlot] = []
    for day in iter_days(range_start.date(), range_end.date()):
        if not is_within_booking_window(day, local_now, rules):
            logger.debug("Skipping %s: outside booking window", day.isoformat())
            continue

        opening_hours = get_opening_hours_for_day(schedule.opening_hours, day)
        if opening_hours is None or opening_hours.is_closed:
            logger.debug("Skipping %s: salon closed", day.isoformat())
            continue

        for member in qualified_staff:
            intervals = compute_available_intervals(
                day=day,
                staff=member,
                day_opening_hours=opening_hours,
                staff_working_hours=schedule.staff_working_hours,
                staff_absences=absences,
                blocked_times=blocked_times,
                existing_appointments=appointments,
                total_duration=total_duration,
                rules=rules,
                now=local_now,
            )
            for interval in intervals:
                for start in iter_slot_starts(interval, total_duration, rules.slot_granularity_minutes):
                    starts_at, ends_at = to_local_aware_range(start, duration, tz)
                    slots.append(
                        AvailableSlot(
                            staff_id=member.id,
                            staff_name=member.name,
                            starts_at=starts_at,
                            ends_at=ends_at,
                            total_duration=total_duration,
                            services=service_info,
                        )
                    )

    logger.info(
        "Computed %d slot(s) for salon %s, services %s, %s to %s",
        len(slots), request.salon_id or "-", request.service_ids,
        range_start.date().isoformat(), range_end.date().isoformat(),
    )
    return sort_slots(slots)


def find_next_available_slot(
    service_ids: list[str],
    schedule: SalonSchedule,
    now: datetime,
    preferred_staff_id: Optional[str] = None,
) -> Optional[AvailableSlot]:
    """Earliest slot within the booking horizon, or None.

    With a preferred staff member, their earliest slot wins when they have
    one; otherwise the earliest slot of anyone qualified is returned.
    """
    rules = BookingRules.with_overrides(schedule.booking_rules)
    request = SlotRequest(
        service_ids=service_ids,
        date_range_start=now,
        date_range_end=now + timedelta(days=rules.horizon_days),
        preferred_staff_id=preferred_staff_id,
    )
    slots = compute_available_slots(request, schedule, now)
    if preferred_staff_id:
        preferred = next((slot for slot in slots if slot.staff_id == preferred_staff_id), None)
        if preferred is not None:
            return preferred
    return slots[0] if slots else None


def is_slot_available(
    service_ids: list[str],
    schedule: SalonSchedule,
    staff_id: str,
    starts_at: datetime,
    now: datetime,
) -> bool:
    """Re-check a chosen slot against the current schedule snapshot.

    Used right before a reservation is written; it does not replace the
    write path's own overlap check.
    """
    tz = get_salon_timezone(schedule.timezone)
    wanted = to_local_naive(starts_at, tz, "starts_at")
    request = SlotRequest(
        service_ids=service_ids,
        date_range_start=starts_at,
        date_range_end=starts_at,
        preferred_staff_id=staff_id,
    )
    return any(
        slot.staff_id == staff_id and to_local_naive(slot.starts_at, tz, "starts_at") == wanted
        for slot in compute_available_slots(request, schedule, now)
    )
