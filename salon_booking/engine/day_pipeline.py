"""
Per-day, per-staff availability pipeline.

For one calendar day and one staff member the bookable intervals are
built in a fixed order:

    1. salon opening hours for the weekday
    2. intersect with the staff member's working hours
    3. subtract absences (clipped to the day)
    4. subtract staff-specific and salon-wide blocked times (clipped to the day)
    5. subtract existing appointments, padded by the buffer
    6. clip starts forward to now + lead time
    7. drop intervals too short for the requested duration

All datetimes here are naive salon-local wall times.
"""

from datetime import date, datetime, timedelta
from typing import Optional

from salon_booking.engine.intervals import (
    TimeInterval,
    clip_interval,
    covered_time,
    intersect_intervals,
    subtract_intervals,
)
from salon_booking.logging_context import get_request_logger
from salon_booking.schemas.booking_schema import (
    NON_BLOCKING_STATUSES,
    AppointmentStatus,
    BlockedTime,
    BookableStaff,
    BookingRules,
    DayOpeningHours,
    ExistingAppointment,
    StaffAbsence,
    StaffWorkingHours,
)
from salon_booking.utils import combine_date_and_time, day_of_week, end_of_day, start_of_day

logger = get_request_logger(__name__)


def is_within_booking_window(day: date, now: datetime, rules: BookingRules) -> bool:
    """Whether ``day`` can hold any booking given lead time and horizon."""
    earliest_start = now + timedelta(minutes=rules.lead_time_minutes)
    last_day = now.date() + timedelta(days=rules.horizon_days)
    return end_of_day(day) > earliest_start and day <= last_day


def get_opening_hours_for_day(
    opening_hours: list[DayOpeningHours], day: date
) -> Optional[DayOpeningHours]:
    weekday = day_of_week(day)
    return next((row for row in opening_hours if row.day_of_week == weekday), None)


def get_staff_hours_for_day(
    working_hours: list[StaffWorkingHours], staff_id: str, day: date
) -> Optional[StaffWorkingHours]:
    weekday = day_of_week(day)
    return next(
        (row for row in working_hours if row.staff_id == staff_id and row.day_of_week == weekday),
        None,
    )


def _clip_to_day(starts_at: datetime, ends_at: datetime, day: date) -> Optional[TimeInterval]:
    return clip_interval(TimeInterval(starts_at, ends_at), start_of_day(day), end_of_day(day))


def get_absences_for_day(
    absences: list[StaffAbsence], staff_id: str, day: date
) -> list[TimeInterval]:
    clipped = (
        _clip_to_day(absence.starts_at, absence.ends_at, day)
        for absence in absences
        if absence.staff_id == staff_id
    )
    return [interval for interval in clipped if interval is not None]


def get_blocked_times_for_day(
    blocked_times: list[BlockedTime], staff_id: str, day: date
) -> list[TimeInterval]:
    """Staff-specific blocks for ``staff_id`` plus salon-wide blocks."""
    clipped = (
        _clip_to_day(block.starts_at, block.ends_at, day)
        for block in blocked_times
        if block.staff_id is None or block.staff_id == staff_id
    )
    return [interval for interval in clipped if interval is not None]


def is_blocking_appointment(appointment: ExistingAppointment, now: datetime) -> bool:
    """Cancelled, no-show and lapsed reservation holds leave the time free."""
    if appointment.status in NON_BLOCKING_STATUSES:
        return False
    if (
        appointment.status == AppointmentStatus.RESERVED.value
        and appointment.reservation_expires_at is not None
        and appointment.reservation_expires_at <= now
    ):
        return False
    return True


def get_appointments_for_day(
    appointments: list[ExistingAppointment],
    staff_id: str,
    day: date,
    now: datetime,
) -> list[ExistingAppointment]:
    day_interval = TimeInterval(start_of_day(day), end_of_day(day))
    return [
        appointment
        for appointment in appointments
        if appointment.staff_id == staff_id
        and TimeInterval(appointment.starts_at, appointment.ends_at).overlaps(day_interval)
        and is_blocking_appointment(appointment, now)
    ]


def apply_lead_time(
    intervals: list[TimeInterval], now: datetime, lead_time_minutes: int
) -> list[TimeInterval]:
    """Move every start forward to ``now + lead time``, dropping what is left empty."""
    earliest_start = now + timedelta(minutes=lead_time_minutes)
    clipped = []
    for interval in intervals:
        start = max(interval.start, earliest_start)
        if start < interval.end:
            clipped.append(TimeInterval(start, interval.end))
    return clipped


def compute_available_intervals(
    day: date,
    staff: BookableStaff,
    day_opening_hours: DayOpeningHours,
    staff_working_hours: list[StaffWorkingHours],
    staff_absences: list[StaffAbsence],
    blocked_times: list[BlockedTime],
    existing_appointments: list[ExistingAppointment],
    total_duration: int,
    rules: BookingRules,
    now: datetime,
) -> list[TimeInterval]:
    """Bookable intervals for ``staff`` on ``day`` long enough for ``total_duration`` minutes."""
    if day_opening_hours.is_closed:
        return []

    open_at = combine_date_and_time(day, day_opening_hours.open_time)
    close_at = combine_date_and_time(day, day_opening_hours.close_time)
    if open_at >= close_at:
        return []
    opening = TimeInterval(open_at, close_at)

    staff_hours = get_staff_hours_for_day(staff_working_hours, staff.id, day)
    if staff_hours is None:
        logger.debug("%s has no working hours on %s", staff.name, day.isoformat())
        return []
    work_start = combine_date_and_time(day, staff_hours.start_time)
    work_end = combine_date_and_time(day, staff_hours.end_time)
    if work_start >= work_end:
        return []
    intervals = intersect_intervals([opening], [TimeInterval(work_start, work_end)])

    intervals = subtract_intervals(intervals, get_absences_for_day(staff_absences, staff.id, day))
    intervals = subtract_intervals(intervals, get_blocked_times_for_day(blocked_times, staff.id, day))

    occupied = [
        TimeInterval(appointment.starts_at, appointment.ends_at).expand(rules.buffer_between_minutes)
        for appointment in get_appointments_for_day(existing_appointments, staff.id, day, now)
    ]
    intervals = subtract_intervals(intervals, occupied)

    intervals = apply_lead_time(intervals, now, rules.lead_time_minutes)

    required = timedelta(minutes=total_duration)
    intervals = [interval for interval in intervals if interval.duration >= required]

    logger.debug(
        "%s on %s: %d interval(s), %s bookable",
        staff.name, day.isoformat(), len(intervals), covered_time(intervals),
    )
    return intervals
