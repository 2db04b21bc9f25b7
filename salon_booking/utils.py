"""Shared date and time helpers used across the slot engine."""

from datetime import date, datetime, time, timedelta

# Monday-first ordering used by settings screens. Values are the
# Sunday-first day_of_week numbers stored on opening/working hour rows.
SETTINGS_WEEKDAY_ORDER: list[tuple[int, str]] = [
    (1, "Monday"),
    (2, "Tuesday"),
    (3, "Wednesday"),
    (4, "Thursday"),
    (5, "Friday"),
    (6, "Saturday"),
    (0, "Sunday"),
]


def day_of_week(day: date) -> int:
    """Return the Sunday-first weekday number (0 = Sunday .. 6 = Saturday).

    Examples:
        >>> day_of_week(date(2025, 3, 16))
        0
        >>> day_of_week(date(2025, 3, 18))
        2
    """
    return (day.weekday() + 1) % 7


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """Exclusive end of ``day``: midnight of the following day."""
    return start_of_day(day) + timedelta(days=1)


def combine_date_and_time(day: date, value: time) -> datetime:
    return datetime.combine(day, value.replace(tzinfo=None))


def iter_days(first: date, last: date):
    """Yield each calendar date from ``first`` to ``last`` inclusive."""
    current = first
    while current <= last:
        yield current
        current += timedelta(days=1)


def round_up_to_granularity(value: datetime, granularity_minutes: int) -> datetime:
    """Round ``value`` up so its minute of the hour is a multiple of ``granularity_minutes``.

    Seconds and microseconds count as a started minute, so a value just past
    a boundary moves to the next one and never to an earlier time.

    Examples:
        >>> round_up_to_granularity(datetime(2025, 3, 18, 9, 7), 15)
        datetime.datetime(2025, 3, 18, 9, 15)
        >>> round_up_to_granularity(datetime(2025, 3, 18, 10, 0), 45)
        datetime.datetime(2025, 3, 18, 10, 0)
    """
    rounded = value.replace(second=0, microsecond=0)
    if rounded != value:
        rounded += timedelta(minutes=1)
    remainder = rounded.minute % granularity_minutes
    if remainder:
        rounded += timedelta(minutes=granularity_minutes - remainder)
    return rounded
