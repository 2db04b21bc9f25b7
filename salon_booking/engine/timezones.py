"""
Salon-local time normalization.

The slot engine does all of its day arithmetic on naive wall-clock
datetimes in the salon's timezone. When a schedule names a timezone,
aware inputs are converted into it and naive inputs are taken as already
local; results are localized back before they leave the engine. Without
a timezone every input must be naive.
"""

from datetime import datetime, timedelta
from typing import Optional

import pytz
from pytz.tzinfo import BaseTzInfo

from salon_booking.engine.errors import SlotEngineError, SlotEngineErrorCode


def get_salon_timezone(name: Optional[str]) -> Optional[BaseTzInfo]:
    """Resolve an IANA timezone name, or None when no timezone is configured."""
    if not name:
        return None
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        raise SlotEngineError(
            SlotEngineErrorCode.INVALID_TIMEZONE,
            f"Unknown salon timezone: {name!r}",
            {"timezone": name},
        ) from None


def to_local_naive(value: datetime, tz: Optional[BaseTzInfo], field_name: str = "datetime") -> datetime:
    """Express ``value`` as naive salon-local wall time."""
    if value.tzinfo is None:
        return value
    if tz is None:
        raise SlotEngineError(
            SlotEngineErrorCode.VALIDATION_ERROR,
            f"{field_name} is timezone-aware but the schedule has no timezone",
            {field_name: value.isoformat()},
        )
    return value.astimezone(tz).replace(tzinfo=None)


def to_local_aware(value: datetime, tz: Optional[BaseTzInfo]) -> datetime:
    """Attach the salon timezone to a naive local wall time (no-op without one)."""
    if tz is None:
        return value
    # Non-existent or ambiguous wall times around DST switches resolve to standard time.
    return tz.normalize(tz.localize(value, is_dst=False))


def to_local_aware_range(
    start: datetime, duration: timedelta, tz: Optional[BaseTzInfo]
) -> tuple[datetime, datetime]:
    """Localize a slot start once and derive its end from the aware start.

    The end is ``duration`` of elapsed time after the start, so a slot that
    touches a DST switch still lasts exactly ``duration``.
    """
    starts_at = to_local_aware(start, tz)
    if tz is None:
        return starts_at, starts_at + duration
    return starts_at, tz.normalize(starts_at + duration)
