"""Presentation helpers: group sorted slots by calendar date with display labels."""

from datetime import date, datetime, timedelta
from typing import Optional

from salon_booking.config import settings
from salon_booking.engine.timezones import get_salon_timezone, to_local_naive
from salon_booking.schemas.slot_schema import AvailableSlot, DateAvailability, SlotsByDate
from salon_booking.utils import day_of_week

# Keyed by Sunday-first day_of_week, matching opening/working hour rows.
DISPLAY_LABELS: dict[str, dict] = {
    "en": {
        "today": "Today",
        "tomorrow": "Tomorrow",
        "weekdays": ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"],
        "weekday_names": [
            "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
        ],
        "months": ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                   "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
        "pattern": "{weekday}, {day} {month}",
    },
    "de": {
        "today": "Heute",
        "tomorrow": "Morgen",
        "weekdays": ["So", "Mo", "Di", "Mi", "Do", "Fr", "Sa"],
        "weekday_names": [
            "Sonntag", "Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag", "Samstag",
        ],
        "months": ["Jan", "Feb", "Mär", "Apr", "Mai", "Jun",
                   "Jul", "Aug", "Sep", "Okt", "Nov", "Dez"],
        "pattern": "{weekday}, {day}. {month}",
    },
}


def _labels(locale: Optional[str]) -> dict:
    return DISPLAY_LABELS.get(locale or settings.salon.display_locale, DISPLAY_LABELS["en"])


def _local_today(now: datetime, timezone: Optional[str]) -> date:
    return to_local_naive(now, get_salon_timezone(timezone), "now").date()


def format_display_date(day: date, today: date, locale: Optional[str] = None) -> str:
    """Return "Today", "Tomorrow", or a short weekday + date such as "Tue, 18 Mar"."""
    labels = _labels(locale)
    if day == today:
        return labels["today"]
    if day == today + timedelta(days=1):
        return labels["tomorrow"]
    return labels["pattern"].format(
        weekday=labels["weekdays"][day_of_week(day)],
        day=day.day,
        month=labels["months"][day.month - 1],
    )


def group_slots_by_date(
    slots: list[AvailableSlot],
    now: datetime,
    timezone: Optional[str] = None,
    locale: Optional[str] = None,
) -> list[SlotsByDate]:
    """Partition slots by ``yyyy-MM-dd`` date, preserving their order within each date."""
    today = _local_today(now, timezone)
    grouped: dict[str, list[AvailableSlot]] = {}
    for slot in slots:
        grouped.setdefault(slot.date_key, []).append(slot)

    return [
        SlotsByDate(
            date=date_key,
            display_date=format_display_date(date.fromisoformat(date_key), today, locale),
            slots=date_slots,
        )
        for date_key, date_slots in sorted(grouped.items())
    ]


def summarize_available_dates(
    slots: list[AvailableSlot], limit: Optional[int] = None, locale: Optional[str] = None
) -> list[DateAvailability]:
    """Get the dates with available slots, earliest first."""
    labels = _labels(locale)
    summary: dict[str, DateAvailability] = {}
    for slot in slots:
        entry = summary.get(slot.date_key)
        if entry is None:
            summary[slot.date_key] = DateAvailability(
                date=slot.date_key,
                day_name=labels["weekday_names"][day_of_week(slot.starts_at.date())],
                slot_count=1,
                first_start=slot.starts_at,
            )
            continue
        entry.slot_count += 1
        if slot.starts_at < entry.first_start:
            entry.first_start = slot.starts_at

    results = [summary[key] for key in sorted(summary)]
    return results[:limit] if limit is not None else results
