from salon_booking.engine.errors import SlotEngineError, SlotEngineErrorCode
from salon_booking.engine.grouping import (
    format_display_date,
    group_slots_by_date,
    summarize_available_dates,
)
from salon_booking.engine.intervals import TimeInterval, intersect_intervals, subtract_intervals
from salon_booking.engine.slot_engine import (
    compute_available_slots,
    find_next_available_slot,
    is_slot_available,
    iter_slot_starts,
    sort_slots,
)

__all__ = [
    "compute_available_slots",
    "find_next_available_slot",
    "is_slot_available",
    "iter_slot_starts",
    "sort_slots",
    "group_slots_by_date",
    "format_display_date",
    "summarize_available_dates",
    "TimeInterval",
    "intersect_intervals",
    "subtract_intervals",
    "SlotEngineError",
    "SlotEngineErrorCode",
]
