"""In-process availability slot engine for salon appointment booking."""

from salon_booking.engine import (
    SlotEngineError,
    compute_available_slots,
    find_next_available_slot,
    group_slots_by_date,
    is_slot_available,
)
from salon_booking.schemas import AvailableSlot, SalonSchedule, SlotRequest, SlotsByDate

__all__ = [
    "compute_available_slots",
    "find_next_available_slot",
    "group_slots_by_date",
    "is_slot_available",
    "SlotEngineError",
    "AvailableSlot",
    "SalonSchedule",
    "SlotRequest",
    "SlotsByDate",
]
