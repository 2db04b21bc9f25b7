from salon_booking.schemas.booking_schema import (
    AppointmentStatus,
    BlockedTime,
    BookableService,
    BookableStaff,
    BookingRules,
    DayOpeningHours,
    ExistingAppointment,
    SalonSchedule,
    SlotRequest,
    StaffAbsence,
    StaffWorkingHours,
)
from salon_booking.schemas.slot_schema import (
    AvailableSlot,
    DateAvailability,
    ServiceSlotInfo,
    SlotsByDate,
)

__all__ = [
    "AppointmentStatus", "BlockedTime", "BookableService", "BookableStaff",
    "BookingRules", "DayOpeningHours", "ExistingAppointment", "SalonSchedule",
    "SlotRequest", "StaffAbsence", "StaffWorkingHours",
    "AvailableSlot", "DateAvailability", "ServiceSlotInfo", "SlotsByDate",
]
