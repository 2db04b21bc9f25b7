"""Booking input data models: catalog, roster, schedule facts and rules."""

from datetime import datetime, time
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from salon_booking.config import settings


class AppointmentStatus(str, Enum):
    """Known appointment lifecycle states."""

    REQUESTED = "requested"
    RESERVED = "reserved"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


# Appointments in these states do not occupy staff time.
NON_BLOCKING_STATUSES = frozenset({AppointmentStatus.CANCELLED.value, AppointmentStatus.NO_SHOW.value})


class _TimeRange(BaseModel):
    """Shared validation for records spanning ``starts_at`` to ``ends_at``."""

    starts_at: datetime
    ends_at: datetime

    @model_validator(mode="after")
    def _check_order(self):
        if self.ends_at < self.starts_at:
            raise ValueError(
                f"ends_at ({self.ends_at.isoformat()}) is before starts_at "
                f"({self.starts_at.isoformat()})"
            )
        return self


class BookableService(BaseModel):
    """A service from the salon catalog. Prices are in cents."""
    id: str
    name: str
    duration_minutes: int = Field(gt=0)
    current_price: int = Field(ge=0)
    description: Optional[str] = None
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    is_active: bool = True


class BookableStaff(BaseModel):
    """A staff member and the service ids they are qualified to perform."""
    id: str
    name: str
    service_ids: list[str] = Field(default_factory=list)
    is_bookable: bool = True
    image_url: Optional[str] = None


class DayOpeningHours(BaseModel):
    """Salon opening hours for one weekday (0 = Sunday)."""
    day_of_week: int = Field(ge=0, le=6)
    open_time: time
    close_time: time
    is_closed: bool = False


class StaffWorkingHours(BaseModel):
    """Recurring weekly working hours for one staff member on one weekday."""
    staff_id: str
    day_of_week: int = Field(ge=0, le=6)
    start_time: time
    end_time: time


class StaffAbsence(_TimeRange):
    """Vacation, sick leave or other planned unavailability."""
    staff_id: str
    reason: Optional[str] = None


class BlockedTime(_TimeRange):
    """Ad-hoc block. ``staff_id=None`` blocks the whole salon."""
    staff_id: Optional[str] = None
    reason: Optional[str] = None


class ExistingAppointment(_TimeRange):
    """An already-booked appointment as seen by the slot engine."""
    staff_id: str
    id: Optional[str] = None
    status: str = AppointmentStatus.CONFIRMED.value
    reservation_expires_at: Optional[datetime] = None


class BookingRules(BaseModel):
    """Fully-resolved booking rules.

    Build one with :meth:`with_overrides` to merge a partial, caller-supplied
    override over the configured defaults. ``require_deposit``,
    ``deposit_amount_cents`` and ``cancellation_deadline_hours`` are carried
    through for callers and not interpreted by the slot engine.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    slot_granularity_minutes: int = Field(default=settings.booking.slot_granularity_minutes, gt=0)
    lead_time_minutes: int = Field(default=settings.booking.lead_time_minutes, ge=0)
    horizon_days: int = Field(default=settings.booking.horizon_days, ge=0)
    buffer_between_minutes: int = Field(default=settings.booking.buffer_between_minutes, ge=0)
    allow_multiple_services: bool = settings.booking.allow_multiple_services
    require_deposit: bool = settings.booking.require_deposit
    deposit_amount_cents: Optional[int] = Field(default=None, ge=0)
    cancellation_deadline_hours: int = Field(
        default=settings.booking.cancellation_deadline_hours, ge=0
    )

    @classmethod
    def with_overrides(
        cls, overrides: Union["BookingRules", dict[str, Any], None] = None
    ) -> "BookingRules":
        """Merge caller-supplied fields over the defaults.

        ``None`` values in the override dict are treated as "not supplied".
        """
        if isinstance(overrides, BookingRules):
            return overrides
        supplied = {key: value for key, value in (overrides or {}).items() if value is not None}
        return cls(**supplied)


class SlotRequest(BaseModel):
    """What the customer asked for."""
    service_ids: list[str]
    date_range_start: datetime
    date_range_end: datetime
    preferred_staff_id: Optional[str] = None
    salon_id: Optional[str] = None


class SalonSchedule(BaseModel):
    """Pre-fetched schedule facts handed to the slot engine by the caller."""
    services: list[BookableService] = Field(default_factory=list)
    opening_hours: list[DayOpeningHours] = Field(default_factory=list)
    staff: list[BookableStaff] = Field(default_factory=list)
    staff_working_hours: list[StaffWorkingHours] = Field(default_factory=list)
    staff_absences: list[StaffAbsence] = Field(default_factory=list)
    blocked_times: list[BlockedTime] = Field(default_factory=list)
    existing_appointments: list[ExistingAppointment] = Field(default_factory=list)
    booking_rules: Optional[dict[str, Any]] = None
    timezone: Optional[str] = None
