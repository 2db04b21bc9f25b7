"""Slot engine output models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ServiceSlotInfo(BaseModel):
    """Name, duration and price snapshot of one requested service."""
    service_id: str
    name: str
    duration_minutes: int
    price: int


class AvailableSlot(BaseModel):
    """A bookable (staff member, start time) pair."""
    staff_id: str
    staff_name: str
    starts_at: datetime
    ends_at: datetime
    total_duration: int
    services: list[ServiceSlotInfo] = Field(default_factory=list)

    @property
    def date_key(self) -> str:
        return self.starts_at.strftime("%Y-%m-%d")

    @property
    def key(self) -> str:
        """Stable identifier for holding this slot while the customer checks out."""
        return f"{self.staff_id}|{self.starts_at.isoformat()}|{self.total_duration}"


class SlotsByDate(BaseModel):
    """Slots for a single calendar date with a display label."""
    date: str
    display_date: str
    slots: list[AvailableSlot] = Field(default_factory=list)


class DateAvailability(BaseModel):
    """Summary of availability for a single date."""
    date: str
    day_name: str
    slot_count: int
    first_start: Optional[datetime] = None
