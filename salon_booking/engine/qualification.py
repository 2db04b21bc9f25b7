"""Requested-service resolution, booking duration and staff qualification."""

from typing import Optional

from salon_booking.engine.errors import SlotEngineError, SlotEngineErrorCode
from salon_booking.logging_context import get_request_logger
from salon_booking.schemas.booking_schema import BookableService, BookableStaff, BookingRules

logger = get_request_logger(__name__)


def resolve_requested_services(
    services: list[BookableService], service_ids: list[str]
) -> list[BookableService]:
    """
    Look up each requested service id in the catalog, keeping request order.

    Raises SlotEngineError for ids that are unknown or refer to inactive
    services, so a bad request never reaches the interval pipeline.
    """
    catalog = {service.id: service for service in services}
    missing = [sid for sid in service_ids if sid not in catalog]
    if missing:
        raise SlotEngineError(
            SlotEngineErrorCode.INVALID_SERVICE,
            f"Unknown service id(s): {', '.join(missing)}",
            {sid: "not in service catalog" for sid in missing},
        )

    inactive = [sid for sid in service_ids if not catalog[sid].is_active]
    if inactive:
        raise SlotEngineError(
            SlotEngineErrorCode.INVALID_SERVICE,
            f"Service(s) not bookable: {', '.join(inactive)}",
            {sid: "service is inactive" for sid in inactive},
        )

    return [catalog[sid] for sid in service_ids]


def calculate_total_duration(services: list[BookableService], rules: BookingRules) -> int:
    """Minutes needed for all services back to back, with a buffer between each pair."""
    service_minutes = sum(service.duration_minutes for service in services)
    buffer_minutes = (len(services) - 1) * rules.buffer_between_minutes if len(services) > 1 else 0
    return service_minutes + buffer_minutes


def filter_staff_by_skills(
    staff: list[BookableStaff],
    service_ids: list[str],
    preferred_staff_id: Optional[str] = None,
) -> list[BookableStaff]:
    """Bookable staff who can perform every requested service.

    A qualified preferred staff member is moved to the front; an
    unqualified one is simply absent.
    """
    required = set(service_ids)
    qualified = [
        member for member in staff
        if member.is_bookable and required.issubset(member.service_ids)
    ]

    if preferred_staff_id:
        preferred = [member for member in qualified if member.id == preferred_staff_id]
        if preferred:
            qualified = preferred + [member for member in qualified if member.id != preferred_staff_id]
        else:
            logger.debug("Preferred staff '%s' is not qualified for %s", preferred_staff_id, service_ids)

    return qualified
