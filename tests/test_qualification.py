"""Tests for service resolution, total duration and staff qualification."""

import pytest

from salon_booking.engine.errors import SlotEngineError, SlotEngineErrorCode
from salon_booking.engine.qualification import (
    calculate_total_duration,
    filter_staff_by_skills,
    resolve_requested_services,
)
from salon_booking.schemas.booking_schema import BookingRules
from tests.conftest import make_services, make_staff


class TestResolveRequestedServices:
    def test_keeps_request_order(self):
        services = resolve_requested_services(make_services(), ["wash", "cut"])
        assert [s.id for s in services] == ["wash", "cut"]

    def test_unknown_service_fails_fast(self):
        with pytest.raises(SlotEngineError) as exc_info:
            resolve_requested_services(make_services(), ["cut", "massage"])
        assert exc_info.value.code == SlotEngineErrorCode.INVALID_SERVICE
        assert "massage" in exc_info.value.field_errors

    def test_inactive_service_rejected(self):
        with pytest.raises(SlotEngineError, match="perm"):
            resolve_requested_services(make_services(), ["perm"])

    def test_empty_request(self):
        assert resolve_requested_services(make_services(), []) == []


class TestCalculateTotalDuration:
    def test_single_service_has_no_buffer(self):
        services = resolve_requested_services(make_services(), ["cut"])
        rules = BookingRules.with_overrides({"buffer_between_minutes": 10})
        assert calculate_total_duration(services, rules) == 30

    def test_buffer_between_two_services(self):
        services = resolve_requested_services(make_services(), ["color", "wash"])
        rules = BookingRules.with_overrides({"buffer_between_minutes": 10})
        assert calculate_total_duration(services, rules) == 85

    def test_buffer_between_three_services(self):
        services = resolve_requested_services(make_services(), ["color", "wash", "cut"])
        rules = BookingRules.with_overrides({"buffer_between_minutes": 5})
        assert calculate_total_duration(services, rules) == 45 + 30 + 30 + 2 * 5

    def test_no_services(self):
        assert calculate_total_duration([], BookingRules()) == 0


class TestFilterStaffBySkills:
    def test_requires_every_service(self):
        qualified = filter_staff_by_skills(make_staff(), ["cut", "color"])
        assert [s.id for s in qualified] == ["anna"]

    def test_excludes_non_bookable_staff(self):
        qualified = filter_staff_by_skills(make_staff(), ["cut"])
        assert "carl" not in [s.id for s in qualified]

    def test_preferred_staff_moved_to_front(self):
        qualified = filter_staff_by_skills(make_staff(), ["cut"], preferred_staff_id="ben")
        assert [s.id for s in qualified] == ["ben", "anna"]

    def test_unqualified_preferred_staff_gets_no_special_treatment(self):
        qualified = filter_staff_by_skills(make_staff(), ["color"], preferred_staff_id="ben")
        assert [s.id for s in qualified] == ["anna"]

    def test_unknown_preferred_staff_ignored(self):
        qualified = filter_staff_by_skills(make_staff(), ["cut"], preferred_staff_id="zoe")
        assert [s.id for s in qualified] == ["anna", "ben"]

    def test_no_one_qualified(self):
        assert filter_staff_by_skills(make_staff(), ["balayage"]) == []
