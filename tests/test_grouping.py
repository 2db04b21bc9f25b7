"""Tests for date grouping, display labels and availability summaries."""

from datetime import datetime

import pytest
import pytz

from salon_booking.engine.errors import SlotEngineError, SlotEngineErrorCode
from salon_booking.engine.grouping import (
    format_display_date,
    group_slots_by_date,
    summarize_available_dates,
)
from salon_booking.engine.slot_engine import compute_available_slots
from tests.conftest import NOW, THURSDAY, TUESDAY, WEDNESDAY, at, make_request


class TestFormatDisplayDate:
    def test_today(self):
        assert format_display_date(TUESDAY, TUESDAY, "en") == "Today"

    def test_tomorrow(self):
        assert format_display_date(WEDNESDAY, TUESDAY, "en") == "Tomorrow"

    def test_short_weekday_and_date(self):
        assert format_display_date(THURSDAY, TUESDAY, "en") == "Thu, 20 Mar"

    def test_german_labels(self):
        assert format_display_date(TUESDAY, TUESDAY, "de") == "Heute"
        assert format_display_date(WEDNESDAY, TUESDAY, "de") == "Morgen"
        assert format_display_date(THURSDAY, TUESDAY, "de") == "Do, 20. Mär"

    def test_unknown_locale_falls_back_to_english(self):
        assert format_display_date(TUESDAY, TUESDAY, "xx") == "Today"


class TestGroupSlotsByDate:
    def test_groups_in_date_order(self, schedule):
        slots = compute_available_slots(make_request(start=TUESDAY, end=THURSDAY), schedule, NOW)
        groups = group_slots_by_date(slots, NOW, locale="en")
        assert [g.date for g in groups] == ["2025-03-18", "2025-03-19", "2025-03-20"]
        assert sum(len(g.slots) for g in groups) == len(slots)

    def test_labels_relative_to_now(self, schedule):
        now = at(TUESDAY, 7)
        slots = compute_available_slots(make_request(start=TUESDAY, end=THURSDAY), schedule, now)
        labels = [g.display_date for g in group_slots_by_date(slots, now, locale="en")]
        assert labels == ["Today", "Tomorrow", "Thu, 20 Mar"]

    def test_preserves_slot_order_within_date(self, schedule):
        slots = compute_available_slots(make_request(), schedule, NOW)
        group = group_slots_by_date(slots, NOW)[0]
        assert group.slots == slots

    def test_empty(self):
        assert group_slots_by_date([], NOW) == []

    def test_today_taken_from_salon_timezone(self, schedule):
        berlin_schedule = schedule.model_copy(update={"timezone": "Europe/Berlin"})
        # 23:30 UTC on Monday is already Tuesday in Berlin
        now = pytz.utc.localize(datetime(2025, 3, 17, 23, 30))
        slots = compute_available_slots(make_request(start=WEDNESDAY), berlin_schedule, now)
        groups = group_slots_by_date(slots, now, timezone="Europe/Berlin", locale="en")
        assert groups[0].display_date == "Tomorrow"

    def test_aware_now_without_timezone_rejected(self, schedule):
        slots = compute_available_slots(make_request(), schedule, NOW)
        with pytest.raises(SlotEngineError) as exc_info:
            group_slots_by_date(slots, pytz.utc.localize(NOW))
        assert exc_info.value.code == SlotEngineErrorCode.VALIDATION_ERROR


class TestSummarizeAvailableDates:
    def test_counts_per_date(self, anna_only_schedule):
        slots = compute_available_slots(make_request(start=TUESDAY, end=WEDNESDAY), anna_only_schedule, NOW)
        summary = summarize_available_dates(slots, locale="en")
        assert [(s.date, s.day_name, s.slot_count) for s in summary] == [
            ("2025-03-18", "Tuesday", 31),
            ("2025-03-19", "Wednesday", 31),
        ]
        assert summary[0].first_start == at(TUESDAY, 9)

    def test_limit(self, anna_only_schedule):
        slots = compute_available_slots(make_request(start=TUESDAY, end=THURSDAY), anna_only_schedule, NOW)
        assert len(summarize_available_dates(slots, limit=2)) == 2
