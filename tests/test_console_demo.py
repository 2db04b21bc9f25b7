"""Tests for the offline console demo."""

from datetime import datetime

from console_demo import build_sample_schedule, run
from salon_booking.engine import compute_available_slots
from salon_booking.schemas.booking_schema import SlotRequest

# A Tuesday morning
DEMO_NOW = datetime(2025, 3, 18, 8, 0)


class TestSampleSchedule:
    def test_sample_schedule_has_slots(self):
        schedule = build_sample_schedule(DEMO_NOW)
        request = SlotRequest(
            service_ids=["cut"],
            date_range_start=DEMO_NOW,
            date_range_end=DEMO_NOW.replace(hour=23),
        )
        slots = compute_available_slots(request, schedule, DEMO_NOW)
        assert {s.staff_id for s in slots} == {"anna", "ben"}

    def test_salon_wide_block_tomorrow(self):
        schedule = build_sample_schedule(DEMO_NOW)
        tomorrow = DEMO_NOW.replace(day=19)
        request = SlotRequest(
            service_ids=["wash"],
            date_range_start=tomorrow,
            date_range_end=tomorrow.replace(hour=23),
        )
        slots = compute_available_slots(request, schedule, DEMO_NOW)
        assert slots
        block_start, block_end = tomorrow.replace(hour=14), tomorrow.replace(hour=15)
        assert all(s.ends_at <= block_start or s.starts_at >= block_end for s in slots)


class TestRun:
    def test_prints_grouped_slots(self, capsys):
        assert run(["cut"], 2, DEMO_NOW, None) == 0
        out = capsys.readouterr().out
        assert "Today" in out
        assert "Tomorrow" in out
        assert "Monday" in out

    def test_unknown_service_reports_error(self, capsys):
        assert run(["massage"], 1, DEMO_NOW, None) == 1
        assert "invalid_service" in capsys.readouterr().out

    def test_closed_day_suggests_next_slot(self, capsys):
        sunday = datetime(2025, 3, 16, 8, 0)
        assert run(["cut"], 2, sunday, None) == 0
        out = capsys.readouterr().out
        assert "No slots available" in out
        assert "Next available: 2025-03-18 09:00" in out
