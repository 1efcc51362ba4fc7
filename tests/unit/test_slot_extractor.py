# File: tests/unit/test_slot_extractor.py
"""
Unit tests for free slot extraction and first-fit selection.
"""

import pytest

from meeting_calendar.models import AvailabilityType, TimeSlot
from meeting_calendar.processors.slot_extractor import extract_free_slots, select_first_fit
from meeting_calendar.processors.timeline_processor import build_timeline, mark_scheduled


def timeline_with_busy(at, length, busy):
    """Timeline of `length` minutes from T with (start, end) offsets marked busy."""
    timeline = build_timeline(at(0), at(length))
    for start, end in busy:
        mark_scheduled(timeline, TimeSlot(at(start), at(end)))
    return timeline


class TestExtractFreeSlots:
    """Tests for extract_free_slots."""

    def test_empty_timeline(self):
        assert extract_free_slots({}) == []

    def test_no_attendees_returns_whole_window(self, at):
        """Without attendees nothing blocks time, whatever the timeline says."""
        timeline = timeline_with_busy(at, 60, [(10, 20)])

        assert extract_free_slots(timeline, has_attendees=False) == [TimeSlot(at(0), at(59))]

    def test_all_available(self, at):
        timeline = timeline_with_busy(at, 60, [])
        assert extract_free_slots(timeline) == [TimeSlot(at(0), at(59))]

    def test_fully_scheduled(self, at):
        timeline = timeline_with_busy(at, 60, [(0, 60)])
        assert extract_free_slots(timeline) == []

    def test_gaps_between_busy_runs(self, at, assert_slots_valid):
        timeline = timeline_with_busy(at, 30, [(5, 10), (12, 20)])

        slots = extract_free_slots(timeline)

        assert slots == [
            TimeSlot(at(0), at(4)),
            TimeSlot(at(10), at(11)),
            TimeSlot(at(20), at(29)),
        ]
        assert_slots_valid(slots)

    def test_leading_busy_run(self, at):
        timeline = timeline_with_busy(at, 30, [(0, 10)])
        assert extract_free_slots(timeline) == [TimeSlot(at(10), at(29))]

    def test_trailing_busy_run(self, at):
        timeline = timeline_with_busy(at, 30, [(20, 30)])
        assert extract_free_slots(timeline) == [TimeSlot(at(0), at(19))]

    def test_single_free_minute_between_busy_runs(self, at):
        """A one-minute gap yields a zero-duration slot."""
        timeline = timeline_with_busy(at, 10, [(0, 4), (5, 10)])

        slots = extract_free_slots(timeline)

        assert slots == [TimeSlot(at(4), at(4))]
        assert slots[0].duration() == 0

    def test_run_starting_on_last_minute_is_dropped(self, at):
        timeline = timeline_with_busy(at, 10, [(0, 9)])
        assert extract_free_slots(timeline) == []

    def test_unsorted_input_is_scanned_in_time_order(self, at):
        timeline = timeline_with_busy(at, 10, [(3, 6)])
        shuffled = dict(reversed(list(timeline.items())))

        assert extract_free_slots(shuffled) == [TimeSlot(at(0), at(2)), TimeSlot(at(6), at(9))]

    def test_coverage_of_window(self, at, assert_slots_valid):
        """Free minutes and busy minutes together cover every timeline key once."""
        timeline = timeline_with_busy(at, 180, [(5, 7), (12, 18), (6, 10), (15, 20), (90, 120)])

        slots = extract_free_slots(timeline)
        assert_slots_valid(slots)

        free_minutes = []
        for slot in slots:
            free_minutes.extend(slot.minutes())
            free_minutes.append(slot.end)
        busy_minutes = [m for m, state in timeline.items() if state is AvailabilityType.SCHEDULED]

        assert len(free_minutes) == len(set(free_minutes))
        assert set(free_minutes).isdisjoint(busy_minutes)
        assert sorted(free_minutes + busy_minutes) == list(timeline)


class TestSelectFirstFit:
    """Tests for the tightest-fit selection."""

    @pytest.fixture
    def slots(self, at):
        """Free slots of 120, 10 and 60 minutes."""
        return [
            TimeSlot(at(0), at(119)),
            TimeSlot(at(200), at(209)),
            TimeSlot(at(300), at(359)),
        ]

    def test_smallest_sufficient_slot_wins(self, slots):
        chosen = select_first_fit(slots, 15)
        assert chosen.duration() == 60

    def test_exact_fit(self, slots):
        assert select_first_fit(slots, 10).duration() == 10

    def test_nothing_fits(self, slots):
        assert select_first_fit(slots, 121) is None

    def test_empty_input(self):
        assert select_first_fit([], 1) is None

    def test_tie_goes_to_earliest_start(self, at):
        later = TimeSlot(at(100), at(129))
        earlier = TimeSlot(at(0), at(29))

        assert select_first_fit([later, earlier], 30) == earlier

    def test_predicate_filters_candidates(self, slots, at):
        chosen = select_first_fit(slots, 15, predicate=lambda slot: slot.start >= at(300))
        assert chosen == TimeSlot(at(300), at(359))
