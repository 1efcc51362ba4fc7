# File: tests/unit/test_find_slot.py
"""
Unit tests for the console harness helpers.
"""

from datetime import datetime, timedelta

import pytz

from scripts.find_slot import build_demo_attendees, demo_window


class TestDemoWindow:
    """Tests for demo_window."""

    def test_end_is_normalized_across_dst_start(self):
        """Europe/Amsterdam springs forward at 02:00 on 2030-03-31."""
        tz = pytz.timezone("Europe/Amsterdam")
        now = tz.localize(datetime(2030, 3, 31, 0, 30))

        start, end = demo_window(tz, now, 8)

        assert start == now
        assert end.utcoffset() == timedelta(hours=2)
        assert (end.hour, end.minute) == (9, 30)
        assert end - start == timedelta(hours=8)

    def test_end_without_dst_change(self):
        tz = pytz.timezone("Europe/Amsterdam")
        now = tz.localize(datetime(2030, 1, 7, 9, 0))

        _, end = demo_window(tz, now, 8)

        assert end.utcoffset() == timedelta(hours=1)
        assert end.hour == 17


class TestDemoAttendees:
    """Tests for build_demo_attendees."""

    def test_four_attendees_relative_to_now(self, base_time):
        attendees = build_demo_attendees(base_time)

        assert [a.name for a in attendees] == ["Person1", "Person2", "Person3", "Person4"]
        assert attendees[0].meetings[0].start == base_time + timedelta(minutes=5)
