# File: tests/conftest.py
"""
Pytest configuration and shared fixtures.
Provides a fixed clock and reusable calendar data for all tests.
"""

import pytest
from datetime import datetime, timedelta
from pathlib import Path
import sys

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from meeting_calendar.core.calendar import Calendar
from meeting_calendar.models import Attendee, Meeting, TimeSlot, attendee_from_intervals
from meeting_calendar.processors.timeline_processor import TimelineProcessor


# ==================== Time Fixtures ====================

@pytest.fixture
def base_time():
    """A fixed, minute-aligned 'now' used as T in scenarios."""
    return datetime(2030, 1, 7, 9, 0)


@pytest.fixture
def clock(base_time):
    """Clock callable that always returns base_time."""
    return lambda: base_time


@pytest.fixture
def at(base_time):
    """Helper returning T + the given number of minutes."""
    def _at(minutes: float) -> datetime:
        return base_time + timedelta(minutes=minutes)
    return _at


# ==================== Attendee Fixtures ====================

@pytest.fixture
def two_attendees(at):
    """The two-person scenario: busy 5-7, 12-18 and 6-10, 15-20 minutes after T."""
    return [
        attendee_from_intervals("Person1", [(at(5), at(7)), (at(12), at(18))]),
        attendee_from_intervals("Person2", [(at(6), at(10)), (at(15), at(20))]),
    ]


@pytest.fixture
def attendee_outside_window(at):
    """Attendee whose meetings all lie outside an 8 hour window from T."""
    return Attendee(
        name="Person1",
        email="person1@example.com",
        meetings=(
            Meeting.between(at(-120), at(-60)),
            Meeting.between(at(9 * 60), at(10 * 60)),
        ),
    )


# ==================== Calendar Fixtures ====================

@pytest.fixture
def make_calendar(base_time, clock):
    """Factory fixture for calendars pinned to the fixed clock."""
    def _create(start_offset: float = 0, end_offset: float = 180, attendees=None, **kwargs) -> Calendar:
        kwargs.setdefault("clock", clock)
        return Calendar(
            base_time + timedelta(minutes=start_offset),
            base_time + timedelta(minutes=end_offset),
            attendees,
            **kwargs,
        )
    return _create


@pytest.fixture
def sequential_processor():
    """Processor that never switches to the parallel fill."""
    return TimelineProcessor(max_attendees=10_000, max_window_minutes=10_000_000)


@pytest.fixture
def parallel_processor():
    """Processor that always uses the parallel fill."""
    return TimelineProcessor(max_attendees=-1, max_window_minutes=-1, max_workers=3)


# ==================== Helper Fixtures ====================

@pytest.fixture
def assert_slots_valid():
    """Helper asserting free slots are ordered and pairwise disjoint."""
    def _assert_valid(slots):
        for slot in slots:
            assert slot.start <= slot.end, "Slot start should not be after end"
        for earlier, later in zip(slots, slots[1:]):
            assert earlier.end < later.start, "Slots should be ascending and disjoint"
    return _assert_valid


# ==================== Pytest Markers ====================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
