"""
Meeting calendar: free-slot search across attendees' busy intervals.
"""

from meeting_calendar.models import (
    Attendee,
    AvailabilityType,
    FillMode,
    InvalidArgumentError,
    Meeting,
    MeetingDetails,
    TimeSlot,
    attendee_from_intervals,
)
from meeting_calendar.core.calendar import Calendar

__version__ = "1.0.0"

__all__ = [
    "Attendee",
    "AvailabilityType",
    "Calendar",
    "FillMode",
    "InvalidArgumentError",
    "Meeting",
    "MeetingDetails",
    "TimeSlot",
    "attendee_from_intervals",
]
