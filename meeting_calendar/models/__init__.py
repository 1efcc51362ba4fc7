from .errors import InvalidArgumentError
from .enums import AvailabilityType, FillMode
from .time_slot import TimeSlot, calibrate_to_minutes, is_invalid_date, minutes_between, ONE_MINUTE
from .attendee import Meeting, MeetingDetails, Attendee, attendee_from_intervals

__all__ = [
    "InvalidArgumentError",
    "AvailabilityType",
    "FillMode",
    "TimeSlot",
    "calibrate_to_minutes",
    "is_invalid_date",
    "minutes_between",
    "ONE_MINUTE",
    "Meeting",
    "MeetingDetails",
    "Attendee",
    "attendee_from_intervals",
]
