# File: meeting_calendar/models/enums.py

from enum import Enum


class AvailabilityType(Enum):
    """State of a single minute on the availability timeline."""
    AVAILABLE = "available"
    SCHEDULED = "scheduled"


class FillMode(Enum):
    """How busy intervals are merged into the timeline."""
    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"
