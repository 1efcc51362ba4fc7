# File: meeting_calendar/utils/formatting.py
"""
Human-readable formatting helpers for console output.
"""

from typing import Optional

from meeting_calendar.models import TimeSlot


def _plural(value: int, unit: str) -> str:
    return f"{value} {unit}" if value == 1 else f"{value} {unit}s"


def format_duration(total_minutes: float) -> str:
    """Format minutes as e.g. '2 hours and 5 minutes'."""
    total = int(abs(total_minutes))
    hours, minutes = divmod(total, 60)
    return f"{_plural(hours, 'hour')} and {_plural(minutes, 'minute')}"


def format_slot(slot: Optional[TimeSlot], fmt: str = "%I:%M %p") -> str:
    """Format a slot as 'hh:mm AM - hh:mm PM'."""
    if slot is None:
        return "N/A"
    return f"{slot.start.strftime(fmt)} - {slot.end.strftime(fmt)}"
