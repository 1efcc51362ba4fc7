# File: meeting_calendar/models/time_slot.py
"""
Minute-resolution time slot value type and the datetime helpers it relies on.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Iterator, Optional

from .errors import InvalidArgumentError

ONE_MINUTE = timedelta(minutes=1)


def calibrate_to_minutes(value: datetime) -> datetime:
    """Drop seconds and sub-second parts, keeping tzinfo."""
    return value.replace(second=0, microsecond=0)


def is_invalid_date(value: Any) -> bool:
    """Check for unset values and the datetime.min/max sentinels."""
    if not isinstance(value, datetime):
        return True
    naive = value.replace(tzinfo=None)
    return naive == datetime.min or naive == datetime.max


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end (negative if end is earlier)."""
    return int((end - start).total_seconds() // 60)


@dataclass(frozen=True)
class TimeSlot:
    """A closed [start, end] interval calibrated to whole minutes."""
    start: datetime
    end: datetime

    def __post_init__(self):
        """Validate bounds and calibrate both timestamps."""
        if is_invalid_date(self.start):
            raise InvalidArgumentError("Invalid TimeSlot start time.", "start")
        if is_invalid_date(self.end):
            raise InvalidArgumentError("Invalid TimeSlot end time.", "end")

        # Frozen dataclass: bypass __setattr__ for the calibrated values
        object.__setattr__(self, "start", calibrate_to_minutes(self.start))
        object.__setattr__(self, "end", calibrate_to_minutes(self.end))

        if self.start > self.end:
            raise InvalidArgumentError(
                "The TimeSlot end time must be greater than the start time.", "end"
            )

    def __iter__(self) -> Iterator[datetime]:
        """Allow `start, end = slot` unpacking."""
        yield self.start
        yield self.end

    def duration(self) -> int:
        """
        Usable minutes in the slot.

        A degenerate slot is 0; otherwise the last minute counts as usable,
        so a slot from 10:00 to 10:59 is 60 minutes long.
        """
        if self.start == self.end:
            return 0
        return minutes_between(self.start, self.end) + 1

    def minutes(self) -> Iterator[datetime]:
        """Iterate over minute keys in [start, end)."""
        current = self.start
        while current < self.end:
            yield current
            current += ONE_MINUTE

    def overlaps_with(self, other: 'TimeSlot') -> bool:
        """Check if this slot overlaps with another."""
        return self.start < other.end and self.end > other.start

    def clip_to_window(self, window_start: datetime, window_end: datetime) -> Optional['TimeSlot']:
        """
        Clamp the slot to a calendar window.

        Returns:
            None when the slot lies entirely outside [window_start, window_end),
            otherwise the overlapping part.
        """
        if not self.overlaps_with(TimeSlot(window_start, window_end)):
            return None

        return TimeSlot(
            self.start if self.start >= window_start else window_start,
            self.end if self.end <= window_end else window_end,
        )

    def map_to_range(self, lower: datetime, upper: datetime) -> 'TimeSlot':
        """
        Clamp a free slot onto a search range.

        The start is raised to `lower` only when the slot straddles it, and the
        end lowered to `upper` only when the slot straddles it. Slots lying
        completely outside the range come back unchanged.
        """
        start = lower if self.start < lower < self.end else self.start
        end = upper if self.start < upper < self.end else self.end

        if start > end:
            return self
        return TimeSlot(start, end)

    def to_dict(self) -> dict:
        """Convert to dictionary for display or JSON output."""
        return {
            'start': self.start.isoformat(),
            'end': self.end.isoformat(),
            'duration_min': self.duration(),
        }
