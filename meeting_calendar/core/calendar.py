# File: meeting_calendar/core/calendar.py
"""
Meeting calendar.
Owns the calendar window and its attendees, and answers free-slot queries
by building a per-minute timeline, merging busy time and scanning for gaps.
"""

from datetime import datetime, timedelta
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from meeting_calendar.models import (
    Attendee,
    AvailabilityType,
    InvalidArgumentError,
    TimeSlot,
    calibrate_to_minutes,
    is_invalid_date,
    minutes_between,
)
from meeting_calendar.processors.slot_extractor import extract_free_slots, select_first_fit
from meeting_calendar.processors.timeline_processor import TimelineProcessor, build_timeline
from meeting_calendar.utils.logger import LoggerMixin


class Calendar(LoggerMixin):
    """
    A bounded window of allowed meeting hours shared by a set of attendees.

    The window is calibrated to whole minutes and must satisfy start < end.
    Attendee changes are not synchronized; callers serialize them.
    """

    def __init__(
        self,
        start_time: datetime,
        end_time: datetime,
        attendees: Optional[Iterable[Attendee]] = None,
        *,
        clock: Optional[Callable[[], datetime]] = None,
        timeline_processor: Optional[TimelineProcessor] = None,
    ):
        """
        Initialize a calendar window.

        Args:
            start_time: Lower bound of allowed meeting hours
            end_time: Upper bound of allowed meeting hours
            attendees: Optional initial attendees
            clock: Callable returning "now" (default: the system clock)
            timeline_processor: Fill strategy (default: thresholds from Config)

        Raises:
            InvalidArgumentError: For sentinel times or start >= end.
        """
        if is_invalid_date(start_time):
            raise InvalidArgumentError("Invalid Calendar start time.", "start_time")

        if is_invalid_date(end_time):
            raise InvalidArgumentError("Invalid Calendar end time.", "end_time")

        self._start_time = calibrate_to_minutes(start_time)
        self._end_time = calibrate_to_minutes(end_time)

        if self._start_time >= self._end_time:
            raise InvalidArgumentError(
                "The Calendar end time must be greater than the start time.", "end_time"
            )

        self._attendees: Optional[List[Attendee]] = list(attendees) if attendees is not None else None
        self._clock = clock
        self._timeline_processor = timeline_processor or TimelineProcessor()

    @classmethod
    def from_time_slot(cls, time_slot: TimeSlot, attendees: Optional[Iterable[Attendee]] = None, **kwargs) -> 'Calendar':
        """Create a calendar whose window is the given slot."""
        return cls(time_slot.start, time_slot.end, attendees, **kwargs)

    # ==================== Properties ====================

    @property
    def start_time(self) -> datetime:
        return self._start_time

    @property
    def end_time(self) -> datetime:
        return self._end_time

    @property
    def current_time(self) -> datetime:
        """Now, calibrated to minutes and in the window's timezone if it has one."""
        if self._clock is not None:
            now = self._clock()
        elif self._start_time.tzinfo:
            now = datetime.now(self._start_time.tzinfo)
        else:
            now = datetime.now()
        return calibrate_to_minutes(now)

    @property
    def window_minutes(self) -> int:
        """Length of the calendar window in minutes."""
        return minutes_between(self._start_time, self._end_time)

    @property
    def attendees(self) -> Optional[Tuple[Attendee, ...]]:
        """Read-only view of the attendees, or None if never set."""
        if self._attendees is None:
            return None
        return tuple(self._attendees)

    def __iter__(self) -> Iterator[datetime]:
        """Allow `start, end = calendar` unpacking."""
        yield self._start_time
        yield self._end_time

    def __repr__(self) -> str:
        count = len(self._attendees) if self._attendees is not None else 0
        return (
            f"Calendar({self._start_time.isoformat()} -> {self._end_time.isoformat()}, "
            f"{count} attendees)"
        )

    # ==================== Attendees ====================

    def add_attendees(self, attendees: Optional[Iterable[Attendee]]) -> None:
        """Replace the attendee list."""
        self._attendees = list(attendees) if attendees is not None else None

    def append_attendees(self, additional_attendees: Optional[Iterable[Attendee]]) -> None:
        """Append attendees; appending onto no list simply sets it."""
        if additional_attendees is None:
            return
        if self._attendees is None:
            self._attendees = list(additional_attendees)
        else:
            self._attendees.extend(additional_attendees)

    def remove_attendee(self, attendee: Attendee) -> bool:
        """Remove this exact attendee record. Returns True if it was present."""
        if not self._attendees:
            return False
        for index, existing in enumerate(self._attendees):
            if existing is attendee:
                del self._attendees[index]
                return True
        return False

    def remove_attendee_by_id(self, attendee_id: str) -> bool:
        """Remove the first attendee with the given id."""
        return self._remove_first(lambda a: a.attendee_id == attendee_id)

    def remove_attendee_by_name_and_email(self, name: str, email: Optional[str]) -> bool:
        """Remove the first attendee matching both name and email."""
        return self._remove_first(lambda a: a.name == name and a.email == email)

    def _remove_first(self, predicate: Callable[[Attendee], bool]) -> bool:
        match = next((a for a in self._attendees or [] if predicate(a)), None)
        return match is not None and self.remove_attendee(match)

    # ==================== Queries ====================

    def get_all_available_free_slots(self) -> List[TimeSlot]:
        """
        Compute every free slot from now (or the window start) to the window end.

        Returns:
            Free slots in ascending order; empty if the window is already over.
        """
        now = self.current_time

        # Nothing to compute for a window entirely in the past
        if self._end_time <= now:
            return []

        effective_start = self._start_time if self._start_time >= now else now
        timeline = build_timeline(effective_start, self._end_time)

        if not self._attendees:
            return extract_free_slots(timeline, has_attendees=False)

        self._timeline_processor.fill(
            timeline, self._attendees, effective_start, self._end_time, now
        )

        if AvailabilityType.AVAILABLE not in timeline.values():
            self.logger.debug("Timeline fully scheduled, no free slots")
            return []

        slots = extract_free_slots(timeline)
        self.logger.debug(f"Found {len(slots)} free slots for {len(self._attendees)} attendees")
        return slots

    def find_first_available_slot(self, duration: int, search_window: Optional[TimeSlot] = None) -> Optional[TimeSlot]:
        """
        Find the tightest free slot that fits `duration` minutes.

        Among all slots long enough, the shortest one wins; ties go to the
        earliest start. With a search window the slots are first clamped onto it.

        Args:
            duration: Requested meeting length in minutes
            search_window: Optional range to restrict the search to

        Returns:
            The chosen TimeSlot, or None if nothing fits
        """
        if search_window is not None:
            return self.find_first_available_slot_in_range(
                duration, search_window.start, search_window.end
            )

        return select_first_fit(self.get_all_available_free_slots(), duration)

    def find_first_available_slot_in_range(
        self,
        duration: int,
        from_time: datetime,
        to_time: Optional[datetime] = None,
    ) -> Optional[TimeSlot]:
        """
        Find the tightest free slot for `duration` minutes within a search range.

        Args:
            duration: Requested meeting length in minutes
            from_time: Lower bound of the search
            to_time: Upper bound of the search (default: calendar end)

        Raises:
            InvalidArgumentError: If the range or duration is unusable.
        """
        self._validate_search_range(duration, from_time, to_time)

        if to_time is None:
            to_time = self._end_time

        lower_bound = calibrate_to_minutes(from_time) if from_time >= self._start_time else self._start_time
        upper_bound = self._end_time if to_time >= self._end_time else calibrate_to_minutes(to_time)

        mapped_slots = [
            slot.map_to_range(lower_bound, upper_bound)
            for slot in self.get_all_available_free_slots()
        ]

        return select_first_fit(
            mapped_slots,
            duration,
            predicate=lambda slot: slot.start >= lower_bound and slot.end <= upper_bound,
        )

    def _validate_search_range(self, duration: int, from_time: datetime, to_time: Optional[datetime]) -> None:
        if is_invalid_date(from_time):
            raise InvalidArgumentError("Invalid start time.", "from_time")

        if duration <= 0:
            raise InvalidArgumentError(
                "The meeting duration can not be less than or equal to zero.", "duration"
            )

        if to_time is None:
            return

        lower = calibrate_to_minutes(from_time)
        upper = calibrate_to_minutes(to_time)

        if upper <= lower:
            raise InvalidArgumentError(
                "Search range upper limit can not be less than the lower limit time.", "to_time"
            )

        if duration > minutes_between(lower, upper):
            raise InvalidArgumentError(
                "The meeting duration can not be longer than the search range. "
                "Consider to increase the search range.",
                "duration",
            )

        if upper <= self.current_time:
            raise InvalidArgumentError(
                "Search range upper limit can not be less than the current time.", "to_time"
            )

    # ==================== Window movement ====================

    def move_forward(self, clear_attendees: bool = True) -> None:
        """Shift the window to [old_end, old_end + window length]."""
        span = timedelta(minutes=self.window_minutes)
        if clear_attendees and self._attendees is not None:
            self._attendees.clear()

        self._start_time = self._end_time
        self._end_time = self._end_time + span
        self.logger.info(f"Calendar moved forward to {self._start_time} - {self._end_time}")

    def move_forward_with(self, attendees: Iterable[Attendee]) -> None:
        """Shift the window forward and replace the attendees."""
        self.move_forward()
        self.add_attendees(attendees)

    def move_backward(self, clear_attendees: bool = True) -> None:
        """Shift the window to [old_start - window length, old_start]."""
        span = timedelta(minutes=self.window_minutes)
        if clear_attendees and self._attendees is not None:
            self._attendees.clear()

        self._end_time = self._start_time
        self._start_time = self._start_time - span
        self.logger.info(f"Calendar moved backward to {self._start_time} - {self._end_time}")

    def move_backward_with(self, attendees: Iterable[Attendee]) -> None:
        """Shift the window backward and replace the attendees."""
        self.move_backward()
        self.add_attendees(attendees)
