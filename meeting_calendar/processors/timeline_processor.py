# File: meeting_calendar/processors/timeline_processor.py
"""
Availability timeline processing.
Builds the per-minute availability map for a calendar window and merges
attendees' busy intervals into it, sequentially or across a thread pool.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Set

from meeting_calendar.core.config_manager import Config
from meeting_calendar.models import (
    Attendee,
    AvailabilityType,
    FillMode,
    InvalidArgumentError,
    TimeSlot,
    ONE_MINUTE,
)
from meeting_calendar.utils.logger import setup_logger

logger = setup_logger(__name__)

Timeline = Dict[datetime, AvailabilityType]


def build_timeline(window_start: datetime, window_end: datetime) -> Timeline:
    """
    Create one AVAILABLE entry per minute in [window_start, window_end).

    Raises:
        InvalidArgumentError: If the window is empty or inverted.
    """
    if window_end <= window_start:
        raise InvalidArgumentError(
            "The timeline end time must be greater than the start time.", "window_end"
        )

    timeline: Timeline = {}
    current = window_start
    while current < window_end:
        timeline[current] = AvailabilityType.AVAILABLE
        current += ONE_MINUTE
    return timeline


def clip_to_window(interval: TimeSlot, window_start: datetime, window_end: datetime) -> Optional[TimeSlot]:
    """Clamp a busy interval to the window, or None if it lies outside it."""
    return interval.clip_to_window(window_start, window_end)


def mark_scheduled(timeline: Timeline, interval: Optional[TimeSlot]) -> int:
    """
    Mark every minute of [interval.start, interval.end) as SCHEDULED.

    A minute only ever moves from AVAILABLE to SCHEDULED; minutes outside
    the timeline are ignored.

    Returns:
        Number of minutes newly marked.
    """
    if interval is None:
        return 0
    return _apply_busy_minutes(timeline, interval.minutes())


def _apply_busy_minutes(timeline: Timeline, minutes: Iterable[datetime]) -> int:
    marked = 0
    for minute in minutes:
        if timeline.get(minute) is AvailabilityType.AVAILABLE:
            timeline[minute] = AvailabilityType.SCHEDULED
            marked += 1
    return marked


def _collect_busy_minutes(intervals: Sequence[TimeSlot], window_start: datetime, window_end: datetime) -> Set[datetime]:
    """Worker body: busy minute keys for a partition of busy intervals."""
    busy: Set[datetime] = set()
    for interval in intervals:
        clipped = clip_to_window(interval, window_start, window_end)
        if clipped is not None:
            busy.update(clipped.minutes())
    return busy


def _partition(items: List[TimeSlot], parts: int) -> List[List[TimeSlot]]:
    parts = max(1, min(parts, len(items)))
    return [items[i::parts] for i in range(parts)]


class TimelineProcessor:
    """Fills availability timelines from attendees' meetings."""

    def __init__(
        self,
        max_attendees: int = Config.SEQUENTIAL_MAX_ATTENDEES,
        max_window_minutes: int = Config.SEQUENTIAL_MAX_WINDOW_MINUTES,
        max_workers: int = Config.FILL_MAX_WORKERS,
    ):
        """
        Initialize timeline processor.

        Args:
            max_attendees: Largest attendee count filled sequentially
            max_window_minutes: Longest window (minutes) filled sequentially
            max_workers: Thread pool size for the parallel fill
        """
        self.max_attendees = max_attendees
        self.max_window_minutes = max_window_minutes
        self.max_workers = max(1, max_workers)
        self.logger = setup_logger(__name__)

    def choose_fill_mode(self, attendee_count: int, window_minutes: float) -> FillMode:
        """Sequential for small problems, parallel once either threshold is crossed."""
        if attendee_count <= self.max_attendees and window_minutes <= self.max_window_minutes:
            return FillMode.SEQUENTIAL
        return FillMode.PARALLEL

    def fill(
        self,
        timeline: Timeline,
        attendees: Sequence[Attendee],
        window_start: datetime,
        window_end: datetime,
        now: datetime,
        mode: Optional[FillMode] = None,
    ) -> Timeline:
        """
        Merge all attendees' active meetings into the timeline.

        Args:
            timeline: Timeline built for [window_start, window_end)
            attendees: Attendees whose meetings block time
            window_start: Lower bound used to clip meetings
            window_end: Upper bound used to clip meetings
            now: Meetings ending at or before this moment are skipped
            mode: Force a fill mode (default: chosen from problem size)

        Returns:
            The same timeline, updated in place
        """
        if mode is None:
            window_minutes = (window_end - window_start).total_seconds() / 60
            mode = self.choose_fill_mode(len(attendees), window_minutes)

        self.logger.debug(
            f"Filling {len(timeline)} minute timeline for {len(attendees)} attendees ({mode.value})"
        )

        if mode is FillMode.PARALLEL:
            return self.fill_parallel(timeline, attendees, window_start, window_end, now)
        return self.fill_sequential(timeline, attendees, window_start, window_end, now)

    def fill_sequential(
        self,
        timeline: Timeline,
        attendees: Sequence[Attendee],
        window_start: datetime,
        window_end: datetime,
        now: datetime,
    ) -> Timeline:
        """Mark meetings one after another in attendee order."""
        for attendee in attendees:
            for interval in attendee.busy_intervals(now):
                mark_scheduled(timeline, clip_to_window(interval, window_start, window_end))
        return timeline

    def fill_parallel(
        self,
        timeline: Timeline,
        attendees: Sequence[Attendee],
        window_start: datetime,
        window_end: datetime,
        now: datetime,
    ) -> Timeline:
        """
        Fan the busy intervals out over a thread pool.

        Each worker returns a private set of busy minutes; the sets are then
        OR-ed into the timeline here, so workers never write shared state.
        """
        intervals = [
            interval
            for attendee in attendees
            for interval in attendee.busy_intervals(now)
        ]
        if not intervals:
            return timeline

        partitions = _partition(intervals, self.max_workers)
        with ThreadPoolExecutor(max_workers=len(partitions)) as executor:
            futures = [
                executor.submit(_collect_busy_minutes, part, window_start, window_end)
                for part in partitions
            ]
            partial_results = [future.result() for future in futures]

        marked = 0
        for busy_minutes in partial_results:
            marked += _apply_busy_minutes(timeline, busy_minutes)

        self.logger.debug(
            f"Parallel fill over {len(partitions)} partitions marked {marked} minutes"
        )
        return timeline
