# File: meeting_calendar/processors/slot_extractor.py
"""
Free slot extraction.
Turns a filled availability timeline into maximal free TimeSlots and
selects the tightest slot for a requested duration.
"""

from enum import Enum
from typing import Callable, Iterable, List, Mapping, Optional
from datetime import datetime

from meeting_calendar.models import AvailabilityType, TimeSlot, ONE_MINUTE


class _ScanMode(Enum):
    SEEKING_FREE = "seeking_free"
    SEEKING_BUSY = "seeking_busy"


def extract_free_slots(
    timeline: Mapping[datetime, AvailabilityType],
    has_attendees: bool = True,
) -> List[TimeSlot]:
    """
    Walk the timeline once and emit every maximal run of AVAILABLE minutes.

    Args:
        timeline: Per-minute availability map
        has_attendees: Without attendees nothing can block time, so the whole
            timeline is returned as one slot

    Returns:
        Free slots in ascending start order. A run is closed at the minute
        before the next SCHEDULED minute; an open run at the end stretches to
        the last key. A run that only begins on the very last minute has
        nothing left to extend into and is not emitted.
    """
    keys = sorted(timeline)
    if not keys:
        return []

    if not has_attendees:
        return [TimeSlot(keys[0], keys[-1])]

    slots: List[TimeSlot] = []
    mode = _ScanMode.SEEKING_FREE
    pending_start: Optional[datetime] = None

    for minute in keys:
        state = timeline[minute]
        if mode is _ScanMode.SEEKING_FREE:
            if state is AvailabilityType.AVAILABLE:
                pending_start = minute
                mode = _ScanMode.SEEKING_BUSY
        elif state is AvailabilityType.SCHEDULED:
            slots.append(TimeSlot(pending_start, minute - ONE_MINUTE))
            pending_start = None
            mode = _ScanMode.SEEKING_FREE

    if pending_start is not None and pending_start != keys[-1]:
        slots.append(TimeSlot(pending_start, keys[-1]))

    return slots


def select_first_fit(
    slots: Iterable[TimeSlot],
    duration: int,
    predicate: Optional[Callable[[TimeSlot], bool]] = None,
) -> Optional[TimeSlot]:
    """
    Pick the smallest slot that still fits `duration` minutes.

    Ties on duration go to the earliest start. `predicate`, when given, must
    also hold for a slot to be considered.
    """
    candidates = [
        slot for slot in slots
        if slot.duration() >= duration and (predicate is None or predicate(slot))
    ]
    if not candidates:
        return None
    return min(candidates, key=lambda slot: (slot.duration(), slot.start))
