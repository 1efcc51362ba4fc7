# File: meeting_calendar/models/attendee.py

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional, Tuple, Union

from .time_slot import TimeSlot, calibrate_to_minutes


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Meeting:
    """A busy interval owned by an attendee."""
    slot: TimeSlot
    meeting_id: str = field(default_factory=_new_id)

    @classmethod
    def between(cls, start: datetime, end: datetime, meeting_id: Optional[str] = None) -> 'Meeting':
        """Create a meeting straight from its start and end times."""
        if meeting_id is None:
            return cls(TimeSlot(start, end))
        return cls(TimeSlot(start, end), meeting_id)

    @property
    def start(self) -> datetime:
        return self.slot.start

    @property
    def end(self) -> datetime:
        return self.slot.end

    def duration(self) -> int:
        return self.slot.duration()

    def is_over(self, now: datetime) -> bool:
        """Check if the meeting has already ended."""
        return self.end <= calibrate_to_minutes(now)


@dataclass(frozen=True)
class MeetingDetails:
    """A meeting plus its descriptive metadata."""
    meeting: Meeting
    title: str = ""
    agenda: str = ""
    attendee_names: Tuple[str, ...] = ()
    attachment_paths: Tuple[str, ...] = ()

    @property
    def meeting_id(self) -> str:
        return self.meeting.meeting_id

    @property
    def slot(self) -> TimeSlot:
        return self.meeting.slot

    @property
    def start(self) -> datetime:
        return self.meeting.start

    @property
    def end(self) -> datetime:
        return self.meeting.end

    def duration(self) -> int:
        return self.meeting.duration()

    def is_over(self, now: datetime) -> bool:
        """Check if the underlying meeting has already ended."""
        return self.meeting.is_over(now)

    def to_dict(self) -> dict:
        """Convert to dictionary for display."""
        return {
            'meeting_id': self.meeting.meeting_id,
            'title': self.title,
            'agenda': self.agenda,
            'start': self.start.isoformat(),
            'end': self.end.isoformat(),
            'attendees': list(self.attendee_names),
            'attachments': list(self.attachment_paths),
        }


@dataclass(eq=False)
class Attendee:
    """
    A person taking part in the calendar.

    Attendees compare by identity: two records with the same name and email
    are still different people as far as removal is concerned.
    """
    name: str
    meetings: Tuple[Union[Meeting, MeetingDetails], ...] = ()
    email: Optional[str] = None
    is_optional: bool = False
    attendee_id: str = field(default_factory=_new_id)

    def __post_init__(self):
        """Normalize meetings into an immutable tuple."""
        self.meetings = tuple(self.meetings or ())

    def busy_intervals(self, now: Optional[datetime] = None) -> List[TimeSlot]:
        """Busy slots, leaving out meetings already over at `now` when given."""
        meetings = self.meetings if now is None else self.active_meetings(now)
        return [meeting.slot for meeting in meetings]

    def active_meetings(self, now: datetime) -> List[Union[Meeting, MeetingDetails]]:
        """Meetings that have not ended yet."""
        return [meeting for meeting in self.meetings if not meeting.is_over(now)]


def attendee_from_intervals(
    name: str,
    intervals: Iterable[Tuple[datetime, datetime]],
    email: Optional[str] = None,
    is_optional: bool = False,
) -> Attendee:
    """Create an Attendee from plain (start, end) pairs."""
    return Attendee(
        name=name,
        meetings=tuple(Meeting.between(start, end) for start, end in intervals),
        email=email,
        is_optional=is_optional,
    )
