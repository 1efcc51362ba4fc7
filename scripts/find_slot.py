"""
Interactive free-slot finder.
Builds a demo calendar starting now and repeatedly asks for a meeting
duration, printing the tightest free slot that fits.
"""

import sys
import time
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Tuple

import pytz

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from meeting_calendar.core.calendar import Calendar
from meeting_calendar.core.config_manager import Config
from meeting_calendar.models import Attendee, InvalidArgumentError, attendee_from_intervals
from meeting_calendar.utils.formatting import format_duration, format_slot
from meeting_calendar.utils.logger import setup_logger

logger = setup_logger(__name__)


def build_demo_attendees(now: datetime) -> List[Attendee]:
    """Sample attendees with meetings spread over the next few hours."""
    def at(minutes: int) -> datetime:
        return now + timedelta(minutes=minutes)

    return [
        attendee_from_intervals("Person1", [(at(5), at(7)), (at(12), at(18))]),
        attendee_from_intervals("Person2", [(at(6), at(10)), (at(15), at(20))]),
        attendee_from_intervals(
            "Person3",
            [(at(25), at(27)), (at(32), at(48)), (at(65), at(120)), (at(130), at(160))],
        ),
        attendee_from_intervals(
            "Person4",
            [(at(46), at(50)), (at(55), at(60)), (at(85), at(150)), (at(150), at(180))],
        ),
    ]


def demo_window(timezone, now: datetime, hours: int) -> Tuple[datetime, datetime]:
    """Window of `hours` from now, with the end normalized across DST changes."""
    return now, timezone.normalize(now + timedelta(hours=hours))


def main() -> int:
    """
    Main execution function.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    if not Config.validate():
        logger.error("Configuration validation failed")
        return 1

    timezone = pytz.timezone(Config.TARGET_TIMEZONE)
    now = datetime.now(timezone)
    calendar = Calendar(
        *demo_window(timezone, now, Config.DEMO_WINDOW_HOURS),
        build_demo_attendees(now),
    )
    start_time, end_time = calendar

    print(f"Calendar window: {start_time:%I:%M %p} to {end_time:%I:%M %p} ({Config.TARGET_TIMEZONE})")
    for attendee in calendar.attendees:
        print(f"  - {attendee.name}: {len(attendee.meetings)} meetings")

    try:
        while True:
            raw = input("\nMeeting duration in minutes (blank or 'q' to quit): ").strip()
            if not raw or raw.lower() == 'q':
                return 0

            try:
                duration = int(raw)
            except ValueError:
                print("Invalid meeting duration.")
                continue

            started = time.perf_counter()
            try:
                slot = calendar.find_first_available_slot_in_range(duration, calendar.start_time)
            except InvalidArgumentError as e:
                print(f"Invalid request: {e}")
                continue
            elapsed_ms = (time.perf_counter() - started) * 1000

            if slot is not None:
                logger.debug(f"Selected slot {slot.to_dict()}")
                print(f"A meeting slot for {format_duration(duration)} is available between: {format_slot(slot)}.")
            else:
                print(
                    f"Sorry! There is no meeting slot available for {format_duration(duration)}. "
                    f"The calendar time frame is {start_time:%I:%M %p} to {end_time:%I:%M %p}, "
                    f"a total of {format_duration(calendar.window_minutes)}."
                )
            print(f"Time taken to calculate the result: {elapsed_ms:.1f}ms.")

    except (KeyboardInterrupt, EOFError):
        print("\nBye.")
        return 0

    except Exception as e:
        logger.error("Unexpected fatal error", exc_info=True)
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
