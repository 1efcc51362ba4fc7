# File: meeting_calendar/models/errors.py

from typing import Optional


class InvalidArgumentError(ValueError):
    """Raised when a caller hands the calendar a bad argument."""

    def __init__(self, message: str, argument: Optional[str] = None):
        super().__init__(message)
        self.argument = argument

    def __str__(self) -> str:
        message = super().__str__()
        if self.argument:
            return f"{message} (argument: {self.argument})"
        return message
