"""
Errors raised by the booking store and the date-range picker.
Caught by the bot handlers and the admin web app and shown to the user.
"""


class BookingError(Exception):
    """Base exception for all booking errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(BookingError):
    """Raised when a required field is missing or blank."""
    pass


class InvalidRange(BookingError):
    """Raised when arrival is after departure or a date lies before today."""
    pass


class OverlapConflict(InvalidRange):
    """Raised when overlaps are disabled and the range collides with a stored booking."""
    pass


class NotFound(BookingError):
    """Raised when removing a booking that is not in the store."""
    pass


class SelectionRejected(BookingError):
    """Raised when the date-range picker refuses a confirmation. The picker stays open."""
    pass
