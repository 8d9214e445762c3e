"""
Fault taxonomy for the booking engine.

Business rejections (off day, outside hours, booking conflict) are never
raised; they come back as AvailabilityStatus / BookingResult values.
Everything here is a genuine fault the caller must not read as "slot taken".
"""


class BookingError(Exception):
    """Base class for booking engine faults."""


class StoreError(BookingError):
    """The assignment store could not serve a read or a write."""


class StoreUnavailableError(StoreError):
    """The backing storage could not be reached, read or written."""


class CorruptStoreError(StoreError):
    """Persisted assignment data is malformed."""


class StaleStoreVersionError(StoreError):
    """An append was attempted against a version that is no longer current."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Store version moved from {expected} to {actual}")
        self.expected = expected
        self.actual = actual


class CommitContentionError(BookingError):
    """Re-validation kept losing the race against other writers."""


class InvalidTransitionError(BookingError):
    """A booking session step was invoked out of order."""
