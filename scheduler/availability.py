"""
Availability Evaluator.

This module answers the binary question: "Is Provider X working for the whole
of Window Y?" It only looks at the provider's weekly schedule and its date
exceptions; existing bookings are the Conflict Detector's job.
"""

import logging
from dataclasses import dataclass
from datetime import date as date_type, datetime, timedelta
from enum import Enum
from typing import Iterator, Optional, Tuple

from models import CandidateWindow, Provider, WorkShift, sunday_weekday

logger = logging.getLogger(__name__)


class UnavailableReason(str, Enum):
    """Why a provider cannot take a window."""
    OFF_DAY = "OFF_DAY"
    OUTSIDE_HOURS = "OUTSIDE_HOURS"
    BOOKING_CONFLICT = "BOOKING_CONFLICT"


@dataclass(frozen=True)
class AvailabilityStatus:
    """Result of an availability check. Rejections are data, not exceptions."""
    available: bool
    reason: Optional[UnavailableReason] = None

    @classmethod
    def ok(cls) -> "AvailabilityStatus":
        return cls(available=True)

    @classmethod
    def rejected(cls, reason: UnavailableReason) -> "AvailabilityStatus":
        return cls(available=False, reason=reason)


def shift_spans(shift: WorkShift, day: date_type) -> Iterator[Tuple[datetime, datetime]]:
    """
    Concrete [start, end] spans of a shift that can cover times on `day`.

    A day shift yields one span. An overnight shift yields the span that
    starts on `day` and the one that started the evening before, which is
    still running in the early hours of `day`.
    """
    start = datetime.combine(day, shift.start)
    end = datetime.combine(day, shift.end)
    if not shift.is_overnight:
        yield start, end
        return

    end += timedelta(days=1)
    yield start, end
    yield start - timedelta(days=1), end - timedelta(days=1)


def is_date_available(provider: Provider, day: date_type) -> bool:
    """Whole-day check used by booking calendars: a working day and not an off date."""
    return provider.works_on(day) and not provider.is_off_on(day)


def evaluate_working_window(provider: Provider, window: CandidateWindow) -> AvailabilityStatus:
    """Check the window against the provider's working days, off dates and shifts."""
    day = window.start.date()

    if not provider.works_on(day):
        logger.debug(f"{provider.id}: weekday {sunday_weekday(day)} is not a working day")
        return AvailabilityStatus.rejected(UnavailableReason.OFF_DAY)

    # Exceptions can only narrow availability
    if provider.is_off_on(day):
        logger.debug(f"{provider.id}: {day} is an off date")
        return AvailabilityStatus.rejected(UnavailableReason.OFF_DAY)

    window_start, window_end = window.start, window.end
    for shift in provider.work_shifts:
        for span_start, span_end in shift_spans(shift, day):
            # The whole window must sit inside one span; no partial-shift bookings
            if window_start >= span_start and window_end <= span_end:
                return AvailabilityStatus.ok()

    logger.debug(f"{provider.id}: {window_start:%Y-%m-%d %H:%M} +{window.duration_minutes}m is outside all shifts")
    return AvailabilityStatus.rejected(UnavailableReason.OUTSIDE_HOURS)


def is_within_working_window(provider: Provider, window: CandidateWindow) -> bool:
    return evaluate_working_window(provider, window).available
