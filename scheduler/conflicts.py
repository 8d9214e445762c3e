"""
Conflict Detector.

Finds committed assignments of the same provider that overlap a candidate
window. Windows are half-open, so back-to-back bookings never clash.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional, Tuple

from models import Assignment, CandidateWindow, Provider
from .duration import DEFAULT_DURATION_MINUTES

logger = logging.getLogger(__name__)


def assignment_window(assignment: Assignment) -> Optional[Tuple[datetime, datetime]]:
    """
    Rebuild the [start, end) window an assignment occupies.
    Returns None for records without a usable date or time slot.
    """
    start_time = assignment.slot_start
    if assignment.date is None or start_time is None:
        return None

    start = datetime.combine(assignment.date, start_time)
    # Records without a duration count as an hour so occupied time is never under-counted
    minutes = assignment.duration_minutes or DEFAULT_DURATION_MINUTES
    return start, start + timedelta(minutes=minutes)


def overlaps(s1: datetime, e1: datetime, s2: datetime, e2: datetime) -> bool:
    """Half-open interval overlap; touching endpoints do not overlap."""
    return s1 < e2 and e1 > s2


def find_conflicting_assignment(
    provider: Provider,
    window: CandidateWindow,
    assignments: Iterable[Assignment]
) -> Optional[Assignment]:
    """Return the first assignment of `provider` overlapping `window`, if any."""
    for assignment in assignments:
        if assignment.reserved_provider_id != provider.id:
            continue

        occupied = assignment_window(assignment)
        if occupied is None:
            logger.debug(f"Skipping assignment {assignment.id}: no usable date/time slot")
            continue

        if overlaps(window.start, window.end, *occupied):
            return assignment
    return None


def find_conflict(provider: Provider, window: CandidateWindow, assignments: Iterable[Assignment]) -> bool:
    return find_conflicting_assignment(provider, window, assignments) is not None
