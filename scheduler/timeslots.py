"""
Time-slot label helpers.

Slot labels are the 'HH:MM - HH:MM' strings shown in the booking calendar
and stored on assignments.
"""

from datetime import datetime, date, timedelta
from typing import List

from models import Provider, WorkShift

DEFAULT_SLOT_STEP_MINUTES = 60

# Any fixed date works; only the time of day ends up in the label
_ANCHOR = date(2000, 1, 1)


def format_slot(start: datetime, end: datetime) -> str:
    return f"{start:%H:%M} - {end:%H:%M}"


def generate_time_slots(shift: WorkShift, step_minutes: int = DEFAULT_SLOT_STEP_MINUTES) -> List[str]:
    """
    Step through a shift and return every whole slot that fits inside it.
    Overnight shifts keep stepping past midnight.
    """
    if step_minutes <= 0:
        raise ValueError("step_minutes must be positive")

    cursor = datetime.combine(_ANCHOR, shift.start)
    shift_end = datetime.combine(_ANCHOR, shift.end)
    if shift.is_overnight:
        shift_end += timedelta(days=1)

    step = timedelta(minutes=step_minutes)
    slots = []
    while cursor + step <= shift_end:
        slots.append(format_slot(cursor, cursor + step))
        cursor += step
    return slots


def provider_time_slots(provider: Provider, step_minutes: int = DEFAULT_SLOT_STEP_MINUTES) -> List[str]:
    """Slot labels across all of a provider's shifts, in shift order, without repeats."""
    labels: List[str] = []
    for shift in sorted(provider.work_shifts, key=lambda s: s.start):
        for label in generate_time_slots(shift, step_minutes):
            if label not in labels:
                labels.append(label)
    return labels
