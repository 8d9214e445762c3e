from datetime import date, datetime, time

import pytest

from models import Assignment, AssignmentKind, CandidateWindow, Provider, WorkShift
from scheduler import BookingEngine, InMemoryAssignmentStore

# 2025-01-13 is a Monday (Sunday-based weekday 1)
MONDAY = date(2025, 1, 13)
TUESDAY = date(2025, 1, 14)
SUNDAY = date(2025, 1, 12)


def at(day: date, hh_mm: str) -> datetime:
    hour, minute = map(int, hh_mm.split(":"))
    return datetime.combine(day, time(hour, minute))


def window(day: date, hh_mm: str, minutes: int = 60) -> CandidateWindow:
    return CandidateWindow(start=at(day, hh_mm), duration_minutes=minutes)


def shift(start: str, end: str) -> WorkShift:
    return WorkShift(start=time.fromisoformat(start), end=time.fromisoformat(end))


def booked(provider_id: str, day, slot, minutes=None, **kwargs) -> Assignment:
    return Assignment(
        kind=AssignmentKind.PROVIDER,
        item_id=provider_id,
        date=day,
        time_slot=slot,
        duration_minutes=minutes,
        **kwargs
    )


@pytest.fixture
def day_provider() -> Provider:
    """Mondays only, 09:00-17:00."""
    return Provider(
        id="p-day",
        name="Acharya Day",
        working_days={1},
        work_shifts=[shift("09:00", "17:00")],
    )


@pytest.fixture
def split_provider() -> Provider:
    """Weekdays, split shift given out of order."""
    return Provider(
        id="p-split",
        name="Pandit Split",
        working_days={1, 2, 3, 4, 5},
        work_shifts=[shift("16:00", "20:00"), shift("06:00", "11:00")],
    )


@pytest.fixture
def night_provider() -> Provider:
    """Every day, 22:00-04:00 overnight."""
    return Provider(
        id="p-night",
        name="Shastri Night",
        working_days={0, 1, 2, 3, 4, 5, 6},
        work_shifts=[shift("22:00", "04:00")],
    )


@pytest.fixture
def store() -> InMemoryAssignmentStore:
    return InMemoryAssignmentStore()


@pytest.fixture
def engine(store) -> BookingEngine:
    return BookingEngine(store)
