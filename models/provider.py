"""
Provider data models for the Officiant Booking Engine.

This module defines the 'Supply' side of the booking engine:
1. Providers (Human resources with a weekly schedule)
2. Work Shifts (Recurring working-hour windows, possibly overnight)
3. Off Dates (Calendar exceptions that remove a whole day)
"""

from enum import Enum
from typing import List, Set
from pydantic import BaseModel, Field, field_validator, ConfigDict
from datetime import date, time


class ServiceMode(str, Enum):
    """How a provider can deliver a service."""
    ONLINE = "Online"
    OFFLINE = "Offline"


def sunday_weekday(day: date) -> int:
    """Weekday index with 0=Sunday, 6=Saturday."""
    return (day.weekday() + 1) % 7


class WorkShift(BaseModel):
    """
    A recurring working-hours interval.
    An end at or before the start means the shift runs past midnight.
    """
    start: time = Field(description="Shift start (local time of day)")
    end: time = Field(description="Shift end; <= start for overnight shifts")

    model_config = ConfigDict(frozen=True)

    @property
    def is_overnight(self) -> bool:
        return self.end <= self.start


class Provider(BaseModel):
    """
    Schedulable human resource (e.g. a ritual officiant).
    """
    id: str = Field(description="Opaque unique identifier")
    name: str = Field(min_length=1, description="Display name")

    # --- Scheduling Constraints ---
    working_days: Set[int] = Field(
        default_factory=set,
        description="Weekdays the provider works (0=Sunday, 6=Saturday)"
    )
    work_shifts: List[WorkShift] = Field(
        default_factory=list,
        description="Working hours; several entries model split shifts"
    )
    off_dates: Set[date] = Field(
        default_factory=set,
        description="Specific dates of unavailability (Festivals, Leave)"
    )

    # --- Matching Attributes ---
    location: str = Field(default="", description="City or area served in person")
    specialties: List[str] = Field(default_factory=list, description="Services the provider performs")
    service_modes: List[ServiceMode] = Field(
        default_factory=lambda: [ServiceMode.ONLINE, ServiceMode.OFFLINE],
        description="Delivery modes offered"
    )

    @field_validator('working_days')
    @classmethod
    def validate_working_days(cls, v):
        bad = sorted(d for d in v if not 0 <= d <= 6)
        if bad:
            raise ValueError(f"Weekday indices must be within 0..6, got {bad}")
        return v

    def works_on(self, day: date) -> bool:
        return sunday_weekday(day) in self.working_days

    def is_off_on(self, day: date) -> bool:
        return day in self.off_dates

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "id": "prov_vedic_01",
            "name": "Acharya Raghavan",
            "working_days": [1, 2, 3, 4, 5],
            "work_shifts": [
                {"start": "06:00:00", "end": "11:00:00"},
                {"start": "16:00:00", "end": "20:00:00"}
            ],
            "off_dates": ["2025-01-14"],
            "location": "Chennai",
            "specialties": ["Griha Pravesh"],
            "service_modes": ["Offline"]
        }
    })
