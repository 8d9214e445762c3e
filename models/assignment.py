"""
Assignment data models for the Officiant Booking Engine.

This module defines the 'Output' of the booking engine:
committed reservations of a provider, and the candidate windows
that are evaluated before a reservation exists.
"""

import re
import uuid
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict, field_validator
from datetime import date as date_type, time as time_type, datetime, timedelta

_SLOT_START = re.compile(r"^\s*(\d{1,2}):(\d{2})")


class AssignmentKind(str, Enum):
    """What was booked."""
    PROVIDER = "Provider"   # The provider itself; item_id is the provider id
    SERVICE = "Service"     # A service booking that names a provider


class CandidateWindow(BaseModel):
    """
    A not-yet-committed interval being evaluated for booking.
    """
    start: datetime = Field(description="Naive local start timestamp")
    duration_minutes: int = Field(gt=0, description="Length of the requested service")

    model_config = ConfigDict(frozen=True)

    @field_validator('start')
    @classmethod
    def validate_naive(cls, v):
        if v.tzinfo is not None:
            raise ValueError("Candidate windows use naive local timestamps")
        # Stored time slots have minute resolution
        if v.second or v.microsecond:
            raise ValueError("Candidate windows must start on a whole minute")
        return v

    @property
    def end(self) -> datetime:
        return self.start + timedelta(minutes=self.duration_minutes)

    @property
    def slot_label(self) -> str:
        """Start label in the 'HH:MM' form stored on assignments."""
        return self.start.strftime("%H:%M")

    @classmethod
    def from_slot(cls, day: date_type, time_slot: str, duration_minutes: int) -> "CandidateWindow":
        """
        Build a window from a slot label such as '09:00' or '09:00 - 10:00'.
        Raises ValueError on unparseable labels.
        """
        match = _SLOT_START.match(time_slot or "")
        if not match:
            raise ValueError(f"Unparseable time slot: {time_slot!r}")
        start = time_type(int(match.group(1)), int(match.group(2)))
        return cls(start=datetime.combine(day, start), duration_minutes=duration_minutes)


class Assignment(BaseModel):
    """
    A committed reservation of a provider.
    Records are immutable; rescheduling means cancel + recreate.
    """

    # --- Identity ---
    id: str = Field(default_factory=lambda: uuid.uuid4().hex, description="Unique identifier")
    kind: AssignmentKind = Field(default=AssignmentKind.PROVIDER, description="What was booked")
    item_id: str = Field(description="Provider id (PROVIDER) or service id (SERVICE)")
    item_name: str = Field(default="", description="Human-readable label of the booked item")
    provider_id: Optional[str] = Field(default=None, description="Provider named by a SERVICE booking")

    # --- Timing ---
    # Legacy records may lack any of these; conflict checks treat them leniently
    date: Optional[date_type] = Field(default=None, description="Calendar date of the window start")
    time_slot: Optional[str] = Field(default=None, description="'HH:MM' or 'HH:MM - HH:MM'")
    duration_minutes: Optional[int] = Field(default=None, ge=1, description="Reserved length")

    booked_at: datetime = Field(default_factory=lambda: datetime.now(), description="Commit timestamp")

    model_config = ConfigDict(frozen=True, json_schema_extra={
        "example": {
            "id": "4f1c0c7e2f6b4d0a9a3e5b6c7d8e9f00",
            "kind": "Service",
            "item_id": "svc_satyanarayan",
            "item_name": "Satyanarayan Pooja",
            "provider_id": "prov_vedic_01",
            "date": "2025-01-15",
            "time_slot": "09:00 - 10:30",
            "duration_minutes": 90
        }
    })

    @property
    def reserved_provider_id(self) -> Optional[str]:
        """The provider this record occupies, whichever way it was booked."""
        if self.kind == AssignmentKind.PROVIDER:
            return self.item_id
        return self.provider_id

    @property
    def slot_start(self) -> Optional[time_type]:
        """Parsed start of the time slot, or None when missing/unparseable."""
        match = _SLOT_START.match(self.time_slot or "")
        if not match:
            return None
        hour, minute = int(match.group(1)), int(match.group(2))
        if hour > 23 or minute > 59:
            return None
        return time_type(hour, minute)
