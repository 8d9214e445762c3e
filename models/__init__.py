"""
Data models package for the Officiant Booking Engine.

This package exports the two core pillars of the data architecture:
1. Supply (Provider, WorkShift, ServiceMode)
2. Demand & Output (CandidateWindow, Assignment, AssignmentKind)
"""

from .provider import (
    Provider,
    ServiceMode,
    WorkShift,
    sunday_weekday
)

from .assignment import (
    Assignment,
    AssignmentKind,
    CandidateWindow
)

__all__ = [
    # --- Supply Models ---
    "Provider",
    "ServiceMode",
    "WorkShift",
    "sunday_weekday",

    # --- Demand & Output Models ---
    "Assignment",
    "AssignmentKind",
    "CandidateWindow",
]
