"""
Scheduling package for the Officiant Booking Engine.

Leaf-first: duration resolution, availability evaluation, conflict
detection, the assignment store and the booking commit protocol.
"""

from .duration import DEFAULT_DURATION_MINUTES, resolve_duration_minutes
from .timeslots import DEFAULT_SLOT_STEP_MINUTES, generate_time_slots, provider_time_slots
from .availability import (
    AvailabilityStatus,
    UnavailableReason,
    evaluate_working_window,
    is_date_available,
    is_within_working_window,
)
from .conflicts import assignment_window, find_conflict, find_conflicting_assignment
from .errors import (
    BookingError,
    CommitContentionError,
    CorruptStoreError,
    InvalidTransitionError,
    StaleStoreVersionError,
    StoreError,
    StoreUnavailableError,
)
from .store import AssignmentStore, InMemoryAssignmentStore, JsonFileAssignmentStore, StoreSnapshot
from .engine import (
    BookingEngine,
    BookingPhase,
    BookingResult,
    ProviderAvailability,
    ServiceQuery,
    check_availability,
    provider_assignment,
    service_assignment,
)
from .session import BookingSession

__all__ = [
    # --- Leaf Utilities ---
    "DEFAULT_DURATION_MINUTES",
    "resolve_duration_minutes",
    "DEFAULT_SLOT_STEP_MINUTES",
    "generate_time_slots",
    "provider_time_slots",

    # --- Evaluators ---
    "AvailabilityStatus",
    "UnavailableReason",
    "evaluate_working_window",
    "is_date_available",
    "is_within_working_window",
    "assignment_window",
    "find_conflict",
    "find_conflicting_assignment",

    # --- Faults ---
    "BookingError",
    "CommitContentionError",
    "CorruptStoreError",
    "InvalidTransitionError",
    "StaleStoreVersionError",
    "StoreError",
    "StoreUnavailableError",

    # --- Store ---
    "AssignmentStore",
    "InMemoryAssignmentStore",
    "JsonFileAssignmentStore",
    "StoreSnapshot",

    # --- Commit Protocol ---
    "BookingEngine",
    "BookingPhase",
    "BookingResult",
    "BookingSession",
    "ProviderAvailability",
    "ServiceQuery",
    "check_availability",
    "provider_assignment",
    "service_assignment",
]
