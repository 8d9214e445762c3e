"""
The Booking Scheduling Engine.

This module implements the Booking Commit Protocol:
1. Browse - evaluate every matching provider against one store snapshot.
2. Validate - at commit time, re-read the store and re-run every check.
3. Commit - append the assignment with a version check, so a writer that
   slipped in between the re-read and the write forces another validation.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional

from pydantic import BaseModel, Field

from models import Assignment, AssignmentKind, CandidateWindow, Provider, ServiceMode
from .availability import AvailabilityStatus, UnavailableReason, evaluate_working_window
from .conflicts import find_conflicting_assignment
from .errors import CommitContentionError, StaleStoreVersionError
from .store import AssignmentStore

logger = logging.getLogger(__name__)

AssignmentFactory = Callable[[Provider, CandidateWindow], Assignment]


class BookingPhase(str, Enum):
    """Lifecycle of a single booking attempt."""
    BROWSING = "BROWSING"
    CANDIDATE_SELECTED = "CANDIDATE_SELECTED"
    VALIDATING = "VALIDATING"
    CONFIRMED = "CONFIRMED"
    REJECTED = "REJECTED"


def check_availability(
    provider: Provider,
    window: CandidateWindow,
    assignments: Iterable[Assignment]
) -> AvailabilityStatus:
    """
    Combined schedule + conflict check. Read-only, no hidden state.
    Schedule reasons take precedence over booking conflicts.
    """
    status = evaluate_working_window(provider, window)
    if not status.available:
        return status

    clash = find_conflicting_assignment(provider, window, assignments)
    if clash is not None:
        logger.debug(f"{provider.id}: window clashes with assignment {clash.id}")
        return AvailabilityStatus.rejected(UnavailableReason.BOOKING_CONFLICT)
    return AvailabilityStatus.ok()


class ServiceQuery(BaseModel):
    """What the caller is looking for while browsing providers."""
    specialty: Optional[str] = Field(default=None, description="Service the provider must perform")
    mode: Optional[ServiceMode] = Field(default=None, description="Online or in-person delivery")
    city: Optional[str] = Field(default=None, description="Required for in-person matching")

    def matches(self, provider: Provider) -> bool:
        if self.mode is not None and self.mode not in provider.service_modes:
            return False
        if self.specialty and self.specialty not in provider.specialties:
            return False
        # Online services are location independent
        if self.mode != ServiceMode.ONLINE and self.city:
            if self.city.strip().lower() not in provider.location.lower():
                return False
        return True


@dataclass(frozen=True)
class ProviderAvailability:
    provider: Provider
    status: AvailabilityStatus


@dataclass(frozen=True)
class BookingResult:
    """Outcome of a commit attempt."""
    confirmed: bool
    phase: BookingPhase
    assignment: Optional[Assignment] = None
    reason: Optional[UnavailableReason] = None

    @classmethod
    def confirmed_with(cls, assignment: Assignment) -> "BookingResult":
        return cls(confirmed=True, phase=BookingPhase.CONFIRMED, assignment=assignment)

    @classmethod
    def rejected(cls, reason: UnavailableReason) -> "BookingResult":
        return cls(confirmed=False, phase=BookingPhase.REJECTED, reason=reason)


def provider_assignment(provider: Provider, window: CandidateWindow) -> Assignment:
    """Default factory: the provider itself is the booked item."""
    return Assignment(
        kind=AssignmentKind.PROVIDER,
        item_id=provider.id,
        item_name=provider.name,
        date=window.start.date(),
        time_slot=window.slot_label,
        duration_minutes=window.duration_minutes
    )


def service_assignment(item_id: str, item_name: str = "") -> AssignmentFactory:
    """Factory for a service booking (e.g. a pooja) performed by the chosen provider."""
    def factory(provider: Provider, window: CandidateWindow) -> Assignment:
        return Assignment(
            kind=AssignmentKind.SERVICE,
            item_id=item_id,
            item_name=item_name,
            provider_id=provider.id,
            date=window.start.date(),
            time_slot=window.slot_label,
            duration_minutes=window.duration_minutes
        )
    return factory


class BookingEngine:
    """
    Stateless orchestrator over an injected assignment store.
    """

    MAX_COMMIT_ATTEMPTS = 3

    def __init__(self, store: AssignmentStore, max_commit_attempts: Optional[int] = None):
        if max_commit_attempts is None:
            max_commit_attempts = self.MAX_COMMIT_ATTEMPTS
        if max_commit_attempts < 1:
            raise ValueError(f"max_commit_attempts must be at least 1, got {max_commit_attempts}")
        self.store = store
        self.max_commit_attempts = max_commit_attempts

    def browse(
        self,
        providers: Iterable[Provider],
        window: CandidateWindow,
        query: Optional[ServiceQuery] = None
    ) -> List[ProviderAvailability]:
        """
        Evaluate every matching provider for the window.
        Available providers come first, then alphabetical by name.
        """
        candidates = [p for p in providers if query is None or query.matches(p)]
        snapshot = self.store.snapshot()

        results = [
            ProviderAvailability(p, check_availability(p, window, snapshot.assignments))
            for p in candidates
        ]
        results.sort(key=lambda r: (not r.status.available, r.provider.name))

        available = sum(1 for r in results if r.status.available)
        logger.info(f"Browse {window.start:%Y-%m-%d %H:%M}: {available}/{len(results)} providers available")
        return results

    def attempt_booking(
        self,
        provider: Provider,
        window: CandidateWindow,
        assignment_factory: Optional[AssignmentFactory] = None
    ) -> BookingResult:
        """
        Re-validate against the current store state and commit.

        Rejections come back as a REJECTED result. Store faults propagate.
        """
        factory = assignment_factory or provider_assignment
        assignment = factory(provider, window)
        self._validate_factory_output(assignment, provider, window)

        for attempt in range(1, self.max_commit_attempts + 1):
            snapshot = self.store.snapshot(provider.id)
            status = check_availability(provider, window, snapshot.assignments)
            if not status.available:
                logger.warning(f"Booking of {provider.id} at {window.start:%Y-%m-%d %H:%M} rejected at commit: {status.reason.value}")
                return BookingResult.rejected(status.reason)

            try:
                self.store.append_assignment(assignment, expected_version=snapshot.version)
            except StaleStoreVersionError as e:
                logger.warning(f"Commit attempt {attempt} for {provider.id} lost a race ({e}), re-validating")
                continue

            logger.info(f"Confirmed assignment {assignment.id}: {provider.id} at {window.start:%Y-%m-%d %H:%M} for {window.duration_minutes}m")
            return BookingResult.confirmed_with(assignment)

        raise CommitContentionError(
            f"Could not commit {provider.id} at {window.start.isoformat()} after {self.max_commit_attempts} attempts"
        )

    @staticmethod
    def _validate_factory_output(assignment: Assignment, provider: Provider, window: CandidateWindow) -> None:
        """New records must describe exactly the window that was validated."""
        if assignment.reserved_provider_id != provider.id:
            raise ValueError(f"Assignment reserves {assignment.reserved_provider_id!r}, expected {provider.id!r}")
        if assignment.date != window.start.date() or assignment.slot_start != window.start.time():
            raise ValueError("Assignment date/time slot does not match the candidate window")
        if assignment.duration_minutes != window.duration_minutes:
            raise ValueError("Assignment duration does not match the candidate window")
