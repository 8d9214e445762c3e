"""
Booking Session.

One booking attempt as an explicit state machine:

    BROWSING -> CANDIDATE_SELECTED -> VALIDATING -> CONFIRMED
                                                 -> REJECTED (back to BROWSING)

The engine holds no state between calls; a session is the caller's handle
on where a single attempt currently stands.
"""

import logging
from typing import Dict, List, Optional, Sequence

from models import CandidateWindow, Provider
from .engine import (
    AssignmentFactory,
    BookingEngine,
    BookingPhase,
    BookingResult,
    ProviderAvailability,
    ServiceQuery,
)
from .errors import InvalidTransitionError

logger = logging.getLogger(__name__)


class BookingSession:

    def __init__(
        self,
        engine: BookingEngine,
        providers: Sequence[Provider],
        window: CandidateWindow,
        query: Optional[ServiceQuery] = None
    ):
        self.engine = engine
        self.providers = list(providers)
        self.window = window
        self.query = query

        self.phase = BookingPhase.BROWSING
        self.results: List[ProviderAvailability] = []
        self.selected: Optional[Provider] = None
        self.outcome: Optional[BookingResult] = None

    def browse(self) -> List[ProviderAvailability]:
        """(Re)load provider availability. Allowed any time before confirmation."""
        if self.phase == BookingPhase.CONFIRMED:
            raise InvalidTransitionError("Session already confirmed")
        self.results = self.engine.browse(self.providers, self.window, self.query)
        self.selected = None
        self.phase = BookingPhase.BROWSING
        return self.results

    @property
    def available_providers(self) -> List[Provider]:
        return [r.provider for r in self.results if r.status.available]

    def select(self, provider_id: str) -> Provider:
        if self.phase not in (BookingPhase.BROWSING, BookingPhase.CANDIDATE_SELECTED):
            raise InvalidTransitionError(f"Cannot select a provider while {self.phase.value}")

        by_id: Dict[str, ProviderAvailability] = {r.provider.id: r for r in self.results}
        entry = by_id.get(provider_id)
        if entry is None:
            raise InvalidTransitionError(f"Provider {provider_id!r} was not offered in this session")
        if not entry.status.available:
            raise InvalidTransitionError(
                f"Provider {provider_id!r} is unavailable ({entry.status.reason.value})"
            )

        self.selected = entry.provider
        self.phase = BookingPhase.CANDIDATE_SELECTED
        return self.selected

    def commit(self, assignment_factory: Optional[AssignmentFactory] = None) -> BookingResult:
        if self.phase != BookingPhase.CANDIDATE_SELECTED or self.selected is None:
            raise InvalidTransitionError(f"Cannot commit while {self.phase.value}")

        self.phase = BookingPhase.VALIDATING
        try:
            result = self.engine.attempt_booking(self.selected, self.window, assignment_factory)
        except Exception:
            # Faults leave the selection intact so the caller can retry the commit
            self.phase = BookingPhase.CANDIDATE_SELECTED
            raise

        self.outcome = result
        if result.confirmed:
            self.phase = BookingPhase.CONFIRMED
        else:
            logger.info(f"{self.selected.id} is no longer available ({result.reason.value}); back to browsing")
            # Browse results are stale now; selecting again requires a fresh browse()
            self.selected = None
            self.results = []
            self.phase = BookingPhase.BROWSING
        return result
