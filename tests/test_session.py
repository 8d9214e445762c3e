import pytest

from scheduler import (
    BookingEngine,
    BookingPhase,
    BookingSession,
    InMemoryAssignmentStore,
    InvalidTransitionError,
    StoreUnavailableError,
    UnavailableReason,
)

from conftest import MONDAY, booked, window


class FlakyStore(InMemoryAssignmentStore):
    down = False

    def snapshot(self, provider_id=None):
        if self.down:
            raise StoreUnavailableError("backend unreachable")
        return super().snapshot(provider_id)


@pytest.fixture
def session(engine, day_provider, split_provider):
    return BookingSession(engine, [day_provider, split_provider], window(MONDAY, "10:00", 60))


def test_happy_path(session, store):
    assert session.phase == BookingPhase.BROWSING
    session.browse()
    assert [p.id for p in session.available_providers] == ["p-day", "p-split"]

    session.select("p-split")
    assert session.phase == BookingPhase.CANDIDATE_SELECTED

    result = session.commit()
    assert result.confirmed
    assert session.phase == BookingPhase.CONFIRMED
    assert session.outcome is result
    assert store.list_assignments("p-split") == [result.assignment]


def test_rejected_commit_returns_to_browsing(session, store):
    session.browse()
    session.select("p-day")
    store.append_assignment(booked("p-day", MONDAY, "09:30", 60))

    result = session.commit()
    assert result.reason == UnavailableReason.BOOKING_CONFLICT
    assert session.phase == BookingPhase.BROWSING
    assert session.selected is None

    # Stale browse results are dropped; a fresh browse reflects the new booking
    with pytest.raises(InvalidTransitionError):
        session.select("p-day")
    session.browse()
    assert [p.id for p in session.available_providers] == ["p-split"]
    with pytest.raises(InvalidTransitionError):
        session.select("p-day")


def test_cannot_commit_without_selection(session):
    session.browse()
    with pytest.raises(InvalidTransitionError):
        session.commit()


def test_cannot_select_unknown_provider(session):
    session.browse()
    with pytest.raises(InvalidTransitionError):
        session.select("p-missing")


def test_confirmed_session_is_final(session):
    session.browse()
    session.select("p-day")
    session.commit()
    with pytest.raises(InvalidTransitionError):
        session.browse()
    with pytest.raises(InvalidTransitionError):
        session.select("p-split")
    with pytest.raises(InvalidTransitionError):
        session.commit()


def test_reselecting_before_commit_is_allowed(session):
    session.browse()
    session.select("p-day")
    assert session.select("p-split").id == "p-split"


def test_store_fault_during_commit_keeps_selection(day_provider, split_provider):
    store = FlakyStore()
    session = BookingSession(BookingEngine(store), [day_provider, split_provider], window(MONDAY, "10:00", 60))
    session.browse()
    session.select("p-day")

    store.down = True
    with pytest.raises(StoreUnavailableError):
        session.commit()
    assert session.phase == BookingPhase.CANDIDATE_SELECTED
    assert session.selected.id == "p-day"
    assert session.outcome is None

    # Once the store is back the same selection can be committed
    store.down = False
    assert session.commit().confirmed
    assert session.phase == BookingPhase.CONFIRMED
