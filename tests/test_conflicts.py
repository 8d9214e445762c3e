from datetime import timedelta

from models import Assignment, AssignmentKind
from scheduler import assignment_window, find_conflict, find_conflicting_assignment

from conftest import MONDAY, TUESDAY, at, booked, window


def test_touching_windows_do_not_conflict(day_provider):
    existing = [
        booked("p-day", MONDAY, "10:00 - 11:00", 60),
        booked("p-day", MONDAY, "11:00", 60),
    ]
    assert not find_conflict(day_provider, window(MONDAY, "12:00", 30), existing)
    assert not find_conflict(day_provider, window(MONDAY, "09:00", 60), existing)


def test_candidate_starting_when_booking_starts_conflicts(day_provider):
    existing = [
        booked("p-day", MONDAY, "10:00 - 11:00", 60),
        booked("p-day", MONDAY, "11:00 - 12:00", 60),
    ]
    assert find_conflict(day_provider, window(MONDAY, "11:00", 30), existing)


def test_back_to_back_after_existing_booking(day_provider):
    existing = [booked("p-day", MONDAY, "10:00 - 11:00", 60)]
    assert not find_conflict(day_provider, window(MONDAY, "11:00", 30), existing)


def test_contained_window_conflicts(day_provider):
    existing = [booked("p-day", MONDAY, "10:00", 120)]
    assert find_conflict(day_provider, window(MONDAY, "10:30", 30), existing)


def test_partial_overlap_either_side_conflicts(day_provider):
    existing = [booked("p-day", MONDAY, "10:00", 60)]
    assert find_conflict(day_provider, window(MONDAY, "09:30", 60), existing)
    assert find_conflict(day_provider, window(MONDAY, "10:59", 60), existing)


def test_other_providers_never_interfere(day_provider):
    existing = [booked("someone-else", MONDAY, "10:00", 120)]
    assert not find_conflict(day_provider, window(MONDAY, "10:30", 30), existing)


def test_service_bookings_reference_provider_id(day_provider):
    service = Assignment(
        kind=AssignmentKind.SERVICE,
        item_id="svc-griha-pravesh",
        provider_id="p-day",
        date=MONDAY,
        time_slot="14:00 - 15:30",
        duration_minutes=90,
    )
    assert find_conflicting_assignment(day_provider, window(MONDAY, "15:00", 30), [service]) is service
    assert not find_conflict(day_provider, window(MONDAY, "15:30", 30), [service])


def test_missing_duration_falls_back_to_an_hour(day_provider):
    legacy = booked("p-day", MONDAY, "10:00")
    assert assignment_window(legacy) == (at(MONDAY, "10:00"), at(MONDAY, "11:00"))
    assert find_conflict(day_provider, window(MONDAY, "10:45", 30), [legacy])
    assert not find_conflict(day_provider, window(MONDAY, "11:00", 30), [legacy])


def test_records_without_usable_time_are_skipped(day_provider):
    existing = [
        booked("p-day", None, "10:00", 60),
        booked("p-day", MONDAY, None, 60),
        booked("p-day", MONDAY, "after lunch", 60),
        booked("p-day", MONDAY, "25:00", 60),
    ]
    for record in existing:
        assert assignment_window(record) is None
    assert not find_conflict(day_provider, window(MONDAY, "10:00", 60), existing)


def test_booking_running_past_midnight(night_provider):
    existing = [booked("p-night", MONDAY, "23:30", 120)]
    assert find_conflict(night_provider, window(TUESDAY, "01:00", 30), existing)
    assert not find_conflict(night_provider, window(TUESDAY, "01:30", 30), existing)


def test_first_overlap_is_returned(day_provider):
    first = booked("p-day", MONDAY, "10:00", 60)
    second = booked("p-day", MONDAY, "10:30", 60)
    assert find_conflicting_assignment(day_provider, window(MONDAY, "10:15", 60), [first, second]) is first


def test_candidate_far_from_bookings(day_provider):
    existing = [booked("p-day", MONDAY - timedelta(days=7), "10:00", 60)]
    assert not find_conflict(day_provider, window(MONDAY, "10:00", 60), existing)
