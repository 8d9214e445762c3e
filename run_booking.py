"""
Main Execution Script for the Officiant Booking Engine.
Browses providers for one service window, books the first available one
and shows that a second attempt on the same window is rejected.
"""

import os
import sys
import json
import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from pydantic import ValidationError

from models import Provider, WorkShift, ServiceMode, CandidateWindow
from scheduler import (
    BookingEngine,
    BookingSession,
    JsonFileAssignmentStore,
    ServiceQuery,
    StoreError,
    provider_time_slots,
    resolve_duration_minutes,
    service_assignment,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger("Main")

# --- CONFIGURATION ---
PROVIDERS_FILENAME = os.environ.get("BOOKING_DATA_FILE", "providers.json")
STORE_FILENAME = os.environ.get("BOOKING_STORE_FILE", "assignments.json")
SERVICE_NAME = "Satyanarayan Pooja"
SERVICE_DURATION = "Approx 1.5 hours"
# ---------------------


def sample_providers() -> List[Provider]:
    """Built-in roster used when no provider file is present."""
    return [
        Provider(
            id="prov_01",
            name="Acharya Raghavan",
            working_days={1, 2, 3, 4, 5},
            work_shifts=[WorkShift(start=time(6, 0), end=time(11, 0)),
                         WorkShift(start=time(16, 0), end=time(20, 0))],
            location="Chennai",
            specialties=[SERVICE_NAME, "Griha Pravesh"],
            service_modes=[ServiceMode.OFFLINE, ServiceMode.ONLINE],
        ),
        Provider(
            id="prov_02",
            name="Pandit Mishra",
            working_days={0, 1, 2, 3, 4, 5, 6},
            work_shifts=[WorkShift(start=time(22, 0), end=time(4, 0))],
            location="Varanasi",
            specialties=[SERVICE_NAME],
            service_modes=[ServiceMode.ONLINE],
        ),
        Provider(
            id="prov_03",
            name="Shastri Iyer",
            working_days={6, 0},
            work_shifts=[WorkShift(start=time(8, 0), end=time(18, 0))],
            location="Chennai",
            specialties=[SERVICE_NAME],
            service_modes=[ServiceMode.OFFLINE],
        ),
    ]


def load_providers(filename: str) -> Optional[List[Provider]]:
    """
    Helper to load JSON data and reconstruct Pydantic objects.
    """
    try:
        with open(filename, 'r') as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.warning(f"Provider file {filename} not found. Falling back to the sample roster.")
        return None

    try:
        providers = [Provider(**item) for item in data.get('providers', [])]
    except ValidationError as e:
        logger.error(f"Provider file {filename} is invalid: {e}")
        raise

    logger.info(f"Loaded {len(providers)} providers from {filename}")
    return providers


def next_weekday(start: date, weekday: int) -> date:
    """Next date on or after `start` with Python weekday `weekday` (0=Monday)."""
    return start + timedelta(days=(weekday - start.weekday()) % 7)


def main() -> int:
    providers = load_providers(PROVIDERS_FILENAME) or sample_providers()

    duration = resolve_duration_minutes(SERVICE_DURATION)
    day = next_weekday(date.today(), 2)  # Wednesday
    window = CandidateWindow(start=datetime.combine(day, time(9, 0)), duration_minutes=duration)

    logger.info(f"Requesting '{SERVICE_NAME}' on {day} at 09:00 for {duration} minutes")

    engine = BookingEngine(JsonFileAssignmentStore(STORE_FILENAME))
    query = ServiceQuery(specialty=SERVICE_NAME, mode=ServiceMode.OFFLINE, city="chennai")
    factory = service_assignment("svc_satyanarayan", SERVICE_NAME)

    try:
        session = BookingSession(engine, providers, window, query)
        print("\n" + "=" * 50)
        print("PROVIDER AVAILABILITY")
        print("=" * 50)
        for entry in session.browse():
            status = "available" if entry.status.available else entry.status.reason.value
            slots = ", ".join(provider_time_slots(entry.provider)[:4])
            print(f"  {entry.provider.name:<20} {status:<18} slots: {slots}")

        if not session.available_providers:
            print("\nNo provider can take this window.")
            return 1

        chosen = session.available_providers[0]
        session.select(chosen.id)
        result = session.commit(factory)
        if result.confirmed:
            print(f"\nBooked {chosen.name}: assignment {result.assignment.id}")
        else:
            print(f"\nBooking rejected: {result.reason.value}")

        # Same window again: the commit-time re-validation must catch it
        retry = engine.attempt_booking(chosen, window, factory)
        reason = retry.reason.value if retry.reason else None
        print(f"Second attempt on the same window -> confirmed={retry.confirmed}, reason={reason}")

    except StoreError as e:
        logger.error(f"Assignment store failure: {e}")
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
