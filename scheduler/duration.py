"""
Duration Resolver.

Turns free-form service durations ("Approx 1.5 hours", "45 min") into minutes.
Unparseable text degrades to DEFAULT_DURATION_MINUTES instead of raising.
"""

import re
from typing import Optional

DEFAULT_DURATION_MINUTES = 60

_HOURS = re.compile(r"(\d+(?:\.\d+)?)\s*(?:hours?|hrs?)\b", re.IGNORECASE)
_MINUTES = re.compile(r"(\d+)\s*min", re.IGNORECASE)


def resolve_duration_minutes(description: Optional[str]) -> int:
    """Return the duration in whole minutes, or the 60 minute fallback."""
    if not description:
        return DEFAULT_DURATION_MINUTES

    minutes = 0
    hours_match = _HOURS.search(description)
    if hours_match:
        minutes = round(float(hours_match.group(1)) * 60)
    else:
        minutes_match = _MINUTES.search(description)
        if minutes_match:
            minutes = int(minutes_match.group(1))

    # "0 hours" and friends are as useless as no match at all
    return minutes if minutes > 0 else DEFAULT_DURATION_MINUTES
