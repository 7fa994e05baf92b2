"""
Departure time arithmetic for stop_times.

GTFS allows hours of 24 and above for trips that run past midnight on the
same service day, so the hour is never wrapped.
"""

import math

from tflgtfs.data.network import KnownJourney
from tflgtfs.feed.errors import MalformedTimeError


def _parse_component(value: str, label: str, journey: KnownJourney) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise MalformedTimeError(
            f"Journey {label} '{value}' is not an integer (hour={journey.hour!r}, minute={journey.minute!r})"
        ) from None
    if parsed < 0:
        raise MalformedTimeError(f"Journey {label} '{value}' is negative")
    return parsed


def format_time(journey: KnownJourney, offset_minutes: float = 0.0) -> str:
    """
    Format a journey's departure plus a travel offset as HH:MM.

    Args:
        journey: Journey whose hour/minute give the origin departure
        offset_minutes: Minutes after departure, fractions are truncated

    Returns:
        Zero-padded "HH:MM" string, hour may be 24 or more

    Raises:
        MalformedTimeError: hour, minute or offset is not usable
    """
    dep_hour = _parse_component(journey.hour, "hour", journey)
    dep_minute = _parse_component(journey.minute, "minute", journey)

    if offset_minutes < 0 or math.isnan(offset_minutes) or math.isinf(offset_minutes):
        raise MalformedTimeError(f"Invalid time offset {offset_minutes}")

    total_minutes = dep_minute + math.floor(offset_minutes)
    hour = dep_hour + total_minutes // 60
    minute = total_minutes % 60

    return f"{hour:02d}:{minute:02d}"
