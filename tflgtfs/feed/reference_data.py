"""
Static reference data for the feed.

TfL timetables name their service patterns in free text ("Monday to Friday",
"Saturday Night/Sunday Morning"). The calendar below is a hand-curated map
from those names to GTFS day flags; schedule names missing from it produce
trips whose service_id has no calendar entry. Run the export without
--skip-report to list the schedule names present in a snapshot.
"""

from typing import List, Tuple

from tflgtfs.config.config_main import feed_config


AGENCY = (
    feed_config.agency_id,
    feed_config.agency_name,
    feed_config.agency_url,
    feed_config.agency_timezone,
)

# Maps TfL line modeName to GTFS route_type
ROUTE_TYPES = {
    "dlr": "0",
    "tram": "0",
    "tube": "1",
    "overground": "1",
    "national-rail": "2",
    "tflrail": "2",
    "elizabeth-line": "2",
    "bus": "3",
    "river-tour": "4",
    "river-bus": "4",
    "cable-car": "5",
}

# (service_id, monday..sunday flags)
SERVICE_PATTERNS: List[Tuple[str, str]] = [
    ("School Monday", "1000000"),
    ("Sunday Night/Monday Morning", "1000001"),
    ("School Monday, Tuesday, Thursday & Friday", "1101100"),
    ("Tuesday", "0100000"),
    ("Monday - Thursday", "1111000"),
    ("Saturday", "0000010"),
    ("Saturday and Sunday", "0000011"),
    ("Sunday", "0000001"),
    ("School Tuesday", "0100000"),
    ("Saturday Night/Sunday Morning", "0000011"),
    ("Mo-Fr Night/Tu-Sat Morning", "1111110"),
    ("Monday to Thursday", "1111000"),
    ("Mo-Th Nights/Tu-Fr Morning", "1111100"),
    ("Saturday (also Good Friday)", "0000010"),
    ("Mon-Th Schooldays", "1111000"),
    ("Saturdays and Public Holidays", "0000010"),
    ("Friday Night/Saturday Morning", "0000110"),
    ("Friday", "0000100"),
    ("Thursdays", "0001000"),
    ("Sunday night/Monday morning - Thursday night/Friday morning", "1111101"),
    ("School Thursday", "0001000"),
    ("School Friday", "0000100"),
    ("Daily", "1111111"),
    ("Tuesday, Wednesday & Thursday", "0111000"),
    ("Mon-Fri Schooldays", "1111100"),
    ("Wednesday", "0010000"),
    ("Monday, Tuesday and Thursday", "1101000"),
    ("Wednesdays", "0010000"),
    ("Monday to Friday", "1111100"),
    ("Monday", "1000000"),
    ("Sunday and other Public Holidays", "0000001"),
    ("School Wednesday", "0010000"),
    ("Monday - Friday", "1111100"),
]


def calendar_rows(start_date: str, end_date: str) -> List[list]:
    """Expand SERVICE_PATTERNS into calendar.txt rows for the given validity window."""
    return [
        [service_id, *flags, start_date, end_date]
        for service_id, flags in SERVICE_PATTERNS
    ]
