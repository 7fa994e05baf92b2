"""
Derived identifiers for route sections and trips.

Identifiers are plain concatenations of TfL business keys, so two distinct
entities whose fields happen to contain " to " or " scheduled " could collide.
"""

from tflgtfs.data.network import Line, RouteSection, Schedule, KnownJourney
from tflgtfs.feed.time_format import format_time


def route_section_id(line: Line, section: RouteSection) -> str:
    return f"{line.id} {section.originator} to {section.destination}"


def trip_id(line: Line, section: RouteSection, schedule: Schedule, journey: KnownJourney) -> str:
    departs = format_time(journey, 0.0)
    return f"{route_section_id(line, section)} scheduled {schedule.name} departs {departs}"
