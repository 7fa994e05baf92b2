"""
GTFS Table Generators

Each generator reads the network snapshot and writes rows for one table to a
sink exposing write_row(values). Generators keep their own duplicate tracking
so they can run in any order and never depend on each other's output.

Tables:
- agency, calendar: static reference data
- routes: one row per line
- stops: line stops plus one level of child stops
- trips: one row per unique journey departure
- stop_times: origin plus every downstream stop of each unique trip
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from tflgtfs.data.network import Line, RouteSection, Stop, TimeTable
from tflgtfs.feed.dedup import SeenSet
from tflgtfs.feed.errors import MissingStopsError
from tflgtfs.feed.identity import route_section_id, trip_id
from tflgtfs.feed.reference_data import AGENCY, ROUTE_TYPES, calendar_rows
from tflgtfs.feed.time_format import format_time

logger = logging.getLogger(__name__)


AGENCY_HEADER = ["agency_id", "agency_name", "agency_url", "agency_timezone"]
ROUTES_HEADER = ["route_id", "agency_id", "route_short_name", "route_long_name", "route_type"]
STOPS_HEADER = ["stop_id", "stop_name", "stop_lat", "stop_lon"]
CALENDAR_HEADER = [
    "service_id", "monday", "tuesday", "wednesday", "thursday", "friday",
    "saturday", "sunday", "start_date", "end_date",
]
TRIPS_HEADER = ["route_id", "service_id", "trip_id"]
STOP_TIMES_HEADER = ["trip_id", "stop_id", "stop_sequence", "arrival_time", "departure_time"]


# ============================================================================
# STATIC TABLES
# ============================================================================

def write_agency(sink) -> Dict:
    sink.write_row(list(AGENCY))
    return {'rows_written': 1}


def write_calendar(sink, start_date: str, end_date: str) -> Dict:
    rows = calendar_rows(start_date, end_date)
    for row in rows:
        sink.write_row(row)
    return {'rows_written': len(rows)}


# ============================================================================
# ROUTES
# ============================================================================

def route_type(line: Line) -> str:
    """GTFS route_type for a line's mode, or "" when the mode is unknown."""
    mapped = ROUTE_TYPES.get(line.mode_name)
    if mapped is None:
        logger.warning(f"No route_type mapping for mode '{line.mode_name}' (line {line.id})")
        return ""
    return mapped


def write_routes(sink, lines: List[Line]) -> Dict:
    stats = {'rows_written': 0, 'unmapped_modes': 0}

    for line in lines:
        rtype = route_type(line)
        if rtype == "":
            stats['unmapped_modes'] += 1
        sink.write_row([line.id, AGENCY[0], line.name, "", rtype])
        stats['rows_written'] += 1

    return stats


# ============================================================================
# STOPS
# ============================================================================

def flatten_stops(
    stops: List[Stop],
    seen: SeenSet,
    max_depth: int = 1,
    coords: Optional[Tuple[float, float]] = None,
    depth: int = 0
) -> Iterator[Tuple[Stop, float, float]]:
    """
    Walk a stop hierarchy down to max_depth, skipping stops already seen.

    Descendants carry the coordinates of the top-level stop they were reached
    from. Children of a stop that was already seen are not visited again.

    Args:
        stops: Stops at the current level
        seen: Stop ids emitted so far, updated as stops are yielded
        max_depth: Deepest child level to visit (0 = top-level stops only)
        coords: Inherited (lat, lon), None at the top level
        depth: Current level

    Yields:
        (stop, lat, lon) tuples in emission order
    """
    for stop in stops:
        if seen.seen(stop.id):
            continue
        lat, lon = coords if coords is not None else (stop.lat, stop.lon)
        seen.mark_seen(stop.id)
        yield stop, lat, lon

        if depth < max_depth:
            yield from flatten_stops(stop.children, seen, max_depth, (lat, lon), depth + 1)


def write_stops(sink, lines: List[Line], max_depth: int = 1) -> Dict:
    seen = SeenSet()
    stats = {'rows_written': 0}

    for line in lines:
        if line.stops is None:
            raise MissingStopsError(f"Stops for line {line.id} were never fetched")

        for stop, lat, lon in flatten_stops(line.stops, seen, max_depth=max_depth):
            sink.write_row([stop.id, stop.name, lat, lon])
            stats['rows_written'] += 1

    return stats


# ============================================================================
# TRIPS AND STOP TIMES
# ============================================================================

def unique_route_sections(line: Line, stats: Optional[Dict] = None) -> Iterator[Tuple[RouteSection, TimeTable]]:
    """
    Yield the first occurrence of each route section of a line that has a timetable.

    Duplicate tracking is scoped to this call, so every generator walking the
    same line sees the same sections.
    """
    seen = SeenSet()
    for section in line.route_sections:
        section_id = route_section_id(line, section)
        if seen.seen(section_id):
            if stats is not None:
                stats['duplicate_route_sections'] += 1
            continue
        seen.mark_seen(section_id)

        if section.timetable is None:
            if stats is not None:
                stats['sections_without_timetable'] += 1
            continue

        yield section, section.timetable


def write_trips(sink, lines: List[Line]) -> Dict:
    stats = {
        'rows_written': 0,
        'duplicate_trips': 0,
        'duplicate_route_sections': 0,
        'sections_without_timetable': 0,
    }

    for line in lines:
        for section, timetable in unique_route_sections(line, stats):
            written_trips = SeenSet()
            for schedule in timetable.schedules:
                for journey in schedule.known_journeys:
                    tid = trip_id(line, section, schedule, journey)
                    if written_trips.seen(tid):
                        stats['duplicate_trips'] += 1
                        continue
                    written_trips.mark_seen(tid)
                    sink.write_row([line.id, schedule.name, tid])
                    stats['rows_written'] += 1

    logger.info(
        f"Trips: {stats['rows_written']} written, {stats['duplicate_trips']} duplicate journeys, "
        f"{stats['duplicate_route_sections']} duplicate route sections, "
        f"{stats['sections_without_timetable']} sections without timetable"
    )
    return stats


def write_stop_times(sink, lines: List[Line]) -> Dict:
    stats = {'rows_written': 0, 'trips': 0, 'missing_intervals': 0}

    for line in lines:
        for section, timetable in unique_route_sections(line):
            intervals = timetable.interval_map()
            written_trips = SeenSet()

            for schedule in timetable.schedules:
                for journey in schedule.known_journeys:
                    station_interval = intervals.get(journey.interval_id)
                    if station_interval is None:
                        logger.warning(
                            f"Could not find station interval {journey.interval_id} for "
                            f"{route_section_id(line, section)} ({schedule.name} "
                            f"{journey.hour}:{journey.minute}), skipping journey"
                        )
                        stats['missing_intervals'] += 1
                        continue

                    tid = trip_id(line, section, schedule, journey)
                    if written_trips.seen(tid):
                        continue
                    written_trips.mark_seen(tid)

                    stop_seq = 1
                    dep_time = format_time(journey, 0.0)
                    sink.write_row([tid, section.originator, stop_seq, dep_time, dep_time])
                    for interval in station_interval.intervals:
                        stop_seq += 1
                        dep_time = format_time(journey, interval.time_to_arrival)
                        sink.write_row([tid, interval.stop_id, stop_seq, dep_time, dep_time])

                    stats['rows_written'] += stop_seq
                    stats['trips'] += 1

    logger.info(
        f"Stop times: {stats['rows_written']} rows for {stats['trips']} trips, "
        f"{stats['missing_intervals']} journeys without station interval"
    )
    return stats
