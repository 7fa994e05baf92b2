"""
Writes the complete GTFS feed for a network snapshot.
"""

import logging
import os
from typing import Dict, List, Optional

from tflgtfs.config.config_main import feed_config
from tflgtfs.data.network import Line
from tflgtfs.feed.errors import FeedWriteError
from tflgtfs.feed.writer import CsvTableWriter
from tflgtfs.feed import tables

logger = logging.getLogger(__name__)


def write_feed(
    lines: List[Line],
    output_dir: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None
) -> Dict[str, Dict]:
    """
    Write every GTFS table for the given lines.

    Tables are written in a fixed order: agency, routes, stops, calendar,
    trips, stop_times. A failure part way through leaves the tables already
    written in place.

    Args:
        lines: Fully ingested network snapshot
        output_dir: Directory to write the .txt tables into (created if missing)
        start_date: Calendar validity start, YYYYMMDD (default from config)
        end_date: Calendar validity end, YYYYMMDD (default from config)

    Returns:
        Per-table statistics keyed by table name
    """
    start_date = start_date or feed_config.calendar_start_date
    end_date = end_date or feed_config.calendar_end_date

    try:
        os.makedirs(output_dir, exist_ok=True)
    except OSError as e:
        raise FeedWriteError(f"Could not create output directory {output_dir}: {e}") from e

    logger.info(f"Writing GTFS feed for {len(lines)} lines to {output_dir}")
    stats = {}

    with CsvTableWriter(output_dir, "agency", tables.AGENCY_HEADER) as sink:
        stats['agency'] = tables.write_agency(sink)

    with CsvTableWriter(output_dir, "routes", tables.ROUTES_HEADER) as sink:
        stats['routes'] = tables.write_routes(sink, lines)

    with CsvTableWriter(output_dir, "stops", tables.STOPS_HEADER) as sink:
        stats['stops'] = tables.write_stops(sink, lines)

    with CsvTableWriter(output_dir, "calendar", tables.CALENDAR_HEADER) as sink:
        stats['calendar'] = tables.write_calendar(sink, start_date, end_date)

    with CsvTableWriter(output_dir, "trips", tables.TRIPS_HEADER) as sink:
        stats['trips'] = tables.write_trips(sink, lines)

    with CsvTableWriter(output_dir, "stop_times", tables.STOP_TIMES_HEADER) as sink:
        stats['stop_times'] = tables.write_stop_times(sink, lines)

    return stats
