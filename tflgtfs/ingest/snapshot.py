"""
Network Snapshot Ingestion

Fetches all lines with their route sections, then fans out over a fixed-size
thread pool to fetch each line's stops and each route section's timetable.
The snapshot is only returned once every worker has finished.

Responses that fail to decode, or that TfL answers with a client error, leave
the affected stops list empty or the route section without a timetable.
Anything else (network failures after retries, a line list that won't decode)
aborts ingestion.
"""

import concurrent.futures
import logging
from typing import List, Optional

import requests
from tqdm import tqdm

from tflgtfs.data.network import Line, RouteSection, Stop, TimeTable
from tflgtfs.data.tfl.tfl_client import TflClient
from tflgtfs.feed.errors import NetworkDecodeError

logger = logging.getLogger(__name__)

DECODE_ERRORS = (NetworkDecodeError, ValueError, TypeError)


def _is_client_error(error: requests.HTTPError) -> bool:
    response = error.response
    return response is not None and 400 <= response.status_code < 500


def fetch_lines(client: TflClient) -> List[Line]:
    """Fetch and decode every line. Decode failures here are fatal."""
    data = client.get_lines()
    if not isinstance(data, list):
        raise NetworkDecodeError(f"Expected a list of lines, got {type(data).__name__}")
    lines = [Line.from_api(line) for line in data]
    logger.info(f"Fetched {len(lines)} lines")
    return lines


def fetch_stops(client: TflClient, line_id: str) -> List[Stop]:
    try:
        data = client.get_stops(line_id)
    except requests.HTTPError as e:
        if not _is_client_error(e):
            raise
        logger.error(f"Error fetching stops for line {line_id}: {e}")
        return []
    except DECODE_ERRORS as e:
        logger.error(f"Error decoding stops for line {line_id}: {e}")
        return []

    try:
        if not isinstance(data, list):
            raise NetworkDecodeError(f"Expected a list of stop points, got {type(data).__name__}")
        return [Stop.from_api(stop) for stop in data]
    except DECODE_ERRORS as e:
        logger.error(f"Error decoding stops for line {line_id}: {e}")
        return []


def fetch_timetable(client: TflClient, line: Line, section: RouteSection) -> Optional[TimeTable]:
    try:
        data = client.get_timetable(line.id, section.originator, section.destination)
    except requests.HTTPError as e:
        if not _is_client_error(e):
            raise
        logger.error(f"Error fetching timetable for {line.id} {section.originator} to {section.destination}: {e}")
        return None
    except DECODE_ERRORS as e:
        logger.error(f"Error decoding timetable for {line.id} {section.originator} to {section.destination}: {e}")
        return None

    try:
        return TimeTable.from_response(data)
    except DECODE_ERRORS as e:
        logger.error(f"Error decoding timetable for {line.id} {section.originator} to {section.destination}: {e}")
        return None


def populate_line(client: TflClient, line: Line) -> Line:
    """Fill in a line's stops and route section timetables. Runs on a worker thread."""
    line.stops = fetch_stops(client, line.id)
    for section in line.route_sections:
        logger.debug(f"Getting timetable for line {line.name}, route section {section.name}")
        section.timetable = fetch_timetable(client, line, section)
    return line


def load_network(client: TflClient, max_workers: int = 10, silent: bool = False) -> List[Line]:
    """
    Build the complete network snapshot.

    Args:
        client: Configured TfL API client
        max_workers: Number of lines fetched concurrently
        silent: Disable the progress bar

    Returns:
        Lines in API order with stops and timetables populated
    """
    lines = fetch_lines(client)

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(populate_line, client, line) for line in lines]
        progress = tqdm(
            concurrent.futures.as_completed(futures),
            total=len(futures),
            desc="Fetching stops and timetables",
            unit="line",
            disable=silent
        )
        for future in progress:
            # Re-raises worker failures once the pool has drained
            future.result()

    with_timetable = sum(
        1 for line in lines for section in line.route_sections if section.timetable is not None
    )
    total_sections = sum(len(line.route_sections) for line in lines)
    logger.info(f"Snapshot ready: {len(lines)} lines, {with_timetable}/{total_sections} route sections with timetables")

    return lines
