"""
Snapshot report: duplicate lines, duplicate route sections, timetable coverage
and the schedule names the calendar has to cover.
"""

import logging
from typing import Dict, List

from tflgtfs.data.network import Line
from tflgtfs.feed.dedup import SeenSet
from tflgtfs.feed.identity import route_section_id

logger = logging.getLogger(__name__)


def report_network(lines: List[Line]) -> Dict:
    """
    Log a summary of the snapshot.

    Route sections are checked for duplicates across the whole snapshot here,
    unlike the trips and stop_times tables which only suppress duplicates
    within a line.

    Returns:
        Statistics dictionary with counts and the sorted schedule names
    """
    line_ids = SeenSet()
    section_ids = SeenSet()
    schedule_names = set()
    stats = {
        'lines': 0,
        'duplicate_lines': 0,
        'route_sections': 0,
        'duplicate_route_sections': 0,
        'sections_without_timetable': 0,
    }

    for line in lines:
        duplicate_line = line_ids.seen(line.id)
        logger.info(f"{line.id}, Duplicate: {duplicate_line}")
        if duplicate_line:
            stats['duplicate_lines'] += 1
        line_ids.mark_seen(line.id)
        stats['lines'] += 1

        for section in line.route_sections:
            has_timetable = section.timetable is not None
            if has_timetable:
                schedule_names.update(schedule.name for schedule in section.timetable.schedules)
            else:
                stats['sections_without_timetable'] += 1

            section_id = route_section_id(line, section)
            duplicate_section = section_ids.seen(section_id)
            logger.info(f"\t{section_id}, Has Timetable: {has_timetable}, Duplicate: {duplicate_section}")
            if duplicate_section:
                stats['duplicate_route_sections'] += 1
            section_ids.mark_seen(section_id)
            stats['route_sections'] += 1

    logger.info(
        f"Duplicate Lines: {stats['duplicate_lines']}, "
        f"Duplicate Route Sections: {stats['duplicate_route_sections']}"
    )

    stats['schedule_names'] = sorted(schedule_names)
    logger.info("Schedule Names:")
    for name in stats['schedule_names']:
        logger.info(f"\t{name}")

    return stats
