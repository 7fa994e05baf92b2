"""Pytest configuration and fixtures."""

import pytest

from tflgtfs.data.db_broker import ConnectionBroker
from tflgtfs.data.network import (
    Line, RouteSection, Stop, TimeTable, StationInterval, Interval, Schedule, KnownJourney
)


class RecordingSink:
    """In-memory stand-in for a table writer."""

    def __init__(self):
        self.rows = []

    def write_row(self, values):
        self.rows.append(list(values))


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def make_sink():
    return RecordingSink


@pytest.fixture
def cache_database(tmp_path):
    """Point the connection broker at a throwaway SQLite database."""
    ConnectionBroker.configure(f"sqlite:///{tmp_path / 'cache' / 'tfl_cache.db'}")
    yield
    ConnectionBroker.configure("sqlite:///:memory:")


@pytest.fixture
def victoria_timetable():
    """Two schedules, one station interval, one journey referencing a missing interval."""
    return TimeTable(
        station_intervals=[
            StationInterval(id=0, intervals=[
                Interval(stop_id="940GZZLUPCO", time_to_arrival=2.0),
                Interval(stop_id="940GZZLUVXL", time_to_arrival=3.5),
                Interval(stop_id="940GZZLUSKW", time_to_arrival=5.0),
            ]),
        ],
        schedules=[
            Schedule(name="Monday to Friday", known_journeys=[
                KnownJourney(hour="5", minute="36", interval_id=0),
                KnownJourney(hour="23", minute="58", interval_id=0),
                KnownJourney(hour="6", minute="0", interval_id=7),
            ]),
            Schedule(name="Saturday", known_journeys=[
                KnownJourney(hour="7", minute="15", interval_id=0),
            ]),
        ],
    )


@pytest.fixture
def victoria_line(victoria_timetable):
    return Line(
        id="victoria",
        name="Victoria",
        mode_name="tube",
        route_sections=[
            RouteSection(
                name="Brixton Underground Station - Walthamstow Central Underground Station",
                direction="outbound",
                originator="940GZZLUBXN",
                destination="940GZZLUWWL",
                timetable=victoria_timetable,
            ),
            RouteSection(
                name="Walthamstow Central Underground Station - Brixton Underground Station",
                direction="inbound",
                originator="940GZZLUWWL",
                destination="940GZZLUBXN",
                timetable=None,
            ),
        ],
        stops=[
            Stop(id="940GZZLUBXN", name="Brixton Underground Station", lat=51.4627, lon=-0.1145, children=[
                Stop(id="9400ZZLUBXN1", name="Brixton", lat=0.0, lon=0.0),
            ]),
            Stop(id="940GZZLUVXL", name="Vauxhall Underground Station", lat=51.4858, lon=-0.1238),
        ],
    )
