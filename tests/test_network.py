"""
Test decoding TfL responses into the network snapshot.
"""

import json
from pathlib import Path

import pytest

from tflgtfs.data.network import Line, Stop, TimeTable, KnownJourney
from tflgtfs.feed.errors import NetworkDecodeError

FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name):
    with open(FIXTURES / name, encoding="utf-8") as f:
        return json.load(f)


class TestLineDecoding:

    def test_lines_with_route_sections(self):
        lines = [Line.from_api(data) for data in load_fixture("line_route.json")]

        assert [line.id for line in lines] == ["victoria", "N2"]
        victoria = lines[0]
        assert victoria.mode_name == "tube"
        assert len(victoria.route_sections) == 3
        assert victoria.route_sections[0].originator == "940GZZLUBXN"
        assert victoria.route_sections[0].timetable is None
        assert victoria.stops is None

    def test_missing_field_raises(self):
        with pytest.raises(NetworkDecodeError, match="modeName"):
            Line.from_api({"id": "x", "name": "x", "routeSections": []})


class TestStopDecoding:

    def test_nested_children(self):
        stops = [Stop.from_api(data) for data in load_fixture("stops_victoria.json")]

        assert stops[0].id == "940GZZLUBXN"
        assert stops[0].name == "Brixton Underground Station"
        assert stops[0].lat == pytest.approx(51.462618)
        assert [child.id for child in stops[0].children] == ["9400ZZLUBXN1"]
        assert stops[1].children == []

    def test_children_key_is_optional(self):
        stop = Stop.from_api({"naptanId": "A", "commonName": "A", "lat": 1, "lon": 2})
        assert stop.children == []


class TestTimetableDecoding:

    def test_first_route_of_response(self):
        timetable = TimeTable.from_response(load_fixture("timetable_victoria_outbound.json"))

        assert len(timetable.station_intervals) == 1
        interval = timetable.station_intervals[0]
        assert interval.id == 0
        assert [i.stop_id for i in interval.intervals] == ["940GZZLUSKW", "940GZZLUVXL", "940GZZLUWWL"]
        assert interval.intervals[2].time_to_arrival == pytest.approx(32.8)

        schedule = timetable.schedules[0]
        assert schedule.name == "Monday to Friday"
        assert schedule.known_journeys[0] == KnownJourney(hour="5", minute="36", interval_id=0)

    def test_interval_map(self):
        timetable = TimeTable.from_response(load_fixture("timetable_victoria_outbound.json"))
        intervals = timetable.interval_map()

        assert set(intervals) == {0}
        assert intervals.get(4) is None

    def test_empty_routes_raise(self):
        with pytest.raises(NetworkDecodeError):
            TimeTable.from_response({"timetable": {"routes": []}})

    def test_error_payload_raises(self):
        with pytest.raises(NetworkDecodeError):
            TimeTable.from_response({"message": "No timetable found", "httpStatusCode": 404})

    def test_non_object_raises(self):
        with pytest.raises(NetworkDecodeError):
            TimeTable.from_response([])
