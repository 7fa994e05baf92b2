"""
In-memory network snapshot decoded from TfL API responses.

Lines own their route sections and stops; route sections own their
timetables. The snapshot is fully populated by ingestion before any feed
table is generated and is not modified afterwards.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from tflgtfs.feed.errors import NetworkDecodeError


def _require(data: dict, key: str, kind: str):
    if not isinstance(data, dict):
        raise NetworkDecodeError(f"Expected {kind} object, got {type(data).__name__}")
    try:
        return data[key]
    except KeyError:
        raise NetworkDecodeError(f"{kind} is missing '{key}'") from None


@dataclass
class Stop:
    """Stop point with one level of child stops (platforms, entrances)."""

    id: str
    name: str
    lat: float
    lon: float
    children: List["Stop"] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> "Stop":
        return cls(
            id=_require(data, "naptanId", "StopPoint"),
            name=_require(data, "commonName", "StopPoint"),
            lat=float(_require(data, "lat", "StopPoint")),
            lon=float(_require(data, "lon", "StopPoint")),
            children=[cls.from_api(child) for child in data.get("children") or []],
        )


@dataclass
class Interval:
    stop_id: str
    time_to_arrival: float  # minutes from the route section origin

    @classmethod
    def from_api(cls, data: dict) -> "Interval":
        return cls(
            stop_id=_require(data, "stopId", "Interval"),
            time_to_arrival=float(_require(data, "timeToArrival", "Interval")),
        )


@dataclass
class StationInterval:
    id: int
    intervals: List[Interval] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> "StationInterval":
        return cls(
            id=int(_require(data, "id", "StationInterval")),
            intervals=[Interval.from_api(i) for i in _require(data, "intervals", "StationInterval")],
        )


@dataclass
class KnownJourney:
    """A scheduled departure from the route section origin."""

    hour: str
    minute: str
    interval_id: int

    @classmethod
    def from_api(cls, data: dict) -> "KnownJourney":
        return cls(
            hour=str(_require(data, "hour", "KnownJourney")),
            minute=str(_require(data, "minute", "KnownJourney")),
            interval_id=int(_require(data, "intervalId", "KnownJourney")),
        )


@dataclass
class Schedule:
    name: str
    known_journeys: List[KnownJourney] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> "Schedule":
        return cls(
            name=_require(data, "name", "Schedule"),
            known_journeys=[KnownJourney.from_api(j) for j in _require(data, "knownJourneys", "Schedule")],
        )


@dataclass
class TimeTable:
    station_intervals: List[StationInterval] = field(default_factory=list)
    schedules: List[Schedule] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> "TimeTable":
        return cls(
            station_intervals=[StationInterval.from_api(s) for s in _require(data, "stationIntervals", "TimeTable")],
            schedules=[Schedule.from_api(s) for s in _require(data, "schedules", "TimeTable")],
        )

    @classmethod
    def from_response(cls, data: dict) -> "TimeTable":
        """Decode a timetable endpoint response, keeping only its first route."""
        timetable = _require(data, "timetable", "TimetableResponse")
        routes = _require(timetable, "routes", "Timetable")
        if not routes:
            raise NetworkDecodeError("Timetable has no routes")
        return cls.from_api(routes[0])

    def interval_map(self) -> Dict[int, StationInterval]:
        return {interval.id: interval for interval in self.station_intervals}


@dataclass
class RouteSection:
    name: str
    direction: str
    originator: str
    destination: str
    timetable: Optional[TimeTable] = None

    @classmethod
    def from_api(cls, data: dict) -> "RouteSection":
        return cls(
            name=_require(data, "name", "RouteSection"),
            direction=_require(data, "direction", "RouteSection"),
            originator=_require(data, "originator", "RouteSection"),
            destination=_require(data, "destination", "RouteSection"),
        )


@dataclass
class Line:
    id: str
    name: str
    mode_name: str
    route_sections: List[RouteSection] = field(default_factory=list)
    stops: Optional[List[Stop]] = None

    @classmethod
    def from_api(cls, data: dict) -> "Line":
        return cls(
            id=_require(data, "id", "Line"),
            name=_require(data, "name", "Line"),
            mode_name=_require(data, "modeName", "Line"),
            route_sections=[RouteSection.from_api(s) for s in _require(data, "routeSections", "Line")],
        )
