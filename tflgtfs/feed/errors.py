"""
Exceptions raised while building the feed.

Recoverable problems (a timetable that won't decode, a journey pointing at a
missing station interval, an unknown mode) are logged and skipped where they
occur. The exceptions below that are not caught by the generators abort the
export.
"""


class FeedError(Exception):
    """Base class for export errors."""


class NetworkDecodeError(FeedError):
    """A TfL response is missing fields needed to build the network snapshot."""


class MalformedTimeError(FeedError, ValueError):
    """A journey's hour or minute is not a non-negative integer."""


class MissingStopsError(FeedError):
    """A line reached the stops table before its stops were fetched."""


class FeedWriteError(FeedError):
    """An output table could not be written."""
