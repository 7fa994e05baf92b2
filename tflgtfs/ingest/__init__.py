"""
TfL Network Ingestion

Builds the in-memory network snapshot the feed is generated from.

Components:
    - snapshot: lines, stops and timetables fetched over a bounded thread pool
    - report: duplicate and schedule name summary of a snapshot
"""

from .snapshot import load_network
from .report import report_network

__all__ = ['load_network', 'report_network']
