"""
TfL GTFS Export

Entry Point:
    python -m tflgtfs.export --output-dir ./gtfs

Components:
    - orchestrator: fetches the network snapshot and writes the feed
"""

from .orchestrator import run_full_export

__all__ = ['run_full_export']
