"""
CSV row sink for GTFS tables.
"""

import csv
import logging
import os
from typing import Sequence

from tflgtfs.feed.errors import FeedWriteError

logger = logging.getLogger(__name__)


class CsvTableWriter:
    """
    Writes one GTFS table to <output_dir>/<table>.txt.

    Usage:
        with CsvTableWriter(output_dir, "stops", STOPS_HEADER) as sink:
            sink.write_row(["940GZZLUVIC", "Victoria", 51.4965, -0.1447])
    """

    def __init__(self, output_dir: str, table: str, header: Sequence[str]):
        self.table = table
        self.header = list(header)
        self.path = os.path.join(output_dir, f"{table}.txt")
        self.rows_written = 0
        self._file = None
        self._writer = None

    def __enter__(self):
        try:
            self._file = open(self.path, "w", newline="", encoding="utf-8")
            self._writer = csv.writer(self._file, lineterminator="\n")
            self._writer.writerow(self.header)
        except OSError as e:
            self._close()
            raise FeedWriteError(f"Could not open {self.path}: {e}") from e
        return self

    def __exit__(self, exc_type, exc, tb):
        self._close()
        if exc_type is None:
            logger.info(f"Wrote {self.rows_written} rows to {self.path}")
        return False

    def write_row(self, values: Sequence) -> None:
        if self._writer is None:
            raise FeedWriteError(f"{self.path} is not open")
        if len(values) != len(self.header):
            raise FeedWriteError(
                f"{self.table} row has {len(values)} fields, expected {len(self.header)}: {values}"
            )
        try:
            self._writer.writerow(values)
        except OSError as e:
            raise FeedWriteError(f"Could not write to {self.path}: {e}") from e
        self.rows_written += 1

    def _close(self):
        if self._file is not None:
            try:
                self._file.close()
            except OSError as e:
                raise FeedWriteError(f"Could not close {self.path}: {e}") from e
            finally:
                self._file = None
                self._writer = None
