"""
GTFS Export Orchestrator

Single entry point for building a GTFS feed from the TfL API.
Fetches the network snapshot, reports on it, then writes the feed tables.

Usage:
    python -m tflgtfs.export
    python -m tflgtfs.export --output-dir ./gtfs --workers 10 --no-cache
"""

import argparse
import logging
from datetime import datetime

from tflgtfs.config.config_main import tfl_config, feed_config
from tflgtfs.data.response_cache import ResponseCache
from tflgtfs.data.tfl.tfl_client import TflClient
from tflgtfs.feed.exporter import write_feed
from tflgtfs.ingest.report import report_network
from tflgtfs.ingest.snapshot import load_network

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def run_full_export(
    output_dir: str = None,
    workers: int = None,
    use_cache: bool = None,
    clear_cache: bool = False,
    skip_report: bool = False
):
    """
    Execute the complete export.

    Args:
        output_dir: Directory for the GTFS tables (default from env)
        workers: Number of lines fetched concurrently (default from env)
        use_cache: Serve API responses from the cache database (default from env)
        clear_cache: Empty the response cache before fetching
        skip_report: Skip the snapshot duplicate/schedule report

    Returns:
        Per-table statistics from the feed writer
    """
    print(f"\n{'#'*70}")
    print(f"# TFL GTFS EXPORT")
    print(f"# Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"{'#'*70}\n")

    overall_start = datetime.now()

    output_dir = output_dir or feed_config.output_dir
    workers = workers or feed_config.ingestion_workers
    if use_cache is None:
        use_cache = tfl_config.use_cache

    cache = ResponseCache() if use_cache or clear_cache else None
    if clear_cache:
        cache.clear()

    tfl_client = TflClient(tfl_config, cache=cache if use_cache else None)

    try:
        # ================================================================
        # STEP 1: NETWORK SNAPSHOT
        # ================================================================

        print(f"\n{'='*70}")
        print(f"FETCHING NETWORK ({workers} workers, cache {'on' if use_cache else 'off'})")
        print(f"{'='*70}\n")

        lines = load_network(tfl_client, max_workers=workers)

        if not skip_report:
            report = report_network(lines)
            print(f"\n  ✓ {report['lines']} lines ({report['duplicate_lines']} duplicates)")
            print(f"  ✓ {report['route_sections']} route sections ({report['duplicate_route_sections']} duplicates, "
                  f"{report['sections_without_timetable']} without timetable)")
            print(f"  ✓ {len(report['schedule_names'])} schedule names\n")

        # ================================================================
        # STEP 2: FEED TABLES
        # ================================================================

        print(f"\n{'='*70}")
        print(f"WRITING GTFS FEED TO {output_dir}")
        print(f"{'='*70}\n")

        stats = write_feed(lines, output_dir)

        print(f"\n{'='*70}")
        print("EXPORT COMPLETE")
        print(f"{'='*70}")
        for table, table_stats in stats.items():
            print(f"  ✓ {table_stats['rows_written']} {table} rows")
        print(f"{'='*70}\n")

        overall_duration = (datetime.now() - overall_start).total_seconds()
        print(f"# Total duration: {overall_duration:.2f} seconds ({overall_duration/60:.1f} minutes)\n")

        return stats

    except Exception as e:
        print(f"\n{'!'*70}")
        print(f"! EXPORT FAILED")
        print(f"! Error: {e}")
        print(f"! Files already written to {output_dir} are incomplete")
        print(f"{'!'*70}\n")
        logger.error(f"Export failed: {e}", exc_info=True)
        raise


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description='Build a GTFS feed from the TfL unified API',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Full export with defaults from the environment
  python -m tflgtfs.export

  # Fresh fetch into a custom directory
  python -m tflgtfs.export --clear-cache --output-dir ./out/gtfs

  # Fewer concurrent requests, no report
  python -m tflgtfs.export --workers 4 --skip-report
        """
    )

    parser.add_argument(
        '--output-dir',
        type=str,
        default=None,
        help='Directory for the GTFS .txt tables (default: GTFS_OUTPUT_DIR env var)'
    )

    parser.add_argument(
        '--workers',
        type=int,
        default=None,
        help='Number of lines fetched concurrently (default: INGESTION_WORKERS env var)'
    )

    parser.add_argument(
        '--no-cache',
        action='store_true',
        help='Always fetch from the API and do not store responses'
    )

    parser.add_argument(
        '--clear-cache',
        action='store_true',
        help='Delete all cached responses before fetching'
    )

    parser.add_argument(
        '--skip-report',
        action='store_true',
        help='Skip the snapshot duplicate and schedule name report'
    )

    args = parser.parse_args()

    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be at least 1")

    run_full_export(
        output_dir=args.output_dir,
        workers=args.workers,
        use_cache=False if args.no_cache else None,
        clear_cache=args.clear_cache,
        skip_report=args.skip_report
    )


if __name__ == "__main__":
    main()
