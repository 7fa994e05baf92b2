"""
Main entry point for the GTFS export.

Fetches the TfL network and writes the feed to GTFS_OUTPUT_DIR.
"""

from tflgtfs.export.orchestrator import run_full_export


def main():
    """Run the export with settings from the environment."""
    run_full_export()


if __name__ == "__main__":
    main()
