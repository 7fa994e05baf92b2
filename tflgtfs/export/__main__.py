"""
TfL GTFS Export Entry Point

Allows running the export via:
    python -m tflgtfs.export [args]
"""

from .orchestrator import main

if __name__ == "__main__":
    main()
