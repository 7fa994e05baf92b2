from dotenv import load_dotenv
import os

load_dotenv()

class TflConfig():
    app_id: str = os.getenv("TFL_APP_ID", "")
    primary_key: str = os.getenv("TFL_PRIMARY_KEY", "")
    secondary_key: str = os.getenv("TFL_SECONDARY_KEY", "")
    base_url: str = os.getenv("TFL_BASE_URL", "https://api.tfl.gov.uk")
    use_cache: bool = os.getenv("TFL_USE_CACHE", "true").lower() == "true"
    request_timeout: int = int(os.getenv("TFL_REQUEST_TIMEOUT", "30"))
    max_retries: int = int(os.getenv("TFL_MAX_RETRIES", "3"))

tfl_config = TflConfig()

class CacheConfig():
    database_url: str = os.getenv("CACHE_DATABASE_URL", "sqlite:///cache/tfl_cache.db")

cache_config = CacheConfig()

class FeedConfig():
    """Configuration for the GTFS export."""
    output_dir: str = os.getenv("GTFS_OUTPUT_DIR", "./gtfs")
    ingestion_workers: int = int(os.getenv("INGESTION_WORKERS", "10"))

    # Validity window applied to every calendar service pattern
    calendar_start_date: str = os.getenv("CALENDAR_START_DATE", "20151031")
    calendar_end_date: str = os.getenv("CALENDAR_END_DATE", "20161031")

    agency_id: str = "tfl"
    agency_name: str = "Transport For London"
    agency_url: str = "https://tfl.gov.uk"
    agency_timezone: str = "Europe/London"

feed_config = FeedConfig()
