from tflgtfs.data.response_cache import ResponseCache
from tflgtfs.feed.errors import NetworkDecodeError
import requests
import logging
import json
import time
from typing import Optional

logger = logging.getLogger(__name__)

class TflClient:
    def __init__(self, config, cache: Optional[ResponseCache] = None):
        self.app_id = config.app_id
        self.app_key = config.primary_key if config.primary_key else config.secondary_key
        self.base_url = config.base_url.rstrip("/")
        self.use_cache = config.use_cache
        self.timeout = config.request_timeout
        self.max_retries = config.max_retries
        self.cache = cache if self.use_cache else None

        if not self.app_key:
            logger.warning("No TfL API key configured, requests will be made anonymously and rate limited")

    def get_lines(self):
        """
        Get every line together with its route sections.

        Returns:
            List of Line objects, each with a routeSections array
        """
        return self._execute_request("Line/Route")

    def get_stops(self, line_id: str):
        """
        Get the stop points served by a line.

        Args:
            line_id: Line identifier (e.g., 'victoria', 'N1')

        Returns:
            List of StopPoint objects with nested children
        """
        endpoint = f"Line/{line_id}/StopPoints"
        return self._execute_request(endpoint)

    def get_timetable(self, line_id: str, originator: str, destination: str):
        """
        Get the timetable for one route section of a line.

        Args:
            line_id: Line identifier
            originator: NaPTAN ID of the route section's first stop
            destination: NaPTAN ID of the route section's last stop

        Returns:
            TimetableResponse dictionary containing timetable.routes
        """
        endpoint = f"Line/{line_id}/Timetable/{originator}/to/{destination}"
        return self._execute_request(endpoint)

    def _build_url(self, endpoint: str, params: Optional[dict] = None) -> str:
        url = f"{self.base_url}/{endpoint}"
        params = dict(params or {})
        if self.app_id:
            params["app_id"] = self.app_id
        if self.app_key:
            params["app_key"] = self.app_key

        if not params:
            return url

        query_string = "&".join(f"{key}={value}" for key, value in params.items())

        return f"{url}?{query_string}"

    def _execute_request(self, endpoint: str, params: Optional[dict] = None):
        if self.cache is not None:
            body = self.cache.get(endpoint)
            if body is not None:
                return self._parse_body(endpoint, body)

        body = self._remote_get(endpoint, params)
        data = self._parse_body(endpoint, body)

        # Only bodies that parse are cached
        if self.cache is not None:
            self.cache.put(endpoint, body)

        return data

    def _parse_body(self, endpoint: str, body: str):
        try:
            return json.loads(body)
        except ValueError as e:
            raise NetworkDecodeError(f"Response from {endpoint} is not valid JSON: {e}") from e

    def _remote_get(self, endpoint: str, params: Optional[dict] = None) -> str:
        url = self._build_url(endpoint, params)

        for attempt in range(self.max_retries):
            try:
                response = requests.get(url, headers={"Accept": "application/json"}, timeout=self.timeout)
                response.raise_for_status()
                return response.text
            except requests.exceptions.Timeout:
                if attempt < self.max_retries - 1:
                    wait_time = 2 ** attempt  # Exponential backoff: 1s, 2s, 4s
                    logger.warning(f"Request timeout for {endpoint}, retrying in {wait_time}s... (attempt {attempt + 1}/{self.max_retries})")
                    time.sleep(wait_time)
                else:
                    raise
            except requests.exceptions.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                if status is not None and status >= 500 and attempt < self.max_retries - 1:
                    wait_time = 2 ** attempt
                    logger.warning(f"{status} from {endpoint}, retrying in {wait_time}s... (attempt {attempt + 1}/{self.max_retries})")
                    time.sleep(wait_time)
                else:
                    raise
            except requests.RequestException as e:
                if attempt < self.max_retries - 1:
                    wait_time = 2 ** attempt
                    logger.warning(f"Request failed: {e}, retrying in {wait_time}s... (attempt {attempt + 1}/{self.max_retries})")
                    time.sleep(wait_time)
                else:
                    logger.error(f"Giving up on {endpoint} after {self.max_retries} attempts")
                    raise
