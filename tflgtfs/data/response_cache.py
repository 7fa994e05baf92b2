"""
Endpoint-keyed cache of TfL API response bodies.
"""

import logging
import threading
from datetime import datetime
from typing import Optional

from .db_broker import ConnectionBroker
from .models import CachedResponse

logger = logging.getLogger(__name__)


class ResponseCache:
    """Stores raw response bodies in the cache database."""

    def __init__(self):
        ConnectionBroker.create_tables()
        # SQLite allows a single writer at a time
        self._write_lock = threading.Lock()

    def get(self, endpoint: str) -> Optional[str]:
        with ConnectionBroker.get_session() as session:
            cached = session.get(CachedResponse, endpoint)
            if cached is None:
                return None
            logger.debug(f"Cache hit for {endpoint}")
            return cached.body

    def put(self, endpoint: str, body: str) -> str:
        """
        Store a response body, replacing any previous entry for the endpoint.

        Returns:
            The body that was stored
        """
        with self._write_lock:
            with ConnectionBroker.get_session() as session:
                session.merge(CachedResponse(
                    endpoint=endpoint,
                    body=body,
                    fetched_at=datetime.utcnow()
                ))
        return body

    def clear(self) -> int:
        """Delete every cached response and return how many were removed."""
        with self._write_lock:
            with ConnectionBroker.get_session() as session:
                removed = session.query(CachedResponse).delete()
        logger.info(f"Cleared {removed} cached responses")
        return removed
