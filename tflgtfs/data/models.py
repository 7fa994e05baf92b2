"""
SQLAlchemy models for the TfL response cache.

Raw API bodies are stored keyed by endpoint so repeated exports can be run
against the same snapshot without hitting the API again.
"""

from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime

from .db_broker import Base


class CachedResponse(Base):
    """Raw JSON body returned by a TfL API endpoint."""

    __tablename__ = 'cached_responses'

    endpoint = Column(String(500), primary_key=True)
    body = Column(Text, nullable=False)
    fetched_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<CachedResponse(endpoint='{self.endpoint}', size={len(self.body or '')}, fetched_at={self.fetched_at})>"
