"""
Core DB models: the local key-value store backing widget caches.
"""
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Text

from masjid_widgets.core.db import Base


def _utc_now() -> datetime:
    """UTC now as naive datetime for DateTime(timezone=False) columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class CachedResource(Base):
    """One named entry of the local store. value holds the JSON-encoded payload as text."""
    __tablename__ = "cached_resources"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=False), default=_utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=False), default=_utc_now, onupdate=_utc_now, nullable=False)
