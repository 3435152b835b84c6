import json
import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from masjid_widgets.core.db import session_scope
from masjid_widgets.core.models import CachedResource

logger = logging.getLogger(__name__)


class LocalStore:
    """Persistent string key-value store holding JSON payloads per widget.

    Entries never expire: a value is only replaced by the next successful fetch
    for the same key. Storage errors are logged and read as a missing entry.
    """

    def get_item(self, key: str) -> Optional[str]:
        """Return the raw stored string for key, or None"""
        try:
            with session_scope() as session:
                row = session.get(CachedResource, key)
                return row.value if row else None
        except SQLAlchemyError as e:
            logger.error(f"Error reading store key {key}: {e}")
            return None

    def set_item(self, key: str, value: str) -> None:
        """Insert or overwrite key (last write wins)"""
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        try:
            with session_scope() as session:
                row = session.get(CachedResource, key)
                if row:
                    row.value = value
                    row.updated_at = now
                else:
                    session.add(CachedResource(key=key, value=value, created_at=now, updated_at=now))
        except SQLAlchemyError as e:
            logger.error(f"Error writing store key {key}: {e}")

    def get_json(self, key: str) -> Optional[Any]:
        """Return the parsed payload for key; None when absent or not valid JSON"""
        raw = self.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            logger.warning(f"Discarding unparseable cache entry {key}: {e}")
            return None

    def set_json(self, key: str, payload: Any) -> None:
        self.set_item(key, json.dumps(payload, ensure_ascii=False))

    def get_record(self, key: str) -> Optional[CachedResource]:
        """Return the CachedResource row for key (for API serialization)"""
        with session_scope() as session:
            return session.get(CachedResource, key)

    def list_records(self) -> List[CachedResource]:
        with session_scope() as session:
            return list(
                session.execute(select(CachedResource).order_by(CachedResource.key)).scalars().all()
            )
