"""
Settings repository: the database-backed key-value store behind the
exchange-rate table and the provider API key.
"""

from typing import Callable, Optional

from sqlalchemy.orm import Session

from reptrack.core.fx.rate_store import SettingsBackend
from reptrack.db.connection import session_scope
from reptrack.db.models import SettingRecord
from reptrack.db.repositories.base import BaseRepository


class SettingsRepository(BaseRepository[SettingRecord]):
    """Repository for SettingRecord CRUD operations."""

    def __init__(self, session: Session):
        super().__init__(SettingRecord, session)

    def upsert(self, key: str, value: str) -> SettingRecord:
        record = self.get_by_id(key)
        if record is None:
            return self.create(key=key, value=value)
        record.value = value
        self.session.flush()
        return record


class SqlSettingsBackend(SettingsBackend):
    """SettingsBackend that keeps each key in its own row, one transaction per call."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def load(self, key: str) -> Optional[str]:
        with session_scope(self._session_factory) as session:
            record = SettingsRepository(session).get_by_id(key)
            return record.value if record is not None else None

    def save(self, key: str, value: str) -> None:
        with session_scope(self._session_factory) as session:
            SettingsRepository(session).upsert(key, value)

    def delete(self, key: str) -> None:
        with session_scope(self._session_factory) as session:
            SettingsRepository(session).delete(key)
