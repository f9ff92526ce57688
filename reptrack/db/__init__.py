"""
Database layer for REPTrack.

Provides the schema, ORM models, connection management and the repositories
that hand immutable records to the engine.
"""

from .connection import db_session, get_db_manager, init_database, check_connection, session_scope
from .models import (
    Base,
    CompanyRecord,
    PropertyRecord,
    TransactionRecord,
    SettingRecord,
)

__all__ = [
    # Connection utilities
    "db_session",
    "get_db_manager",
    "init_database",
    "check_connection",
    "session_scope",
    # Models
    "Base",
    "CompanyRecord",
    "PropertyRecord",
    "TransactionRecord",
    "SettingRecord",
]
