"""
Database connection management for REPTrack.

Handles:
- Environment-based configuration
- Connection pooling (QueuePool for server databases, SQLite handled apart)
- Context managers for transactions
- Connection lifecycle management
"""

import logging
import os
from contextlib import contextmanager
from typing import Callable, Generator, Optional

from dotenv import load_dotenv
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool

# Load environment variables from .env file
load_dotenv()

# Import models to ensure they're registered with Base
from .models import Base

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///reptrack.db"


class DatabaseConfig:
    """Database configuration from environment variables."""

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = (
            database_url
            or os.getenv("REPTRACK_DATABASE_URL")
            or os.getenv("DATABASE_URL")
            or DEFAULT_DATABASE_URL
        )

        # Log masked URL for debugging (hide password)
        if "@" in self.database_url:
            logger.info(f"Database: Connecting to {self.database_url.split('@')[1]}")
        else:
            logger.info(f"Database: Connecting to {self.database_url}")

        # Connection pooling settings
        self.pool_size = int(os.getenv("DB_POOL_SIZE", "5"))
        self.max_overflow = int(os.getenv("DB_MAX_OVERFLOW", "10"))
        self.pool_timeout = int(os.getenv("DB_POOL_TIMEOUT", "30"))
        self.pool_recycle = int(os.getenv("DB_POOL_RECYCLE", "3600"))  # 1 hour
        self.echo = os.getenv("SQL_ECHO", "false").lower() == "true"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


def build_engine(config: DatabaseConfig) -> Engine:
    """Create an engine with pooling suited to the backend."""
    if config.is_sqlite:
        return create_engine(
            config.database_url,
            connect_args={"check_same_thread": False},
            echo=config.echo,
        )

    engine = create_engine(
        config.database_url,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_timeout=config.pool_timeout,
        pool_recycle=config.pool_recycle,
        pool_pre_ping=True,
        poolclass=QueuePool,
        echo=config.echo,
    )
    logger.info(f"Database: Using QueuePool (pool_size={config.pool_size}, max_overflow={config.max_overflow})")
    return engine


@contextmanager
def session_scope(session_factory: Callable[[], Session]) -> Generator[Session, None, None]:
    """
    Session with automatic commit/rollback.

    Usage:
        with session_scope(factory) as session:
            session.add(record)
            # Automatically commits on success, rolls back on exception
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


class DatabaseManager:
    """
    Singleton database manager for connection pooling.

    Usage:
        db_manager = DatabaseManager()
        with db_manager.session() as session:
            rows = session.query(PropertyRecord).all()
    """

    _instance: Optional["DatabaseManager"] = None
    _engine: Optional[Engine] = None
    _session_factory: Optional[sessionmaker] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if self._engine is None:
            self._initialize_engine()

    def _initialize_engine(self):
        """Initialize SQLAlchemy engine and session factory."""
        config = DatabaseConfig()
        self._engine = build_engine(config)
        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)

    @property
    def session_factory(self) -> sessionmaker:
        return self._session_factory

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Context manager for database sessions with automatic commit/rollback."""
        with session_scope(self._session_factory) as session:
            yield session

    def create_all(self):
        """Create all tables in the database."""
        Base.metadata.create_all(self._engine)
        logger.info("Database: All tables created")

    def dispose(self):
        """Dispose of the connection pool."""
        if self._engine:
            self._engine.dispose()
            logger.info("Database: Connection pool disposed")


# Convenience functions

def get_db_manager() -> DatabaseManager:
    """Get or create the database manager singleton."""
    return DatabaseManager()


@contextmanager
def db_session() -> Generator[Session, None, None]:
    """
    Convenience context manager for database sessions.

    Usage:
        from reptrack.db.connection import db_session

        with db_session() as session:
            rows = session.query(PropertyRecord).all()
    """
    with get_db_manager().session() as session:
        yield session


def init_database():
    """
    Initialize database schema.

    Call this once during deployment to create all tables.
    """
    get_db_manager().create_all()


def check_connection() -> bool:
    """
    Check if database connection is healthy.

    Returns:
        True if connection successful, False otherwise
    """
    try:
        with db_session() as session:
            session.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False
