"""
Database Connection Management

Handles database connections, session management, engine configuration and
the writer lock that serializes every mutating operation.
All schema changes should be managed through Alembic migrations.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine


logger = logging.getLogger(__name__)

# Get the project root directory (two levels up from contract_manager/database/)
PROJECT_ROOT = Path(__file__).parent.parent.parent


class DatabaseSettings(BaseSettings):
    """Database configuration from environment variables"""

    # Any SQLAlchemy URL; SQLite file by default for local development
    database_url: str = "sqlite:///./contract_manager.db"
    echo: bool = False

    # Connection pool settings (ignored for SQLite)
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: int = 30
    pool_recycle: int = 3600

    model_config = SettingsConfigDict(
        env_prefix="CONTRACT_MANAGER_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured backend is SQLite"""
        return self.database_url.startswith("sqlite")

    @property
    def is_in_memory(self) -> bool:
        """Check if the configured backend is an in-memory SQLite database"""
        return self.is_sqlite and (self.database_url.rstrip("/") in ("sqlite:", "sqlite:/") or ":memory:" in self.database_url)


class DatabaseManager:
    """
    Database connection and session management

    Mutations go through `transaction()`, which holds a process-wide writer
    lock for the lifetime of the session so that no two writes interleave.
    `write_lock()` extends that hold past commit for event publication.
    Reads go through `get_session()`. An in-memory SQLite database lives on a
    single shared connection, so there reads take the writer lock as well;
    every other backend gives each session its own connection and reads only
    see committed data.
    """

    def __init__(self, settings: Optional[DatabaseSettings] = None):
        """
        Initialize database manager

        Args:
            settings: Database settings (loads from environment if not provided)
        """
        self.settings = settings or DatabaseSettings()
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._write_lock = threading.RLock()

    def get_engine(self) -> Engine:
        """
        Get database engine

        Returns:
            SQLAlchemy engine
        """
        if self._engine is None:
            if self.settings.is_in_memory:
                self._engine = create_engine(
                    self.settings.database_url,
                    echo=self.settings.echo,
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                )
            elif self.settings.is_sqlite:
                self._engine = create_engine(
                    self.settings.database_url,
                    echo=self.settings.echo,
                    connect_args={"check_same_thread": False},
                )
            else:
                self._engine = create_engine(
                    self.settings.database_url,
                    echo=self.settings.echo,
                    pool_size=self.settings.pool_size,
                    max_overflow=self.settings.max_overflow,
                    pool_timeout=self.settings.pool_timeout,
                    pool_recycle=self.settings.pool_recycle,
                )
        return self._engine

    def get_session_factory(self) -> sessionmaker:
        """
        Get session factory

        Returns:
            SQLAlchemy session factory producing SQLModel sessions
        """
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.get_engine(),
                class_=Session,
                expire_on_commit=False,
                autoflush=False,
            )
        return self._session_factory

    def create_tables(self) -> None:
        """Create all tables (tests and local development; use Alembic elsewhere)"""
        # Register table models on SQLModel.metadata
        from contract_manager.database import models  # noqa: F401

        SQLModel.metadata.create_all(self.get_engine())

    @contextmanager
    def get_session(self) -> Iterator[Session]:
        """
        Get database session with automatic cleanup

        Usage:
            with db_manager.get_session() as session:
                entry = session.get(ContractEntry, address)

        Yields:
            Session instance
        """
        if self.settings.is_in_memory:
            with self._write_lock:
                with self._open_session() as session:
                    yield session
        else:
            with self._open_session() as session:
                yield session

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Run a unit of work under the writer lock

        Everything done through the yielded session is committed together
        when the block exits normally and rolled back if it raises.

        Yields:
            Session instance
        """
        with self._write_lock:
            with self._open_session() as session:
                yield session

    @contextmanager
    def write_lock(self) -> Iterator[None]:
        """
        Hold the writer lock across a transaction and the work that follows it

        Services publish events inside this block so subscribers see changes
        in commit order. The lock is reentrant, so `transaction()` may be
        opened inside it.
        """
        with self._write_lock:
            yield

    @contextmanager
    def _open_session(self) -> Iterator[Session]:
        session_factory = self.get_session_factory()
        with session_factory() as session:
            try:
                yield session
                session.commit()
            except Exception as e:
                logger.debug(f"Rolling back transaction: {e!r}")
                session.rollback()
                raise
            finally:
                session.close()

    def close(self) -> None:
        """Close database connections"""
        if self._engine:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None


# ============================================================================
# Global database manager instance
# ============================================================================

# Singleton instance for application-wide use
_db_manager: Optional[DatabaseManager] = None


def get_db_manager() -> DatabaseManager:
    """
    Get global database manager instance

    Returns:
        DatabaseManager singleton
    """
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager
