"""
Database connection and session management.

This module provides:
- SQLAlchemy engine and session factory
- Database initialization and table creation
- Session context managers
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from messages_core.config.settings import DatabaseSettings, get_settings
from messages_core.infra.db.models import Base

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Manages database connections and sessions.

    Provides a SQLAlchemy engine and session factory.
    """

    def __init__(self, db_settings: Optional[DatabaseSettings] = None):
        """
        Initialize database manager.

        Args:
            db_settings: Database settings. If None, loads from global settings.
        """
        if db_settings is None:
            db_settings = get_settings().database

        self.settings = db_settings
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker[Session]] = None

    def _create_engine(self) -> Engine:
        """
        Create SQLAlchemy engine.

        Returns:
            Engine: SQLAlchemy engine
        """
        url = self.settings.url
        engine_kwargs: dict = {"echo": self.settings.echo}

        if url.startswith("sqlite"):
            # Workers open sessions from other threads than the one that built the engine.
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url or url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
                # Every session must see the same in-memory database.
                engine_kwargs["poolclass"] = StaticPool

        engine = create_engine(url, **engine_kwargs)

        logger.info(
            "Database engine created",
            extra={"extra_data": {"url": engine.url.render_as_string(hide_password=True)}},
        )

        return engine

    @property
    def engine(self) -> Engine:
        """
        Get or create engine.

        Returns:
            Engine: SQLAlchemy engine
        """
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    @property
    def session_factory(self) -> sessionmaker[Session]:
        """
        Get or create session factory.

        Returns:
            sessionmaker: Session factory
        """
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.engine,
                class_=Session,
                expire_on_commit=False,
                autoflush=False,
            )
        return self._session_factory

    def init_db(self, drop_existing: bool = False) -> None:
        """
        Initialize database tables.

        Args:
            drop_existing: If True, drops all existing tables before creating new ones.
                          WARNING: This will delete all data!
        """
        with self.engine.begin() as conn:
            if drop_existing:
                logger.warning("Dropping all existing database tables")
                Base.metadata.drop_all(conn)

            logger.info("Creating database tables")
            Base.metadata.create_all(conn)

        logger.info("Database initialization completed")

    def close(self) -> None:
        """Close database connections and dispose of the engine."""
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Database engine disposed")
            self._engine = None
            self._session_factory = None

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Context manager for database sessions.

        Commits on success and rolls back if the block raises.

        Yields:
            Session: SQLAlchemy session

        Example:
            with db_manager.session() as session:
                result = session.execute(query)
        """
        session = self.session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


# Global database manager instance
_db_manager: Optional[DatabaseManager] = None


def get_db_manager() -> DatabaseManager:
    """
    Get or create global database manager instance.

    Returns:
        DatabaseManager: Global database manager
    """
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


def init_database(drop_existing: bool = False) -> None:
    """
    Initialize database (create tables).

    Args:
        drop_existing: If True, drops all existing tables before creating new ones.
    """
    get_db_manager().init_db(drop_existing=drop_existing)


def close_database() -> None:
    """Close database connections."""
    global _db_manager
    if _db_manager is not None:
        _db_manager.close()
        _db_manager = None


@contextmanager
def get_db_session() -> Iterator[Session]:
    """
    Context manager to get a database session for standalone usage.

    Yields:
        Session: SQLAlchemy session

    Example:
        with get_db_session() as session:
            keyword = session.get(BlockedKeyword, 1)
    """
    with get_db_manager().session() as session:
        yield session
