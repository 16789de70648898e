import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool, QueuePool
from sqlmodel import create_engine

from iar_uploader.core.config import Settings, get_settings
from iar_uploader.core.constants import (
    CONNECTIVITY_FAILED_MESSAGE,
    CONNECTIVITY_OK_MESSAGE,
    CONNECTIVITY_QUERY,
)
from iar_uploader.core.exceptions import AppException, DatabaseError
from iar_uploader.core.logging import get_logger

logger = get_logger(__name__)


class DatabaseManager:
    """
    Process-wide holder of the destination engine.

    The engine is created on first use, under a lock, and reused by every request
    afterwards. A failed creation is not remembered, so the next call tries again.
    The engine's pool opens connections on demand, which gives the same
    behaviour for connection attempts.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings
        self._engine: Optional[Engine] = None
        self._lock = threading.Lock()

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    def _get_database_config(self, url) -> dict:
        """Engine keyword arguments for the configured backend."""
        settings = self.settings
        backend = url.split(":", 1)[0] if isinstance(url, str) else url.drivername

        if backend.startswith("sqlite"):
            return {
                "echo": settings.database_echo,
                "connect_args": {"check_same_thread": False},
                "poolclass": NullPool,
            }

        config = {
            "echo": settings.database_echo,
            "poolclass": QueuePool,
            "pool_size": settings.database_pool_size,
            "pool_timeout": settings.database_pool_timeout,
            "pool_recycle": settings.database_pool_recycle,
            "pool_pre_ping": True,
        }
        if backend.startswith("mssql+pyodbc"):
            # executemany becomes a single bulk round trip
            config["fast_executemany"] = True
        return config

    def _create_engine(self) -> Engine:
        url = self.settings.get_database_url()
        try:
            engine = create_engine(url, **self._get_database_config(url))
        except Exception as e:
            logger.error("Failed to create database engine: %s", e)
            raise DatabaseError(f"Database engine creation failed: {e}", operation="create_engine") from e

        logger.info("Database engine created: %s", engine.url.render_as_string(hide_password=True))
        return engine

    def get_engine(self) -> Engine:
        """Get or create the shared engine."""
        if self._engine is None:
            with self._lock:
                if self._engine is None:  # Double-check locking
                    self._engine = self._create_engine()
        return self._engine

    @contextmanager
    def begin(self) -> Iterator[Connection]:
        """
        Connection inside one transaction: commit on success, rollback on error.

        Driver errors are re-raised as `DatabaseError`.
        """
        engine = self.get_engine()
        try:
            with engine.begin() as connection:
                yield connection
        except AppException:
            raise
        except SQLAlchemyError as e:
            logger.error("Database transaction rolled back: %s", e)
            raise DatabaseError(_error_message(e), operation="transaction") from e

    def health_check(self) -> Tuple[bool, str]:
        """Run the trivial round-trip query. Returns `(ok, message)`; never raises."""
        try:
            engine = self.get_engine()
            with engine.connect() as connection:
                connection.execute(text(CONNECTIVITY_QUERY)).scalar()
        except AppException as e:
            return False, e.message or CONNECTIVITY_FAILED_MESSAGE
        except Exception as e:
            logger.warning("Database health check failed: %s", e)
            return False, _error_message(e) or CONNECTIVITY_FAILED_MESSAGE
        return True, CONNECTIVITY_OK_MESSAGE

    def dispose(self) -> None:
        """Close pooled connections and forget the engine."""
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
                logger.debug("Database engine disposed")
            self._engine = None


def _error_message(error: Exception) -> str:
    """Driver message without SQLAlchemy's statement and background link."""
    original = getattr(error, "orig", None)
    if original is not None and str(original):
        return str(original)
    return str(error)


# Global database manager instance
database_manager = DatabaseManager()


def get_database_manager() -> DatabaseManager:
    """FastAPI dependency for the shared database manager."""
    return database_manager
