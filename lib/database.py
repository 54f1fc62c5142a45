# =============================================================================
# lib/database.py - Relational Store Handle
# =============================================================================
# This module owns the SQLAlchemy engine and session factory. One Database
# instance is built by the app factory at process start, stored on
# app.state, and handed to every request through a dependency. Nothing in
# the codebase reaches for a module-level engine.
#
# It also classifies driver-level errors (duplicate key, foreign key, ...)
# so services and the error handlers can react by kind instead of parsing
# driver messages themselves.
#
# Usage:
#   from lib.database import Database
#   db = Database("sqlite+pysqlite:///:memory:")
#   db.connect(max_attempts=5, delay=2.0)
#   with db.session_factory() as session:
#       ...
# =============================================================================

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator
from enum import Enum
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import DBAPIError, NoResultFound, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import ObjectDeletedError, StaleDataError
from sqlalchemy.pool import StaticPool

from lib.tables import Base

logger = logging.getLogger(__name__)


class DatabaseUnavailableError(Exception):
    """
    Raised when the store cannot be reached after all startup attempts.

    The lifespan handler turns this into a process exit.
    """

    def __init__(self, url: str, attempts: int, error: str | None = None):
        message = f"Could not connect to database at {url} after {attempts} attempt(s)"
        if error:
            message += f": {error}"
        super().__init__(message)
        self.url = url
        self.attempts = attempts
        self.error = error


# =============================================================================
# Store Error Classification
# =============================================================================

class StoreErrorKind(str, Enum):
    """Driver-independent categories of store failures."""
    UNIQUE_VIOLATION = "unique_violation"
    FOREIGN_KEY_VIOLATION = "foreign_key_violation"
    NOT_NULL_VIOLATION = "not_null_violation"
    CHECK_VIOLATION = "check_violation"
    ROW_NOT_FOUND = "row_not_found"
    UNKNOWN = "unknown"


# PostgreSQL SQLSTATE codes (psycopg exposes .sqlstate, psycopg2 .pgcode)
_SQLSTATE_KINDS = {
    "23505": StoreErrorKind.UNIQUE_VIOLATION,
    "23503": StoreErrorKind.FOREIGN_KEY_VIOLATION,
    "23502": StoreErrorKind.NOT_NULL_VIOLATION,
    "23514": StoreErrorKind.CHECK_VIOLATION,
}

# SQLite only reports the constraint in the message text
_MESSAGE_KINDS = (
    ("UNIQUE constraint failed", StoreErrorKind.UNIQUE_VIOLATION),
    ("FOREIGN KEY constraint failed", StoreErrorKind.FOREIGN_KEY_VIOLATION),
    ("NOT NULL constraint failed", StoreErrorKind.NOT_NULL_VIOLATION),
    ("CHECK constraint failed", StoreErrorKind.CHECK_VIOLATION),
)


def classify_store_error(exc: BaseException) -> StoreErrorKind:
    """
    Map a SQLAlchemy/driver exception to a StoreErrorKind.

    A row that disappeared between a read and a write (NoResultFound,
    StaleDataError, ObjectDeletedError) is ROW_NOT_FOUND.
    """
    if isinstance(exc, (NoResultFound, StaleDataError, ObjectDeletedError)):
        return StoreErrorKind.ROW_NOT_FOUND

    if isinstance(exc, DBAPIError) and exc.orig is not None:
        orig = exc.orig
        sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
        if sqlstate in _SQLSTATE_KINDS:
            return _SQLSTATE_KINDS[sqlstate]

        message = str(orig)
        for pattern, kind in _MESSAGE_KINDS:
            if pattern in message:
                return kind

    return StoreErrorKind.UNKNOWN


def store_error_code(exc: BaseException) -> str | None:
    """Raw driver code for diagnostics (never shown in production)."""
    orig = getattr(exc, "orig", None)
    if orig is None:
        return None
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None) or type(orig).__name__


# =============================================================================
# Database Handle
# =============================================================================

class Database:
    """
    Explicitly constructed handle around a SQLAlchemy engine.

    Lifecycle (owned by the application lifespan):
        connect()   - verify the store answers, retrying at startup
        create_all()- create missing tables
        session()   - per-request session generator
        dispose()   - close pooled connections on shutdown
    """

    def __init__(self, url: str, *, echo: bool = False, **engine_options: Any):
        if url.startswith("sqlite"):
            engine_options.setdefault("connect_args", {"check_same_thread": False})
            if ":memory:" in url or url.rstrip("/").endswith("sqlite:"):
                # One shared connection so every session sees the same in-memory DB
                engine_options.setdefault("poolclass", StaticPool)
        else:
            engine_options.setdefault("pool_pre_ping", True)

        self.engine = create_engine(url, echo=echo, **engine_options)
        self.session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

    @property
    def safe_url(self) -> str:
        """Connection URL with the password masked, for logging."""
        return self.engine.url.render_as_string(hide_password=True)

    def ping(self) -> None:
        """Run a trivial query; raises SQLAlchemyError if the store is down."""
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def is_healthy(self) -> bool:
        try:
            self.ping()
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            return False

    def connect(
        self,
        max_attempts: int = 5,
        delay: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Verify connectivity, retrying a fixed number of times with a fixed delay.

        Raises:
            DatabaseUnavailableError: If every attempt fails
        """
        last_error: str | None = None

        for attempt in range(1, max_attempts + 1):
            logger.info(f"Connecting to database (attempt {attempt}/{max_attempts})...")
            try:
                self.ping()
                logger.info(f"Connected to database at {self.safe_url}")
                return
            except SQLAlchemyError as e:
                last_error = str(e)
                logger.warning(f"Connection attempt {attempt} failed: {e}")
                if attempt < max_attempts:
                    logger.info(f"Retrying in {delay} seconds...")
                    sleep(delay)

        logger.error("All database connection attempts failed")
        raise DatabaseUnavailableError(self.safe_url, max_attempts, last_error)

    def create_all(self) -> None:
        Base.metadata.create_all(self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(self.engine)

    def session(self) -> Iterator[Session]:
        """
        Yield a session and always close it.

        Usage as a FastAPI dependency:
            db: Session = Depends(get_db)
        """
        session = self.session_factory()
        try:
            yield session
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Disconnected from the database")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
