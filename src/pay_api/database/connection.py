"""Database configuration and connection setup.

The SQLModel engine is created lazily, after settings have been loaded and
possibly overridden by CLI flags, so importing this module never requires
``PAY_API_DATABASE_URL`` to be set. In Lambda the engine survives across warm
invocations of the same container.
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy.engine import make_url
from sqlmodel import Session, create_engine, text
from tenacity import before_sleep_log, retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from pay_api.settings import get_settings

_engine = None  # type: ignore[var-annotated]


def _build_engine():  # type: ignore[return-value]
    """Create and return a new engine from current settings.

    Raises:
        ValueError: if database URL not configured.
    """
    settings = get_settings()
    database_url = settings.database_url
    if not database_url:
        raise ValueError("Database URL missing: provide PAY_API_DATABASE_URL env or --database-url CLI argument")

    if make_url(database_url).get_backend_name() == "sqlite":
        # Local development against a file database
        engine_local = create_engine(database_url, echo=settings.sql_log, connect_args={"check_same_thread": False})
    else:
        engine_local = create_engine(
            database_url,
            pool_pre_ping=True,
            pool_recycle=3600,
            pool_size=5,
            max_overflow=10,
            pool_timeout=30,
            echo=settings.sql_log,
            connect_args={"connect_timeout": 10},
        )
    logger.info("SQL echo is {}", "enabled" if settings.sql_log else "disabled")
    return engine_local


def get_engine():  # type: ignore[return-value]
    """Return a singleton engine instance, creating it lazily."""
    global _engine
    if _engine is None:
        _engine = _build_engine()
    return _engine


def dispose_db() -> None:
    """Dispose of the database engine if it was created."""
    global _engine
    if _engine is not None:
        logger.info("Closing database connections")
        _engine.dispose()
        _engine = None


@retry(
    stop=stop_after_attempt(5),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    reraise=True,
    retry=retry_if_exception_type(Exception),
    before_sleep=before_sleep_log(logger, "DEBUG"),
)
def _create_session() -> Session:
    """Create a database session with retry logic.

    The engine is disposed and recreated on each failed attempt, which covers
    a database that was not ready when the engine was first built.

    Returns:
        Session: A new database session

    Raises:
        Exception: If all retry attempts fail
    """
    global _engine
    try:
        session = Session(get_engine())
        session.execute(text("SELECT 1"))
        return session
    except Exception as e:
        if _engine is not None:
            logger.warning("Database connection failed, disposing engine for retry...")
            _engine.dispose()
            _engine = None
        logger.error("Failed to create database session: {}", e)
        raise


@contextmanager
def borrow_db_session() -> Generator[Session]:
    """Context manager lending a database session for one unit of work.

    Route handlers open it once the request body has validated, so field
    errors never wait on the database.

    Example:
        with borrow_db_session() as session:
            session.exec(text("SELECT 1"))
    """
    session = _create_session()
    session_id = id(session)

    try:
        yield session
    except Exception as e:  # noqa: BLE001
        logger.error("Error during database session {}: {}", session_id, e)
        raise
    finally:
        session.close()
        logger.trace("Database session {} closed and resources released", session_id)


def is_healthy(session: Session) -> dict[str, Any]:
    """Check if the database connection is healthy.

    Args:
        session: The database session to use for the health check.

    Returns:
        A dictionary containing the database health status and connection info.
    """
    try:
        session.exec(text("SELECT 1")).one()
        return {
            "status": "healthy",
            "connection": "active",
        }
    except Exception as e:
        logger.error("Database health check failed: {}", e)
        return {
            "status": "unhealthy",
            "error": str(e),
            "connection": "failed",
        }
