"""
Database Connection Management for FastAPI Backend

SQLAlchemy engine and sessions over psycopg2. Routes issue parameterized SQL
through `sqlalchemy.text()` on the session handed out by `get_db`.
Reads configuration from environment variables (see config.py).
"""

import logging
from typing import Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from config import get_database_url, get_connect_timeout, describe_database_url

logger = logging.getLogger(__name__)

# Initialize SQLAlchemy engine and session factory
_engine: Optional[Engine] = None
_SessionLocal = None


def get_engine() -> Engine:
    """
    Get or create the SQLAlchemy engine.

    Returns:
        SQLAlchemy engine instance
    """
    global _engine
    if _engine is None:
        database_url = get_database_url()
        _engine = create_engine(
            database_url,
            pool_pre_ping=True,  # Verify connections before using
            pool_size=5,
            max_overflow=10,
            connect_args={"connect_timeout": get_connect_timeout()},
            echo=False
        )
        logger.info(f"DB: connecting to {describe_database_url(database_url)}")
    return _engine


def get_session_factory():
    """
    Get or create the SQLAlchemy session factory.

    Returns:
        Session factory (sessionmaker instance)
    """
    global _SessionLocal
    if _SessionLocal is None:
        engine = get_engine()
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a database session.

    Usage:
        @router.get("/items")
        async def get_items(db: Session = Depends(get_db)):
            rows = db.execute(text("SELECT ...")).mappings().all()

    Yields:
        SQLAlchemy Session instance

    The session is closed after the request completes; uncommitted work is
    rolled back.
    """
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ping(db: Session):
    """Return the database server's current time."""
    return db.execute(text("SELECT now() AS now")).scalar_one()


def close_engine() -> None:
    """
    Close the SQLAlchemy engine.
    Should be called on application shutdown.
    """
    global _engine, _SessionLocal
    if _engine:
        try:
            _engine.dispose()
            logger.info("SQLAlchemy engine closed")
        except Exception:
            logger.exception("Error closing engine")
        finally:
            _engine = None
            _SessionLocal = None
