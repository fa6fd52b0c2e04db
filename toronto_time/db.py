# toronto_time/db.py
import logging
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from toronto_time.exceptions import StartupError

logger = logging.getLogger(__name__)


def build_engine(database_url: str, **kwargs) -> Engine:
    """Create the engine for the time_log database without connecting."""
    if not database_url:
        raise StartupError("DATABASE_URL is not set")
    try:
        return create_engine(database_url, pool_pre_ping=True, echo=False, **kwargs)
    except (SQLAlchemyError, ImportError, ValueError) as e:
        raise StartupError(f"Error connecting to the database: {e}") from e


def ping(engine: Engine) -> None:
    """Round-trip SELECT 1 against the engine."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise StartupError(f"Database connection failed: {e}") from e


def open_database(database_url: str, **kwargs) -> sessionmaker:
    """
    Build the engine, verify it is reachable and return a session factory.

    Raises:
        StartupError: the URL is invalid or the database does not answer.
    """
    engine = build_engine(database_url, **kwargs)
    try:
        ping(engine)
    except StartupError:
        engine.dispose()
        raise

    logger.info("Connected to database successfully!")
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def close_database(session_factory: sessionmaker) -> None:
    engine = session_factory.kw.get("bind")
    if engine is None:
        return
    try:
        engine.dispose()
    except SQLAlchemyError as e:
        logger.error(f"Error closing the database connection: {e}")
