# toronto_time/services/time_log_service.py
"""
Reading and writing the time_log table.

Every call opens its own session from the injected factory, so concurrent
requests never share a Session.
"""
from datetime import datetime, timezone
import logging

import pytz
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from toronto_time.config import TORONTO_TIMEZONE, TIMESTAMP_FORMAT
from toronto_time.exceptions import (
    LogQueryError,
    LogRowsError,
    LogScanError,
    StorageError,
    TimezoneError,
)
from toronto_time.models import TimeLog

logger = logging.getLogger(__name__)


def current_time(tz_name: str = TORONTO_TIMEZONE) -> datetime:
    """Return the current instant in tz_name, truncated to the second."""
    try:
        tz = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError as e:
        raise TimezoneError(f"unknown time zone {e}") from e

    return datetime.now(tz).replace(microsecond=0)


def ensure_naive_utc(dt):
    """Convert datetime to timezone-naive UTC"""
    if dt is None:
        return None
    if dt.tzinfo is not None:
        return dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def format_timestamp(dt: datetime) -> str:
    return dt.strftime(TIMESTAMP_FORMAT)


def log_time(session_factory: sessionmaker, timestamp: datetime) -> TimeLog:
    """
    Append one row to time_log.

    Args:
        session_factory: sessionmaker bound to the time_log database
        timestamp: the observed instant; aware values are stored as naive UTC

    Returns:
        The persisted TimeLog with its storage-assigned id.

    Raises:
        StorageError: the insert or commit failed. The driver message is kept.
    """
    try:
        with session_factory() as db:
            entry = TimeLog(timestamp=ensure_naive_utc(timestamp))
            db.add(entry)
            db.flush()
            # detached before commit so the id is not re-read with a SELECT
            db.expunge(entry)
            db.commit()
            logger.debug(f"Logged time {entry.timestamp} as id {entry.id}")
            return entry
    except SQLAlchemyError as e:
        raise StorageError(f"failed to insert time into database: {e}") from e


def fetch_logs(session_factory: sessionmaker) -> list[TimeLog]:
    """
    All time_log rows in the order storage returns them.

    Raises:
        LogQueryError: the SELECT could not be issued.
        LogRowsError: the driver failed while rows were being read.
        LogScanError: a stored value could not be converted.
    """
    with session_factory() as db:
        try:
            result = db.execute(select(TimeLog))
        except SQLAlchemyError as e:
            raise LogQueryError(str(e)) from e
        except (ValueError, TypeError) as e:
            raise LogScanError(str(e)) from e

        try:
            return list(result.scalars())
        except SQLAlchemyError as e:
            raise LogRowsError(str(e)) from e
        except (ValueError, TypeError) as e:
            raise LogScanError(str(e)) from e


def serialize_logs(entries: list[TimeLog]) -> list[dict]:
    return [
        {"id": int(entry.id), "timestamp": format_timestamp(entry.timestamp)}
        for entry in entries
    ]
