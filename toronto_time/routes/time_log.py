from flask import Blueprint, Response, current_app, jsonify
import logging

from toronto_time.config import TORONTO_TIMEZONE
from toronto_time.exceptions import (
    LogQueryError,
    LogRowsError,
    LogScanError,
    StorageError,
    TimezoneError,
)
from toronto_time.services.time_log_service import (
    current_time,
    fetch_logs,
    format_timestamp,
    log_time,
    serialize_logs,
)

bp = Blueprint("time_log", __name__)
logger = logging.getLogger(__name__)

# OPTIONS is added by Flask
METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


def _session_factory():
    return current_app.extensions["time_log_db"]


def _error(message: str):
    logger.error(message)
    return Response(message + "\n", status=500, mimetype="text/plain")


@bp.route("/current-time", methods=METHODS)
def current_time_view():
    """Record the current Toronto time and echo it back."""
    try:
        now = current_time(TORONTO_TIMEZONE)
    except TimezoneError as e:
        return _error(f"Could not load timezone: {e}")

    try:
        log_time(_session_factory(), now)
    except StorageError as e:
        return _error(f"Database error: {e}")

    try:
        return jsonify({
            "current_time": format_timestamp(now),
            "timezone": TORONTO_TIMEZONE,
        })
    except (TypeError, ValueError) as e:
        return _error(f"Failed to encode response: {e}")


@bp.route("/logs", methods=METHODS)
def logs_view():
    """List every stored time_log row. Not related to the service's own log file."""
    try:
        entries = fetch_logs(_session_factory())
    except LogQueryError as e:
        return _error(f"Failed to retrieve logs: {e}")
    except LogScanError as e:
        return _error(f"Failed to scan log: {e}")
    except LogRowsError as e:
        return _error(f"Error processing rows: {e}")

    try:
        logs = serialize_logs(entries)
    except (AttributeError, TypeError, ValueError) as e:
        return _error(f"Failed to scan log: {e}")

    try:
        return jsonify(logs)
    except (TypeError, ValueError) as e:
        return _error(f"Failed to encode logs: {e}")
