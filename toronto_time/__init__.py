import logging
from flask import Flask
from flask_cors import CORS
from sqlalchemy.orm import sessionmaker

from toronto_time.config import Config
from toronto_time.db import open_database
from toronto_time.exceptions import StartupError
from toronto_time.routes.time_log import bp as time_log_bp

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(log_file: str, level: str = "info") -> None:
    """
    Append human-readable lines to log_file. Only the first call attaches a handler.

    Raises:
        StartupError: log_file cannot be opened for appending.
    """
    try:
        handler = logging.FileHandler(log_file, mode="a")
    except OSError as e:
        raise StartupError(f"Error opening log file: {e}") from e
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(
        level=logging.DEBUG if level == "debug" else logging.INFO,
        handlers=[handler],
    )
    if handler not in logging.getLogger().handlers:
        handler.close()


def create_app(session_factory: sessionmaker | None = None, config: dict | None = None) -> Flask:
    """
    Build the Flask app.

    Args:
        session_factory: an already opened database; when omitted one is
            opened from DATABASE_URL and pinged.
        config: overrides applied on top of Config.

    Raises:
        StartupError: the log file could not be opened, or the database could
            not be opened or pinged.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if config:
        app.config.update(config)

    configure_logging(app.config["LOG_FILE"], app.config["LOG_LEVEL"])

    if session_factory is None:
        session_factory = open_database(app.config["DATABASE_URL"])
    app.extensions["time_log_db"] = session_factory

    CORS(app, resources={
        r"/current-time": {"origins": "*", "methods": ["GET", "POST", "OPTIONS"]},
        r"/logs": {"origins": "*", "methods": ["GET", "POST", "OPTIONS"]},
    })

    app.register_blueprint(time_log_bp)

    @app.get("/health")
    def health():
        return {"ok": True}

    return app
