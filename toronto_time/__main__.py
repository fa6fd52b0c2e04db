import logging
import sys

from toronto_time import create_app
from toronto_time.db import close_database
from toronto_time.exceptions import StartupError

logger = logging.getLogger("toronto_time")


def main() -> int:
    try:
        app = create_app()
    except StartupError as e:
        logger.critical(str(e))
        return 1

    host, port = app.config["HOST"], app.config["PORT"]
    try:
        logger.info(f"Starting server on {host}:{port}...")
        app.run(host=host, port=port, threaded=True)
    except OSError as e:
        logger.critical(f"Error starting server: {e}")
        return 1
    except SystemExit as e:
        # werkzeug reports a failed bind on stderr and calls sys.exit(1)
        logger.critical(f"Error starting server: could not listen on {host}:{port} (exit {e.code})")
        return 1
    finally:
        close_database(app.extensions["time_log_db"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
