class StartupError(Exception):
    """Raised when the service cannot reach a serving state."""


class TimezoneError(Exception):
    pass


class StorageError(Exception):
    pass


class LogQueryError(StorageError):
    pass


class LogRowsError(StorageError):
    pass


class LogScanError(StorageError):
    """A stored row holds a value that cannot be converted."""
