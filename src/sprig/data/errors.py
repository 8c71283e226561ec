"""Data layer error hierarchy."""

from sprig.errors import SprigError


class DataError(SprigError):
    """Base for all sprig.data errors."""


class DriverNotInstalledError(DataError):
    """Raised when the required database driver is not installed."""


class QueryError(DataError):
    """Raised when a SQL statement fails.

    Models re-raise driver failures as ``QueryError`` with a short
    context prefix (``"Error creating record: ..."``); the original
    exception is kept as ``__cause__``.
    """
