"""Exception types raised by the store and the HTTP layer.

Every error carries the HTTP status code the server answers with, so the
Flask error handler can render any of them without a lookup table.
"""


class NueDBError(Exception):
    """Base class for all nuedb errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(NueDBError):
    """A request violated an input constraint (missing field, size limit)."""

    status_code = 400


class NotFoundError(NueDBError):
    """The requested key does not exist."""

    status_code = 404


class CorruptDataError(NueDBError):
    """The persisted document could not be parsed."""


class StorageError(NueDBError):
    """Reading or writing the persisted document failed."""
