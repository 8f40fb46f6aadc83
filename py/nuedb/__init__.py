"""nuedb - A JSON key-value store over HTTP with sliding expiry."""

from .config import Settings
from .errors import CorruptDataError, NotFoundError, NueDBError, StorageError, ValidationError
from .server import create_app
from .store import SizeInfo, Store

__all__ = [
    'CorruptDataError',
    'NotFoundError',
    'NueDBError',
    'Settings',
    'SizeInfo',
    'StorageError',
    'Store',
    'ValidationError',
    'create_app',
]
