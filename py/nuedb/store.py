"""Core Store implementation: a JSON document on disk with per-key retention.

The whole store lives in one document that is re-read at the start of
every operation and rewritten wholesale after every mutation. A single
lock serializes the read-modify-write cycle so concurrent requests on a
threaded server never lose updates.
"""

import contextlib
import json
import logging
import os
import tempfile
import threading
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

from .errors import CorruptDataError, StorageError, ValidationError
from .utils import MS_PER_DAY, calculate_expiration, current_timestamp, is_expired

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_MS = 30 * MS_PER_DAY
DEFAULT_MAX_SIZE = 2 * 1024 * 1024 * 1024

# Field names of a persisted record
EXPIRES_FIELD = 'timeRemove'
VALUE_FIELD = 'data'


def encode_document(mapping: Dict[str, Dict[str, Any]]) -> str:
    """Serialize the full mapping the way it is written to disk."""
    return json.dumps(mapping, indent=2, ensure_ascii=False)


EMPTY_DOCUMENT_SIZE = len(encode_document({}).encode('utf-8'))


class SizeInfo(NamedTuple):
    """Byte counts reported by the dbinfo endpoint."""

    used: int
    remaining: int
    max_size: int


class Store:
    """File-backed key-value store with a sliding retention window.

    Every record expires ``retention_ms`` after it was last written or
    read. Expired records are invisible to all operations and are removed
    from disk by :meth:`sweep`.
    """

    def __init__(self, path: str, retention_ms: int = DEFAULT_RETENTION_MS,
                 max_size: int = DEFAULT_MAX_SIZE,
                 clock: Callable[[], int] = current_timestamp):
        """Initialize the store.

        Args:
            path: Location of the persisted JSON document
            retention_ms: Retention window in milliseconds
            max_size: Advisory capacity in bytes, reported by size_info
            clock: Callable returning the current Unix time in milliseconds
        """
        self.path = path
        self.retention_ms = retention_ms
        self.max_size = max_size
        self._clock = clock
        self._lock = threading.Lock()

    def _now(self, now: Optional[int]) -> int:
        return self._clock() if now is None else now

    def load(self) -> Dict[str, Dict[str, Any]]:
        """Read the persisted document.

        Returns:
            Mapping of key to record, empty if no document exists yet

        Raises:
            CorruptDataError: If the document is not a well-formed store
            StorageError: If the file exists but cannot be read
        """
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = f.read()
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.exception('Failed to read %s', self.path)
            raise StorageError(f'Failed to read data file: {e}') from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error('Data file %s is not valid JSON: %s', self.path, e)
            raise CorruptDataError(f'Data file is corrupt: {e}') from e

        if not isinstance(data, dict):
            logger.error('Data file %s does not hold a JSON object', self.path)
            raise CorruptDataError('Data file is corrupt: expected a JSON object')

        for key, record in data.items():
            if not _is_valid_record(record):
                logger.error('Data file %s has a malformed record for %r', self.path, key)
                raise CorruptDataError(f'Data file is corrupt: malformed record for {key!r}')

        return data

    def save(self, mapping: Dict[str, Dict[str, Any]]) -> None:
        """Write the full mapping to disk.

        The document is written to a temporary file in the same directory
        and moved over the old one, so a reader sees either the previous
        or the new document, never a partial one.

        Raises:
            ValidationError: If a stored value cannot be encoded as UTF-8 JSON
            StorageError: If the document cannot be written
        """
        try:
            document = encode_document(mapping).encode('utf-8')
        except (TypeError, ValueError) as e:
            raise ValidationError(f'Value cannot be stored as JSON: {e}') from e

        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix='.nuedb-', suffix='.tmp', dir=directory)
            with os.fdopen(fd, 'wb') as f:
                f.write(document)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            logger.exception('Failed to write %s', self.path)
            raise StorageError(f'Failed to write data file: {e}') from e
        finally:
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_path)

    def sweep(self, now: Optional[int] = None) -> int:
        """Remove every expired record, persisting only if something changed.

        Returns:
            Number of records removed
        """
        with self._lock:
            now = self._now(now)
            data = self.load()
            expired = [key for key, record in data.items()
                       if is_expired(record[EXPIRES_FIELD], now)]
            if not expired:
                return 0

            for key in expired:
                del data[key]
            self.save(data)

        logger.info('Swept %d expired record(s)', len(expired))
        return len(expired)

    def put(self, key: str, value: Any, now: Optional[int] = None) -> bool:
        """Insert or replace the record for a key and reset its expiry.

        Args:
            key: The key to set
            value: Any JSON-serializable value
            now: Current time in ms (defaults to the store clock)

        Returns:
            True if the key was newly created, False if it was overwritten
        """
        with self._lock:
            now = self._now(now)
            data = self.load()
            existing = data.get(key)
            created = existing is None or is_expired(existing[EXPIRES_FIELD], now)
            data[key] = {
                EXPIRES_FIELD: calculate_expiration(self.retention_ms, now),
                VALUE_FIELD: value,
            }
            self.save(data)

        logger.debug('Wrote %r (created=%s)', key, created)
        return created

    def get(self, key: str, now: Optional[int] = None) -> Tuple[bool, Any]:
        """Get a value by key, refreshing its expiry on success.

        Returns:
            Tuple of (found, value); (False, None) if absent or expired
        """
        with self._lock:
            now = self._now(now)
            data = self.load()
            record = data.get(key)
            if record is None or is_expired(record[EXPIRES_FIELD], now):
                return (False, None)

            record[EXPIRES_FIELD] = calculate_expiration(self.retention_ms, now)
            self.save(data)
            return (True, record[VALUE_FIELD])

    def delete(self, key: str, now: Optional[int] = None) -> bool:
        """Delete a key.

        Returns:
            True if the key existed and was deleted, False otherwise
        """
        with self._lock:
            now = self._now(now)
            data = self.load()
            record = data.get(key)
            if record is None or is_expired(record[EXPIRES_FIELD], now):
                return False

            del data[key]
            self.save(data)

        logger.debug('Deleted %r', key)
        return True

    def keys(self, now: Optional[int] = None) -> List[str]:
        """List live keys in sorted order."""
        with self._lock:
            now = self._now(now)
            data = self.load()
        return sorted(key for key, record in data.items()
                      if not is_expired(record[EXPIRES_FIELD], now))

    def size_info(self) -> SizeInfo:
        """Report the size of the persisted document against the capacity.

        ``used`` is the size of the whole document, including record
        metadata and any expired records not yet swept. ``remaining`` is
        clamped at zero.
        """
        with self._lock:
            try:
                used = os.path.getsize(self.path)
            except FileNotFoundError:
                used = EMPTY_DOCUMENT_SIZE
            except OSError as e:
                logger.exception('Failed to stat %s', self.path)
                raise StorageError(f'Failed to stat data file: {e}') from e

        return SizeInfo(used=used, remaining=max(0, self.max_size - used),
                        max_size=self.max_size)


def _is_valid_record(record: Any) -> bool:
    if not isinstance(record, dict) or VALUE_FIELD not in record:
        return False
    expires = record.get(EXPIRES_FIELD)
    return isinstance(expires, (int, float)) and not isinstance(expires, bool)
