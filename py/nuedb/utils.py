"""Helper utilities for nuedb."""

import json
import time
from typing import Any

MS_PER_DAY = 24 * 60 * 60 * 1000
BYTES_PER_MB = 1024 * 1024


def current_timestamp() -> int:
    """Get current Unix timestamp in milliseconds."""
    return int(time.time() * 1000)


def is_expired(expiration_time: int, now: int) -> bool:
    """Check if a record has expired.

    Args:
        expiration_time: Unix timestamp (ms) when the record expires
        now: Current Unix timestamp (ms)

    Returns:
        True if the record has expired, False otherwise
    """
    return expiration_time <= now


def calculate_expiration(retention_ms: int, now: int) -> int:
    """Calculate expiration timestamp from a retention window."""
    return now + retention_ms


def serialized_size(value: Any) -> int:
    """Byte length of the compact UTF-8 JSON encoding of a value.

    Raises:
        ValueError: If the value has no strict JSON encoding (NaN, Infinity,
            lone surrogates)
    """
    encoded = json.dumps(value, ensure_ascii=False, allow_nan=False, separators=(',', ':'))
    return len(encoded.encode('utf-8'))


def to_mb(size: int) -> str:
    """Format a byte count as megabytes with two decimals."""
    return f'{size / BYTES_PER_MB:.2f}'


def format_limit(size: int) -> str:
    """Format a size limit in megabytes, dropping decimals for whole numbers."""
    mb = size / BYTES_PER_MB
    return f'{mb:.0f}' if mb.is_integer() else f'{mb:.2f}'
