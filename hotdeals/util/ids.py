"""Time-ordered identifier generation.

Identifiers are UUIDv7 values: a 48-bit Unix millisecond timestamp, a 12-bit
sequence that keeps ids monotonic within one millisecond, and 62 random bits.
Sorting ids sorts entities by creation time.
"""

import secrets
import threading
import time
from uuid import UUID

_lock = threading.Lock()
_last_ms = 0
_sequence = 0

_SEQUENCE_MAX = 0xFFF


def new_id() -> UUID:
    """Generate a new UUIDv7.

    Returns:
        Unique identifier ordered after every id previously returned
        by this process
    """
    global _last_ms, _sequence

    with _lock:
        now_ms = time.time_ns() // 1_000_000
        if now_ms > _last_ms:
            _last_ms = now_ms
            _sequence = secrets.randbits(11)  # leave headroom for increments
        else:
            _sequence += 1
            if _sequence > _SEQUENCE_MAX:
                # Sequence exhausted: borrow the next millisecond
                _last_ms += 1
                _sequence = 0
        timestamp_ms = _last_ms
        sequence = _sequence

    value = (timestamp_ms & 0xFFFF_FFFF_FFFF) << 80
    value |= 0x7 << 76  # version
    value |= sequence << 64
    value |= 0b10 << 62  # RFC 4122 variant
    value |= secrets.randbits(62)
    return UUID(int=value)


def id_timestamp_ms(value: UUID) -> int:
    """Extract the millisecond timestamp embedded in a UUIDv7."""
    return value.int >> 80
