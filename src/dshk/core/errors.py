"""Decode error taxonomy.

There is no "invalid field" error: every bit pattern in a header word and
every payload byte value is a legal result. Decoding can only fail because
bytes are missing.
"""

from __future__ import annotations


class DecodeError(Exception):
    """Base class for failures to decode a record.

    ``offset`` is the position, in the buffer handed to the decoder, of the
    first byte of the record that could not be decoded.
    """

    def __init__(self, message: str, offset: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset

    def __str__(self) -> str:
        return f"{self.message} (offset {self.offset})"


class TruncatedError(DecodeError):
    """Fewer bytes remain than a fixed-size field requires."""

    def __init__(self, field: str, needed: int, available: int, offset: int = 0) -> None:
        super().__init__(
            f"Truncated record: {field} requires {needed} bytes, {available} available",
            offset,
        )
        self.field = field
        self.needed = needed
        self.available = available


class IncompleteError(DecodeError):
    """The primary header declares more bytes than the buffer holds.

    ``needed`` is the exact number of missing bytes, so a caller that is
    still receiving data knows how much more to wait for.
    """

    def __init__(self, needed: int, declared_length: int, offset: int = 0) -> None:
        super().__init__(
            f"Incomplete record: length word declares {declared_length} bytes "
            f"after the primary header, {needed} more needed",
            offset,
        )
        self.needed = needed
        self.declared_length = declared_length
