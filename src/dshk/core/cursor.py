"""Big-endian read cursor over a borrowed buffer."""

from __future__ import annotations

import struct

from dshk.core.errors import TruncatedError

_U8 = struct.Struct(">B")
_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")


class ByteCursor:
    """Sequential reader over a ``memoryview``.

    The underlying buffer is never copied; ``remainder()`` hands back a
    narrowed view of it. Truncation errors report ``record_offset``, the
    start of the record being read, rather than the cursor position.
    """

    def __init__(self, view: memoryview, record_offset: int = 0) -> None:
        self._view = view
        self._pos = 0
        self.record_offset = record_offset

    @property
    def position(self) -> int:
        return self._pos

    @property
    def available(self) -> int:
        return len(self._view) - self._pos

    def _require(self, n: int, field: str) -> None:
        if self.available < n:
            raise TruncatedError(field, needed=n, available=self.available, offset=self.record_offset)

    def _unpack(self, fmt: struct.Struct, field: str) -> int:
        self._require(fmt.size, field)
        (value,) = fmt.unpack_from(self._view, self._pos)
        self._pos += fmt.size
        return value

    def read_u8(self, field: str) -> int:
        return self._unpack(_U8, field)

    def read_u16(self, field: str) -> int:
        return self._unpack(_U16, field)

    def read_u32(self, field: str) -> int:
        return self._unpack(_U32, field)

    def take(self, n: int, field: str) -> memoryview:
        self._require(n, field)
        chunk = self._view[self._pos : self._pos + n]
        self._pos += n
        return chunk

    def remainder(self) -> memoryview:
        return self._view[self._pos :]
