"""Byte sources the decoder pulls from.

The decoder only needs a sequential cursor: single-byte reads, bulk reads
into a caller buffer, skips, and a remaining-byte count. ByteArraySource is
the in-memory implementation used for one packet at a time.
"""

from typing import Protocol


class ByteSource(Protocol):
    def read(self) -> int | None:
        """Return the next byte (0-255), or None at end of data."""
        ...

    def readinto(self, buffer: bytearray | memoryview, offset: int, length: int) -> int:
        """Copy up to *length* bytes into buffer[offset:]; return the count copied."""
        ...

    def skip(self, n: int) -> int:
        """Advance up to *n* bytes; return how many were actually skipped."""
        ...

    def available(self) -> int:
        ...

    def close(self) -> None:
        ...


class ByteArraySource:
    """Sequential cursor over an in-memory buffer.

    The buffer is wrapped in a memoryview, not copied. *offset* and *end*
    bound the region the cursor may visit.
    """

    __slots__ = ("_data", "_pos", "_end", "_closed")

    def __init__(self, data: bytes | bytearray | memoryview, offset: int = 0,
                 end: int | None = None) -> None:
        self._data = memoryview(data)
        self._end = end if end is not None else len(self._data)
        if not 0 <= offset <= self._end <= len(self._data):
            raise ValueError(
                f"Invalid region [{offset}, {self._end}) for buffer of {len(self._data)} bytes"
            )
        self._pos = offset
        self._closed = False

    @property
    def position(self) -> int:
        return self._pos

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed byte source")

    def read(self) -> int | None:
        self._check_open()
        if self._pos >= self._end:
            return None
        b = self._data[self._pos]
        self._pos += 1
        return b

    def readinto(self, buffer: bytearray | memoryview, offset: int, length: int) -> int:
        self._check_open()
        if length < 0 or offset < 0 or offset + length > len(buffer):
            raise ValueError(
                f"Region [{offset}, {offset + length}) does not fit buffer of {len(buffer)} bytes"
            )
        count = min(length, self._end - self._pos)
        buffer[offset : offset + count] = self._data[self._pos : self._pos + count]
        self._pos += count
        return count

    def skip(self, n: int) -> int:
        self._check_open()
        if n <= 0:
            return 0
        count = min(n, self._end - self._pos)
        self._pos += count
        return count

    def available(self) -> int:
        self._check_open()
        return self._end - self._pos

    def close(self) -> None:
        self._closed = True
