"""Bounded decoder for MySQL-style wire fields.

Wraps a ByteSource with typed reads and an optional read quota.

Key design: arm_quota(n) fences off the next n bytes of the source. Record
decoders can read freely inside that window, and a record whose declared
length disagrees with its content fails with QuotaExceeded instead of
running into the next record. The quota counter and the source cursor are
only ever advanced together, by the private _skip_exact/_fill_exact helpers.
"""

import logging

from binwire.codec.bits import (
    assemble_unsigned,
    byte_count_for_bits,
    check_width,
    to_big_endian,
    to_signed,
)
from binwire.codec.length_coded import PrefixKind, classify_lead_byte
from binwire.io.byte_source import ByteArraySource, ByteSource
from binwire.io.decoder_config import DecoderConfig
from binwire.io.exceptions import QuotaExceeded, SourceExhausted
from binwire.models.columns import BitColumn, StringColumn


logger = logging.getLogger(__name__)


class BoundedDecoder:
    """Typed reads over a byte source, limited by an optional quota.

    A quota of 0 means unlimited. The decoder owns its source and keeps no
    lookahead: a read of n bytes takes exactly n bytes from the source.
    """

    __slots__ = ("_source", "_config", "_consumed", "_quota")

    def __init__(self, source: ByteSource, config: DecoderConfig | None = None) -> None:
        self._source = source
        self._config = config if config is not None else DecoderConfig()
        self._consumed = 0
        self._quota = 0

    @classmethod
    def from_bytes(cls, data: bytes, config: DecoderConfig | None = None) -> "BoundedDecoder":
        return cls(ByteArraySource(data), config)

    @property
    def config(self) -> DecoderConfig:
        return self._config

    @property
    def consumed(self) -> int:
        """Bytes read since the quota was last armed."""
        return self._consumed

    @property
    def quota(self) -> int:
        return self._quota

    @property
    def remaining(self) -> int:
        """Bytes left in the quota window, or in the source when no quota is armed."""
        if self._quota > 0:
            return self._quota - self._consumed
        return self._source.available()

    def has_more(self) -> bool:
        """True if the source itself has data left, whatever the quota says."""
        return self._source.available() > 0

    def arm_quota(self, limit: int) -> None:
        """Limit the following reads to *limit* bytes (0 = unlimited)."""
        if limit < 0:
            raise ValueError(f"Quota must be non-negative, got {limit}")
        self._consumed = 0
        self._quota = limit
        logger.debug("Armed quota of %d bytes", limit)

    def close(self) -> None:
        self._source.close()

    def __enter__(self) -> "BoundedDecoder":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # --- quota bookkeeping ---

    def _quota_shortfall(self, size: int) -> int | None:
        """Return the bytes still allowed if *size* would overrun the quota, else None."""
        if self._quota > 0 and self._consumed + size > self._quota:
            return self._quota - self._consumed
        return None

    def _quota_exceeded(self, size: int) -> QuotaExceeded:
        logger.debug(
            "Quota of %d exceeded: %d consumed, %d requested",
            self._quota, self._consumed, size,
        )
        return QuotaExceeded(self._quota, self._consumed, size)

    def _skip_exact(self, size: int) -> None:
        skipped = self._source.skip(size)
        self._consumed += skipped
        if skipped < size:
            logger.debug("Short skip: %d of %d bytes", skipped, size)
            raise SourceExhausted(size, skipped)

    def _fill_exact(self, buffer: bytearray | memoryview, offset: int, size: int) -> None:
        copied = self._source.readinto(buffer, offset, size)
        self._consumed += copied
        if copied < size:
            logger.debug("Short read: %d of %d bytes", copied, size)
            raise SourceExhausted(size, copied)

    # --- primitive reads ---

    def read_byte(self) -> int:
        if self._quota_shortfall(1) is not None:
            raise self._quota_exceeded(1)
        b = self._source.read()
        if b is None:
            raise SourceExhausted(1, 0)
        self._consumed += 1
        return b

    def skip(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"Cannot skip a negative byte count ({size})")
        allowed = self._quota_shortfall(size)
        if allowed is not None:
            self._skip_exact(allowed)
            raise self._quota_exceeded(size)
        self._skip_exact(size)

    def fill(self, buffer: bytearray | memoryview, offset: int, size: int) -> None:
        """Read exactly *size* bytes into buffer[offset:offset + size].

        On a quota overrun the buffer is filled up to the quota boundary
        before QuotaExceeded is raised; its contents are then undefined.
        """
        if size < 0:
            raise ValueError(f"Cannot read a negative byte count ({size})")
        allowed = self._quota_shortfall(size)
        if allowed is not None:
            self._fill_exact(buffer, offset, allowed)
            raise self._quota_exceeded(size)
        self._fill_exact(buffer, offset, size)

    def read_bytes(self, size: int) -> bytes:
        """Read exactly *size* bytes.

        The quota and the source are checked before the buffer is allocated,
        so a corrupt length prefix fails without a huge allocation.
        """
        if size < 0:
            raise ValueError(f"Cannot read a negative byte count ({size})")
        allowed = self._quota_shortfall(size)
        if allowed is not None:
            self._skip_exact(allowed)
            raise self._quota_exceeded(size)
        available = self._source.available()
        if size > available:
            self._skip_exact(available)
            logger.debug("Short read: %d of %d bytes", available, size)
            raise SourceExhausted(size, available)
        buffer = bytearray(size)
        self._fill_exact(buffer, 0, size)
        return bytes(buffer)

    # --- strings ---

    def fixed_string(self, size: int) -> StringColumn:
        return StringColumn(self.read_bytes(size), self._config.charset)

    def null_terminated_string(self) -> StringColumn:
        """Read up to a zero byte. The terminator is consumed, not returned."""
        out = bytearray()
        while (b := self.read_byte()) != 0:
            out.append(b)
        return StringColumn(bytes(out), self._config.charset)

    def length_coded_string(self) -> StringColumn | None:
        size = self.length_coded_int()
        if size is None:
            return None
        return self.fixed_string(size)

    # --- integers ---

    def unsigned_int(self, length: int, little_endian: bool | None = None) -> int:
        """Read a *length*-byte unsigned integer (1-8 bytes)."""
        check_width(length)
        if little_endian is None:
            little_endian = self._config.little_endian
        return assemble_unsigned(self.read_bytes(length), little_endian)

    def signed_int(self, length: int) -> int:
        """Read a little-endian two's-complement integer, sign-extended to int_bits."""
        check_width(length, self._config.int_bits >> 3)
        return to_signed(self.read_bytes(length), self._config.int_bits)

    def signed_long(self, length: int) -> int:
        """Read a little-endian two's-complement integer, sign-extended to long_bits."""
        check_width(length, self._config.long_bits >> 3)
        return to_signed(self.read_bytes(length), self._config.long_bits)

    def length_coded_int(self) -> int | None:
        """Read a length-coded unsigned integer. Returns None for the NULL marker.

        Raises:
            InvalidEncoding: on the reserved 0xFF lead byte.
        """
        prefix = classify_lead_byte(self.read_byte())
        if prefix.kind is PrefixKind.NULL:
            return None
        if prefix.kind is PrefixKind.INLINE:
            return prefix.value
        return self.unsigned_int(prefix.width, little_endian=True)

    # --- bit columns ---

    def read_bits(self, bit_length: int, little_endian: bool = True) -> BitColumn:
        data = self.read_bytes(byte_count_for_bits(bit_length))
        if not little_endian:
            data = to_big_endian(data)
        return BitColumn(bit_length, data)
