"""Errors raised while decoding a packet.

DecodeError covers the recoverable, record-level failures (quota overrun,
truncated source). InvalidEncoding is kept outside that hierarchy: it means
the stream is corrupt or the caller is out of sync, and should not be caught
by the same handler that skips a malformed record.
"""


class DecodeError(ValueError):
    """Base class for structural decode failures."""


class QuotaExceeded(DecodeError):
    """A read would consume more bytes than the armed quota allows."""

    def __init__(self, quota: int, consumed: int, requested: int) -> None:
        super().__init__(
            f"Read of {requested} bytes after {consumed} consumed "
            f"would exceed quota of {quota}"
        )
        self.quota = quota
        self.consumed = consumed
        self.requested = requested


class SourceExhausted(DecodeError):
    """The underlying byte source ran out before a read was satisfied."""

    def __init__(self, requested: int, transferred: int) -> None:
        super().__init__(
            f"Source exhausted: requested {requested} bytes, got {transferred}"
        )
        self.requested = requested
        self.transferred = transferred


class InvalidEncoding(RuntimeError):
    """A reserved lead byte was found where a length-coded integer was expected."""

    def __init__(self, lead_byte: int) -> None:
        super().__init__(f"Invalid length-coded integer lead byte {lead_byte:#04x}")
        self.lead_byte = lead_byte
