"""Length-coded integers: the wire format's variable-width unsigned encoding.

Lead byte layout:
  0..250  the value itself
  251     NULL
  252     value in the next 2 bytes (little-endian)
  253     value in the next 3 bytes
  254     value in the next 8 bytes
  255     reserved, never valid here
"""

from dataclasses import dataclass
from enum import Enum

from binwire.io.exceptions import InvalidEncoding


NULL_MARKER = 251
MAX_INLINE = 250

_WIDE_WIDTHS: dict[int, int] = {
    252: 2,
    253: 3,
    254: 8,
}


class PrefixKind(Enum):
    INLINE = "inline"   # value carried in the lead byte
    NULL = "null"       # no value
    WIDE = "wide"       # value follows in `width` bytes


@dataclass(frozen=True, slots=True)
class LengthPrefix:
    """Decoded meaning of a length-coded integer's lead byte."""
    kind: PrefixKind
    value: int = 0      # INLINE only
    width: int = 0      # WIDE only


def classify_lead_byte(lead: int) -> LengthPrefix:
    """Classify a lead byte, raising InvalidEncoding on the reserved value."""
    if not 0 <= lead <= 0xFF:
        raise ValueError(f"Lead byte must be in 0..255, got {lead}")
    if lead <= MAX_INLINE:
        return LengthPrefix(PrefixKind.INLINE, value=lead)
    if lead == NULL_MARKER:
        return LengthPrefix(PrefixKind.NULL)
    width = _WIDE_WIDTHS.get(lead)
    if width is None:
        raise InvalidEncoding(lead)
    return LengthPrefix(PrefixKind.WIDE, width=width)


def encode_length_coded(value: int | None) -> bytes:
    """Return the shortest length-coded encoding of *value* (None → NULL)."""
    if value is None:
        return bytes([NULL_MARKER])
    if value < 0 or value >= 1 << 64:
        raise ValueError(f"Length-coded integers are unsigned 64-bit, got {value}")
    if value <= MAX_INLINE:
        return bytes([value])
    if value < 1 << 16:
        return b"\xfc" + value.to_bytes(2, "little")
    if value < 1 << 24:
        return b"\xfd" + value.to_bytes(3, "little")
    return b"\xfe" + value.to_bytes(8, "little")
