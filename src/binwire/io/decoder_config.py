"""Configuration knobs for the bounded decoder.

Defaults match the MySQL client/server wire format: little-endian integers,
32-bit ints and 64-bit longs as the sign-extension targets.
"""

from dataclasses import dataclass


@dataclass(slots=True)
class DecoderConfig:
    """Tuneable parameters that the wire format leaves to the caller."""

    little_endian: bool = True   # default byte order for unsigned_int
    int_bits: int = 32           # native width for signed_int
    long_bits: int = 64          # native width for signed_long
    charset: str = "utf-8"       # used when a StringColumn is rendered with str()

    def __post_init__(self) -> None:
        for name in ("int_bits", "long_bits"):
            bits = getattr(self, name)
            if bits <= 0 or bits % 8:
                raise ValueError(f"{name} must be a positive multiple of 8, got {bits}")
        if self.int_bits > self.long_bits:
            raise ValueError("int_bits must be <= long_bits")
