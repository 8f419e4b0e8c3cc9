"""Column value types produced by the decoder."""

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StringColumn:
    """Raw bytes of a decoded string. No charset conversion happens on read."""
    value: bytes
    charset: str = "utf-8"   # only used by __str__

    def __len__(self) -> int:
        return len(self.value)

    def __bytes__(self) -> bytes:
        return self.value

    def __str__(self) -> str:
        return self.text(self.charset)

    def text(self, charset: str = "utf-8") -> str:
        return self.value.decode(charset, errors="replace")


@dataclass(frozen=True, slots=True)
class BitColumn:
    """A fixed number of significant bits packed into whole bytes.

    Bit i lives in byte i // 8 at position i % 8. Padding bits in the last
    byte are stored but ignored by every accessor.
    """
    length: int      # significant bits
    data: bytes      # ceil(length / 8) bytes, least significant byte first

    def __post_init__(self) -> None:
        if self.length < 0:
            raise ValueError(f"Bit length must be non-negative, got {self.length}")
        needed = (self.length + 7) >> 3
        if len(self.data) != needed:
            raise ValueError(
                f"{self.length} bits need {needed} bytes, got {len(self.data)}"
            )

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[bool]:
        for i in range(self.length):
            yield self.get(i)

    def __str__(self) -> str:
        # Most significant bit first, like a binary literal.
        return "".join("1" if self.get(i) else "0" for i in reversed(range(self.length)))

    def get(self, index: int) -> bool:
        if not 0 <= index < self.length:
            raise IndexError(f"Bit index {index} out of range for {self.length} bits")
        return bool(self.data[index >> 3] & (1 << (index & 7)))

    @property
    def value(self) -> int:
        """The significant bits as an unsigned integer."""
        return int.from_bytes(self.data, "little") & ((1 << self.length) - 1)
