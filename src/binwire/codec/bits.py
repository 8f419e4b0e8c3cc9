"""Pure bit-manipulation helpers shared by the decoder.

Nothing here touches decoder state; every function works on a byte slice
and a width so it can be tested on its own.
"""

MAX_INT_BYTES = 8


def check_width(length: int, max_bytes: int = MAX_INT_BYTES) -> None:
    """Raise ValueError unless 1 <= length <= max_bytes."""
    if not 1 <= length <= max_bytes:
        raise ValueError(f"Integer width must be between 1 and {max_bytes} bytes, got {length}")


def byte_count_for_bits(bit_length: int) -> int:
    """Number of whole bytes needed to hold *bit_length* bits."""
    if bit_length < 0:
        raise ValueError(f"Bit length must be non-negative, got {bit_length}")
    return (bit_length + 7) >> 3


def assemble_unsigned(data: bytes, little_endian: bool = True) -> int:
    """Combine *data* into an unsigned magnitude.

    Little-endian puts byte i at bit offset 8*i; big-endian shifts each
    byte in from the right.
    """
    result = 0
    if little_endian:
        for i, b in enumerate(data):
            result |= b << (i << 3)
    else:
        for b in data:
            result = (result << 8) | b
    return result


def sign_extend(value: int, bits: int) -> int:
    """Interpret the low *bits* of *value* as a two's-complement integer."""
    mask = (1 << bits) - 1
    value &= mask
    if value & (1 << (bits - 1)):
        return value - (1 << bits)
    return value


def to_signed(data: bytes, native_bits: int) -> int:
    """Little-endian assembly with sign extension to *native_bits*.

    When the high bit of the last byte is set, every byte above len(data)
    up to native_bits is filled with ones, so the result equals
    assemble_unsigned(data) - 2 ** (8 * len(data)).
    """
    width = len(data) << 3
    if width > native_bits:
        raise ValueError(f"{len(data)} bytes do not fit in a {native_bits}-bit integer")
    value = assemble_unsigned(data)
    if data and data[-1] & 0x80:
        value |= ((1 << native_bits) - 1) ^ ((1 << width) - 1)
    return sign_extend(value, native_bits)


def to_big_endian(data: bytes) -> bytes:
    """Reverse the byte order of a little-endian byte string."""
    return bytes(reversed(data))
