"""Decode a packet against a comma-separated field layout and print each field.

Usage:
    python -m scripts.dump_packet (--hex HEX | --file PATH) --fields LAYOUT
                                  [--quota N] [--big-endian]

Layout tokens:
    u<N>     unsigned int, N bytes        s<N>     signed int, N bytes
    sl<N>    signed long, N bytes         lci      length-coded int
    lcs      length-coded string          nts      null-terminated string
    str<N>   fixed-length string          bits<N>  bit column, N bits
    skip<N>  skip N bytes
"""

import argparse
import re
from pathlib import Path

from binwire.io.bounded_decoder import BoundedDecoder
from binwire.io.decoder_config import DecoderConfig
from binwire.io.exceptions import InvalidEncoding


_TOKEN_RE = re.compile(r"^(u|sl|s|str|bits|skip)(\d+)$|^(lci|lcs|nts)$")


def parse_layout(layout: str) -> list[tuple[str, int]]:
    """Split a layout string into (kind, size) pairs. Size is 0 for sizeless kinds."""
    fields: list[tuple[str, int]] = []
    for token in (t.strip() for t in layout.split(",")):
        if not token:
            continue
        m = _TOKEN_RE.match(token)
        if m is None:
            raise ValueError(f"Unknown field token {token!r}")
        if m.group(3):
            fields.append((m.group(3), 0))
        else:
            fields.append((m.group(1), int(m.group(2))))
    return fields


def decode_field(decoder: BoundedDecoder, kind: str, size: int, big_endian: bool = False):
    """Decode one field; returns the value (None for skip and NULL values)."""
    if kind == "u":
        return decoder.unsigned_int(size, little_endian=not big_endian)
    if kind == "s":
        return decoder.signed_int(size)
    if kind == "sl":
        return decoder.signed_long(size)
    if kind == "lci":
        return decoder.length_coded_int()
    if kind == "lcs":
        return decoder.length_coded_string()
    if kind == "nts":
        return decoder.null_terminated_string()
    if kind == "str":
        return decoder.fixed_string(size)
    if kind == "bits":
        return decoder.read_bits(size, little_endian=not big_endian)
    if kind == "skip":
        decoder.skip(size)
        return None
    raise ValueError(f"Unknown field kind {kind!r}")


def format_value(value) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, int):
        return f"{value} (0x{value & 0xFFFF_FFFF_FFFF_FFFF:X})"
    if hasattr(value, "text"):
        return repr(value.text())
    return str(value)


def _label(kind: str, size: int) -> str:
    return f"{kind}{size}" if size else kind


def main():
    parser = argparse.ArgumentParser(description="Decode wire fields from a packet")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--hex", help="Packet bytes as hex (spaces allowed)")
    source.add_argument("--file", type=Path, help="Read packet bytes from a file")
    parser.add_argument("--fields", required=True,
                        help="Comma-separated layout, e.g. 'u2,lcs,nts,bits12'")
    parser.add_argument("--quota", type=int, default=0,
                        help="Arm a read quota of N bytes before decoding (0 = none)")
    parser.add_argument("--big-endian", action="store_true",
                        help="Read unsigned ints and bit columns big-endian")
    args = parser.parse_args()

    try:
        data = bytes.fromhex(args.hex) if args.hex is not None else args.file.read_bytes()
        fields = parse_layout(args.fields)
        decoder = BoundedDecoder.from_bytes(data, DecoderConfig())
        decoder.arm_quota(args.quota)
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}")
        raise SystemExit(1)

    for i, (kind, size) in enumerate(fields):
        try:
            value = decode_field(decoder, kind, size, big_endian=args.big_endian)
        except (ValueError, InvalidEncoding) as exc:
            print(f"Error: field {i} ({_label(kind, size)}): {exc}")
            raise SystemExit(1)
        if kind == "skip":
            continue
        print(f"{i:>3} | {_label(kind, size):<7} | {format_value(value)}")

    print(f"Remaining: {decoder.remaining} bytes")


if __name__ == "__main__":
    main()
