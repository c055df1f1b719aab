"""Hex dump of byte strings, eight bytes per line."""

from __future__ import annotations

_BYTES_PER_LINE = 8


def _printable(byte: int) -> str:
    return chr(byte) if 0x20 <= byte < 0x7F else "."


def hex_dump(data: bytes) -> str:
    """Return a hex dump of *data*: hex bytes, padding, then ``| ascii``."""
    lines = []
    for start in range(0, len(data), _BYTES_PER_LINE):
        chunk = data[start:start + _BYTES_PER_LINE]
        hex_part = "".join(f"{byte:02x} " for byte in chunk)
        padding = "   " * (_BYTES_PER_LINE - len(chunk))
        ascii_part = "".join(_printable(byte) for byte in chunk)
        lines.append(f"{hex_part}{padding} | {ascii_part}\n")
    return "".join(lines)