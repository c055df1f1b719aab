"""Conversion of the server's neutral shape characters into platform glyphs.

The server encodes box-drawing and block characters as plain ASCII letters
(for example ``r`` for a top-left corner and ``m`` for a full block). Each
display platform maps them onto its own character set; any character that is
not part of the mapping is passed through unchanged.
"""

from __future__ import annotations

from dataclasses import astuple, dataclass
from enum import Enum


class Platform(Enum):
    """Display platforms with their own character sets."""

    ATARI = "atari"
    APPLE2 = "apple2"
    C64 = "c64"
    PMD85 = "pmd85"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class BoxChars:
    """The line-drawing characters of one platform."""

    ulcorner: str
    urcorner: str
    llcorner: str
    lrcorner: str
    rtee: str
    ltee: str
    ttee: str
    btee: str
    vline: str
    hline: str
    cross: str

    @classmethod
    def from_codes(cls, *codes: int) -> "BoxChars":
        return cls(*(chr(code) for code in codes))


# Neutral characters for the box parts, in BoxChars field order.
_NEUTRAL_BOX = ("r", ")", "L", "!", "J", "t", "T", "2", "|", "-", "+")
# The C64 receives the same letters case-shifted into PETSCII codes.
_C64_NEUTRAL_BOX = tuple(
    chr(code) for code in (0x52, 0x29, 0x6C, 0x21, 0x27, 0x54, 0x74, 0x32, 0x7C, 0x2D, 0x2B)
)

_ATASCII_BOX = BoxChars.from_codes(17, 5, 26, 3, 4, 1, 23, 24, 124, 18, 19)

_BOX_CHARS: dict[Platform, BoxChars] = {
    Platform.ATARI: _ATASCII_BOX,
    Platform.PMD85: _ATASCII_BOX,
    Platform.APPLE2: BoxChars.from_codes(
        0x5F, 0x20, 0xD4, 0xDF, 0xDF, 0xD4, 0x5F, 0xD4, 0xDF, 0x5F, 0xD4
    ),
    Platform.C64: BoxChars.from_codes(
        0xB0, 0xAE, 0xAD, 0xBD, 0xB3, 0xAB, 0xB2, 0xB1, 0xDD, 0xC0, 0xDB
    ),
    Platform.TERMINAL: BoxChars("┌", "┐", "└", "┘", "┤", "├", "┬", "┴", "│", "─", "┼"),
}


def _table(keys: tuple[str, ...], box: BoxChars, extra: dict[str, int]) -> dict[str, str]:
    table = dict(zip(keys, astuple(box)))
    table.update({key: chr(code) for key, code in extra.items()})
    return table


_TABLES: dict[Platform, dict[str, str]] = {
    Platform.ATARI: _table(
        _NEUTRAL_BOX,
        _BOX_CHARS[Platform.ATARI],
        {
            "a": 25, "b": 25 + 128,
            "c": 21, "d": 21 + 128,
            "e": 15, "f": 9, "g": 12, "h": 11,
            "i": 15 + 128, "j": 9 + 128, "k": 12 + 128, "l": 11 + 128,
            "m": 32 + 128,
            "/": 6, "\\": 7,
        },
    ),
    Platform.APPLE2: _table(
        _NEUTRAL_BOX,
        _BOX_CHARS[Platform.APPLE2],
        {
            "a": 0xDF, "b": 0xDA,
            "c": 0x5F, "d": 0xCC,
            "e": 0xDB, "f": 0xDB, "g": 0xDB, "h": 0xDB,
            "i": 0xDD, "j": 0xDD, "k": 0xDD, "l": 0xDD,
            "m": 0xD6,
        },
    ),
    Platform.C64: _table(
        _C64_NEUTRAL_BOX,
        _BOX_CHARS[Platform.C64],
        {
            "\x41": 0xA1, "\x42": 0xA1,
            "\x43": 0xA2, "\x44": 0xA2,
            "\x45": 0xBB, "\x46": 0xAC, "\x47": 0xBE, "\x48": 0xBC,
            "\x49": 0xBB, "\x4a": 0xAC, "\x4b": 0xBE, "\x4c": 0xBC,
            "\x4d": 0xA6,
            "\x4e": 0xBF, "\x50": 0xBF,
            "\x5c": 0xBF,
        },
    ),
    Platform.PMD85: _table(
        _NEUTRAL_BOX,
        _BOX_CHARS[Platform.PMD85],
        {
            "a": 25, "b": 121,
            "c": 21, "d": 117,
            "e": 15, "f": 9, "g": 12, "h": 11,
            "i": 111, "j": 105, "k": 108, "l": 107,
            "m": 125,
            "n": 99, "p": 101,
            "/": 6, "\\": 7,
        },
    ),
    Platform.TERMINAL: {
        **dict(zip(_NEUTRAL_BOX, astuple(_BOX_CHARS[Platform.TERMINAL]))),
        **dict(zip("abcdefghijklmnp", "▌▐▄▀▖▗▘▝▜▛▟▙█▚▞")),
    },
}


def convert_chars(data: bytes | str, platform: Platform = Platform.TERMINAL) -> str:
    """Return *data* with neutral characters replaced by *platform* glyphs."""
    text = data.decode("latin-1") if isinstance(data, (bytes, bytearray)) else data
    table = _TABLES[platform]
    return "".join(table.get(ch, ch) for ch in text)


def box_chars(platform: Platform = Platform.TERMINAL) -> BoxChars:
    """Return the line-drawing characters used on *platform*."""
    return _BOX_CHARS[platform]