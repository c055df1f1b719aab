"""Word-wrapped broadcast message box drawn over the playfield."""

from __future__ import annotations

from collections.abc import Iterator

from bwclient.charmap import BoxChars
from bwclient.screen import Screen

BROADCAST_WIDTH = 22
_START_ROW = 4


def _words(message: str, width: int) -> Iterator[str]:
    """Yield the space-separated words of *message*, none wider than *width*."""
    for word in message.split(" "):
        while len(word) > width:
            yield word[:width]
            word = word[width:]
        if word:
            yield word


def wrap_message(message: str, width: int = BROADCAST_WIDTH) -> list[str]:
    """Greedily wrap *message* into lines of exactly *width* characters.

    Words are separated by spaces; runs of spaces collapse to one. A word
    longer than *width* is split across lines. Each line is padded with
    spaces to *width*.
    """
    if width <= 0:
        raise ValueError("width must be positive")
    lines: list[str] = []
    current = ""
    for word in _words(message, width):
        if current and len(current) + 1 + len(word) > width:
            lines.append(current.ljust(width))
            current = word
        else:
            current = f"{current} {word}" if current else word
    if current:
        lines.append(current.ljust(width))
    return lines


def draw_broadcast(screen: Screen, message: str, box: BoxChars) -> None:
    """Draw *message* in a bordered box centred near the top of *screen*."""
    start_col = max(0, (screen.width - BROADCAST_WIDTH) // 2 - 1)
    row = _START_ROW
    screen.putsxy(start_col, row, box.ulcorner + box.hline * BROADCAST_WIDTH + box.urcorner)
    for line in wrap_message(message, BROADCAST_WIDTH):
        row += 1
        screen.putsxy(start_col, row, box.vline + line + box.vline)
    screen.putsxy(start_col, row + 1, box.llcorner + box.hline * BROADCAST_WIDTH + box.lrcorner)