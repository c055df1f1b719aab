"""A character-cell text screen with a cursor and reverse video."""

from __future__ import annotations

from itertools import groupby

SCREEN_WIDTH = 40
SCREEN_HEIGHT = 24

_REVERSE_ON = "\x1b[7m"
_REVERSE_OFF = "\x1b[0m"


class Screen:
    """A fixed-size text screen addressed by column and row."""

    hline_char = "─"

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("screen dimensions must be positive")
        self.width = width
        self.height = height
        self._reverse = False
        self._x = 0
        self._y = 0
        self._chars: list[list[str]] = []
        self._reversed: list[list[bool]] = []
        self.clear()

    def clear(self) -> None:
        """Blank the whole screen and home the cursor."""
        self._chars = [[" "] * self.width for _ in range(self.height)]
        self._reversed = [[False] * self.width for _ in range(self.height)]
        self._x = self._y = 0

    def clear_rows(self, start: int, stop: int) -> None:
        """Blank rows ``start`` up to, not including, ``stop``."""
        for y in range(max(start, 0), min(stop, self.height)):
            self._chars[y] = [" "] * self.width
            self._reversed[y] = [False] * self.width

    def gotoxy(self, x: int, y: int) -> None:
        if x < 0 or y < 0:
            raise ValueError("cursor position must not be negative")
        self._x, self._y = x, y

    def gotox(self, x: int) -> None:
        if x < 0:
            raise ValueError("cursor position must not be negative")
        self._x = x

    def wherex(self) -> int:
        return self._x

    def wherey(self) -> int:
        return self._y

    def set_reverse(self, on: bool) -> bool:
        """Switch reverse video; return the previous setting."""
        previous = self._reverse
        self._reverse = bool(on)
        return previous

    def putc(self, c: str | int) -> None:
        """Write one character at the cursor and advance it."""
        if isinstance(c, int):
            c = chr(c)
        if len(c) != 1:
            raise ValueError("putc takes exactly one character")
        if self._x >= self.width:
            self._x = 0
        if self._y >= self.height:
            self._y = 0
        self._chars[self._y][self._x] = c
        self._reversed[self._y][self._x] = self._reverse
        self._x += 1

    def puts(self, s: str) -> None:
        for c in s:
            self.putc(c)

    def putcxy(self, x: int, y: int, c: str | int) -> None:
        self.gotoxy(x, y)
        self.putc(c)

    def putsxy(self, x: int, y: int, s: str) -> None:
        self.gotoxy(x, y)
        self.puts(s)

    def hline(self, x: int, y: int, length: int) -> None:
        """Draw a horizontal line of *length* characters from (x, y)."""
        self.gotoxy(x, y)
        self.puts(self.hline_char * length)

    def row(self, y: int) -> str:
        """Return the plain text of row *y*."""
        return "".join(self._chars[y])

    def render(self) -> str:
        """Return the screen as text, with reverse runs in ANSI reverse video."""
        lines = []
        for chars, flags in zip(self._chars, self._reversed):
            parts = []
            for reversed_run, cells in groupby(zip(chars, flags), key=lambda cell: cell[1]):
                text = "".join(ch for ch, _ in cells)
                parts.append(f"{_REVERSE_ON}{text}{_REVERSE_OFF}" if reversed_run else text)
            lines.append("".join(parts))
        return "\n".join(lines)